from setuptools import setup

yaml_deps = ["pyyaml"]
test_deps = ["pytest", *yaml_deps]

extras_require = {
    "yaml": yaml_deps,
    "test": test_deps,
    "dev": ["pre-commit", "coverage", *test_deps],
}

setup(
    name="geostruct",
    version="0.1.0",
    description="Typed, validating GeoJSON structs built on msgspec",
    license="BSD",
    packages=["geostruct"],
    package_data={"geostruct": ["py.typed"]},
    install_requires=["msgspec>=0.18"],
    extras_require=extras_require,
    python_requires=">=3.9",
)
