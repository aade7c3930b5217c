from typing import Any, Union

from ._codec import GeoJSON as _GeoJSON, convert as _convert, to_builtins as _to_builtins
from .errors import DecodeError as _DecodeError

__all__ = ("encode", "decode")


def __dir__():
    return __all__


def _import_pyyaml(name):
    try:
        import yaml
    except ImportError:
        raise ImportError(
            f"`geostruct.yaml.{name}` requires PyYAML be installed.\n\n"
            "Please either `pip` or `conda` install it as follows:\n\n"
            "  $ python -m pip install pyyaml  # using pip\n"
            "  $ conda install pyyaml          # or using conda"
        ) from None
    else:
        return yaml


def encode(obj: Any) -> bytes:
    """Serialize a geostruct object as YAML.

    Parameters
    ----------
    obj : Geometry, Feature, or FeatureCollection
        The object to serialize.

    Returns
    -------
    data : bytes
        The serialized object.

    Notes
    -----
    This function requires that the third-party `PyYAML library
    <https://pyyaml.org/>`_ is installed.

    See Also
    --------
    decode
    """
    yaml = _import_pyyaml("encode")
    # Use the C extension if available
    Dumper = getattr(yaml, "CSafeDumper", yaml.SafeDumper)

    return yaml.dump_all(
        [_to_builtins(obj)],
        encoding="utf-8",
        Dumper=Dumper,
        allow_unicode=True,
        sort_keys=False,
    )


def decode(buf: Union[bytes, str], *, type: Any = _GeoJSON) -> Any:
    """Deserialize a GeoJSON object from YAML.

    Parameters
    ----------
    buf : bytes-like or str
        The message to decode.
    type : type, optional
        The type to decode as, see `geostruct.convert`. Defaults to `GeoJSON`.

    Returns
    -------
    obj : Any
        The deserialized object.

    Raises
    ------
    DecodeError
        If ``buf`` isn't valid YAML.
    ValidationError
        If the document isn't valid GeoJSON.

    Notes
    -----
    This function requires that the third-party `PyYAML library
    <https://pyyaml.org/>`_ is installed.

    See Also
    --------
    encode
    """
    yaml = _import_pyyaml("decode")
    # Use the C extension if available
    Loader = getattr(yaml, "CSafeLoader", yaml.SafeLoader)
    if not isinstance(buf, (str, bytes)):
        # call `memoryview` first, since `bytes(1)` is actually valid
        buf = bytes(memoryview(buf))
    try:
        obj = yaml.load(buf, Loader)
    except yaml.YAMLError as exc:
        raise _DecodeError(str(exc)) from None

    return _convert(obj, type).unwrap()
