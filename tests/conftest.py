import pytest

import geostruct

try:
    import yaml  # noqa
except ImportError:
    yaml = None


@pytest.fixture(params=["json", "yaml"])
def proto(request):
    if request.param == "json":
        return geostruct.json
    elif request.param == "yaml":
        if yaml is None:
            pytest.skip(reason="PyYAML is not installed")
        return geostruct.yaml
