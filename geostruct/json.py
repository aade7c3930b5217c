import logging
from typing import Any, Literal, Optional, Union

import msgspec

from ._codec import GeoJSON, convert, to_builtins
from ._result import Result
from .errors import DecodeError, ValidationError

__all__ = ("Encoder", "Decoder", "encode", "decode")

logger = logging.getLogger(__name__)


def __dir__():
    return __all__


class Encoder:
    """A GeoJSON encoder.

    Parameters
    ----------
    order : {None, 'deterministic', 'sorted'}, optional
        The ordering to use when encoding object members, passed through to
        `msgspec.json.Encoder`. The default keeps the order geostruct builds
        members in (``type`` first).
    """

    def __init__(self, *, order: Optional[Literal["deterministic", "sorted"]] = None):
        self.order = order
        self._encoder = msgspec.json.Encoder(order=order)

    def encode(self, obj: Any) -> bytes:
        """Serialize a geostruct object as GeoJSON.

        Never fails for a geostruct object, since every such object is valid
        by construction.
        """
        return self._encoder.encode(to_builtins(obj))


class Decoder:
    """A GeoJSON decoder.

    Parameters
    ----------
    type : type, optional
        The type to decode as, see `geostruct.convert`. Defaults to `GeoJSON`,
        which accepts any geometry, feature, or feature collection.
    """

    def __init__(self, type: Any = GeoJSON):
        self.type = type
        self._decoder = msgspec.json.Decoder()

    def _parse(self, buf):
        try:
            return self._decoder.decode(buf)
        except msgspec.DecodeError as exc:
            raise DecodeError(str(exc)) from None

    def validate(self, buf: Union[bytes, str]) -> Result[Any]:
        """Decode ``buf``, returning a `Result` instead of raising on invalid
        GeoJSON. Malformed JSON still raises `DecodeError`."""
        result = convert(self._parse(buf), self.type)
        if not result.ok:
            logger.debug("GeoJSON document failed validation with %d error(s)", len(result.errors))
        return result

    def decode(self, buf: Union[bytes, str]) -> Any:
        """Deserialize a GeoJSON document.

        Raises
        ------
        DecodeError
            If ``buf`` isn't valid JSON.
        ValidationError
            If ``buf`` is valid JSON but not valid GeoJSON. The exception's
            ``errors`` attribute holds every error found.
        """
        result = self.validate(buf)
        if not result.ok:
            raise ValidationError(result.errors)
        return result.value


def encode(obj: Any, *, order: Optional[Literal["deterministic", "sorted"]] = None) -> bytes:
    """Serialize a geostruct object as GeoJSON.

    See Also
    --------
    Encoder.encode
    """
    return Encoder(order=order).encode(obj)


def decode(buf: Union[bytes, str], *, type: Any = GeoJSON) -> Any:
    """Deserialize a GeoJSON document.

    See Also
    --------
    Decoder.decode
    """
    return Decoder(type).decode(buf)
