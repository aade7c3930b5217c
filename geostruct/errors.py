"""Structural error values and the exceptions that carry them.

Decoders never raise on invalid documents, they return a `Failure` holding a
tuple of the error values defined here. Only the front ends (`geostruct.json`,
`geostruct.yaml`, `Result.unwrap`) turn a failure into a `ValidationError`.
"""
from __future__ import annotations

from typing import Tuple, Union

import msgspec

__all__ = (
    "GeoJSONError",
    "DecodeError",
    "ValidationError",
    "StructuralError",
    "EmptySequence",
    "SingletonSequence",
    "RingNotClosed",
    "RingTooShort",
    "UnknownGeometryType",
    "MalformedCoordinates",
    "UnrecognizedCRSType",
    "MalformedCRSProperties",
    "MissingRequiredField",
    "WrongFieldType",
    "InvalidIdentifierType",
)


PathItem = Union[str, int]


def format_path(path: Tuple[PathItem, ...]) -> str:
    """Render a path the way msgspec renders validation error locations.

    >>> format_path(("features", 0, "geometry"))
    '$.features[0].geometry'
    """
    parts = ["$"]
    for item in path:
        if isinstance(item, int):
            parts.append(f"[{item}]")
        else:
            parts.append(f".{item}")
    return "".join(parts)


class StructuralError(msgspec.Struct, frozen=True, kw_only=True, tag_field="kind", tag=True):
    """Base class for all structural errors.

    Parameters
    ----------
    path : tuple, optional
        The location of the offending value, as a sequence of member names
        and array indices starting at the document root.
    """

    path: Tuple[PathItem, ...] = ()

    @property
    def message(self) -> str:
        raise NotImplementedError

    def at(self, *prefix: PathItem) -> StructuralError:
        """Return a copy of this error located under ``prefix``."""
        return msgspec.structs.replace(self, path=prefix + self.path)

    def __str__(self):
        if self.path:
            return f"{self.message} - at `{format_path(self.path)}`"
        return self.message


class EmptySequence(StructuralError):
    @property
    def message(self):
        return "Expected at least 2 positions, got an empty array"


class SingletonSequence(StructuralError):
    @property
    def message(self):
        return "Expected at least 2 positions, got 1"


class RingNotClosed(StructuralError):
    @property
    def message(self):
        return "Linear ring is not closed, first and last positions differ"


class RingTooShort(StructuralError):
    length: int

    @property
    def message(self):
        return f"Linear ring needs at least 4 positions, got {self.length}"


class UnknownGeometryType(StructuralError):
    type: str

    @property
    def message(self):
        return f"Unknown geometry type {self.type!r}"


class MalformedCoordinates(StructuralError):
    expected: str

    @property
    def message(self):
        return f"Malformed coordinates, expected {self.expected}"


class UnrecognizedCRSType(StructuralError):
    type: str

    @property
    def message(self):
        return f"Unrecognized CRS type {self.type!r}, expected 'name' or 'link'"


class MalformedCRSProperties(StructuralError):
    reason: str

    @property
    def message(self):
        return f"Malformed CRS properties: {self.reason}"


class MissingRequiredField(StructuralError):
    name: str

    @property
    def message(self):
        return f"Object missing required field `{self.name}`"


class WrongFieldType(StructuralError):
    name: str
    expected: str

    @property
    def message(self):
        return f"Expected `{self.expected}` for field `{self.name}`"


class InvalidIdentifierType(StructuralError):
    @property
    def message(self):
        return "Feature `id` must be a string or a number"


class GeoJSONError(Exception):
    """Base class for all geostruct exceptions"""


class DecodeError(GeoJSONError):
    """Raised when the input can't be parsed into a JSON tree at all"""


class ValidationError(DecodeError):
    """Raised when a document is well-formed JSON but not valid GeoJSON.

    Parameters
    ----------
    errors : tuple of StructuralError
        Every structural error found in the document, in document order.
    """

    def __init__(self, errors):
        self.errors = tuple(errors)
        super().__init__("\n".join(str(e) for e in self.errors))
