"""Coordinate reference systems, as in the 2008 GeoJSON ``crs`` member.

RFC 7946 dropped ``crs`` in favor of always using WGS84, which is what
`DEFAULT_CRS` means. A document without a ``crs`` member decodes to
`DEFAULT_CRS`, and `DEFAULT_CRS` is never written back out.
"""
from typing import Optional, Union

import msgspec

__all__ = ("CRS", "Default", "NoCRS", "Named", "Linked", "DEFAULT_CRS", "NO_CRS")


class CRS(msgspec.Struct, frozen=True):
    """Base class of all CRS variants"""


class Default(CRS):
    """The implicit WGS84 reference system, absent on the wire"""


class NoCRS(CRS):
    """An explicit ``"crs": null``, meaning no CRS can be assumed"""


class Named(CRS):
    """A CRS identified by name, e.g. ``urn:ogc:def:crs:OGC:1.3:CRS84``"""

    name: str

    def __post_init__(self):
        if not isinstance(self.name, str):
            raise TypeError(f"`name` must be a str, got {type(self.name).__name__}")


class Linked(CRS):
    """A CRS described by a linked resource.

    Parameters
    ----------
    href : str
        The URI of the CRS definition.
    type : str, optional
        A hint about the format of the linked resource, e.g. ``"proj4"``.
        ``None`` means the member is absent on the wire; an explicit ``null``
        is rejected when decoding.
    """

    href: str
    type: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.href, str):
            raise TypeError(f"`href` must be a str, got {type(self.href).__name__}")
        if self.type is not None and not isinstance(self.type, str):
            name = type(self.type).__name__
            raise TypeError(f"`type` must be a str or None, got {name}")


DEFAULT_CRS = Default()
NO_CRS = NoCRS()

CRSType = Union[Default, NoCRS, Named, Linked]
