"""The seven GeoJSON geometry types.

Every geometry is a frozen `msgspec.Struct` tagged on the wire by its ``type``
member. The Python class names of the line based variants differ from their
wire tags (`Line` is ``"LineString"``, `MultiLine` is ``"MultiLineString"``)
so they don't shadow the `LineString` container they hold.
"""
from __future__ import annotations

import math
from typing import Dict, Optional, Tuple, Type, Union

import msgspec

from .crs import CRS, DEFAULT_CRS
from .linestring import LinearRing, LineString

__all__ = (
    "Position",
    "BoundingBox",
    "Geometry",
    "Point",
    "MultiPoint",
    "Line",
    "MultiLine",
    "Polygon",
    "MultiPolygon",
    "GeometryCollection",
    "GEOMETRY_TYPES",
)

# (longitude, latitude[, elevation[, measure]])
Position = Tuple[float, ...]

# (min_0, ..., min_n, max_0, ..., max_n) with n in {2, 3}
BoundingBox = Tuple[float, ...]


def is_coordinate(obj) -> bool:
    """Whether ``obj`` is a number that survives conversion to a finite float"""
    if isinstance(obj, bool) or not isinstance(obj, (int, float)):
        return False
    try:
        return math.isfinite(obj)
    except OverflowError:
        return False


def is_position(obj) -> bool:
    return isinstance(obj, tuple) and 2 <= len(obj) <= 4 and all(map(is_coordinate, obj))


def is_bbox(obj) -> bool:
    return (
        isinstance(obj, tuple)
        and len(obj) >= 4
        and len(obj) % 2 == 0
        and all(map(is_coordinate, obj))
    )


def check_common(obj):
    if obj.bbox is not None and not is_bbox(obj.bbox):
        raise ValueError(
            "`bbox` must be a tuple of 4 or more finite numbers of even length, "
            f"got {obj.bbox!r}"
        )
    if not isinstance(obj.crs, CRS):
        raise TypeError(f"`crs` must be a CRS, got {type(obj.crs).__name__}")


def _check_tuple(value, name):
    if not isinstance(value, tuple):
        raise TypeError(f"`{name}` must be a tuple, got {type(value).__name__}")


def _check_position(value):
    if not is_position(value):
        raise ValueError(
            f"Expected a position (a tuple of 2 to 4 finite numbers), got {value!r}"
        )


def _check_container(value, cls):
    # Exact type, a LinearRing held where a LineString belongs decodes back unequal
    if type(value) is not cls:
        raise TypeError(
            f"Expected a `{cls.__name__}`, got {type(value).__name__}; "
            f"use `make_{'linear_ring' if cls is LinearRing else 'line_string'}`"
        )
    for position in value:
        _check_position(position)


def _check_rings(rings):
    _check_tuple(rings, "coordinates")
    for ring in rings:
        _check_container(ring, LinearRing)


class Geometry(msgspec.Struct, frozen=True, kw_only=True, tag_field="type"):
    """Base class of all geometry variants. Never instantiated directly.

    Every variant checks its payload on construction and raises `TypeError`
    or `ValueError` if it can't be encoded as valid GeoJSON.
    """

    bbox: Optional[BoundingBox] = None
    crs: CRS = DEFAULT_CRS

    def __post_init__(self):
        check_common(self)


class Point(Geometry, tag="Point"):
    coordinates: Position

    def __post_init__(self):
        super().__post_init__()
        _check_position(self.coordinates)


class MultiPoint(Geometry, tag="MultiPoint"):
    coordinates: Tuple[Position, ...] = ()

    def __post_init__(self):
        super().__post_init__()
        _check_tuple(self.coordinates, "coordinates")
        for position in self.coordinates:
            _check_position(position)


class Line(Geometry, tag="LineString"):
    coordinates: LineString[Position]

    def __post_init__(self):
        super().__post_init__()
        _check_container(self.coordinates, LineString)


class MultiLine(Geometry, tag="MultiLineString"):
    coordinates: Tuple[LineString[Position], ...] = ()

    def __post_init__(self):
        super().__post_init__()
        _check_tuple(self.coordinates, "coordinates")
        for line in self.coordinates:
            _check_container(line, LineString)


class Polygon(Geometry, tag="Polygon"):
    """A polygon. The first ring is the exterior, any others are holes."""

    coordinates: Tuple[LinearRing[Position], ...] = ()

    def __post_init__(self):
        super().__post_init__()
        _check_rings(self.coordinates)

    @property
    def exterior(self) -> Optional[LinearRing[Position]]:
        return self.coordinates[0] if self.coordinates else None

    @property
    def holes(self) -> Tuple[LinearRing[Position], ...]:
        return self.coordinates[1:]


class MultiPolygon(Geometry, tag="MultiPolygon"):
    coordinates: Tuple[Tuple[LinearRing[Position], ...], ...] = ()

    def __post_init__(self):
        super().__post_init__()
        _check_tuple(self.coordinates, "coordinates")
        for rings in self.coordinates:
            _check_rings(rings)


class GeometryCollection(Geometry, tag="GeometryCollection"):
    geometries: Tuple[Geometry, ...] = ()

    def __post_init__(self):
        super().__post_init__()
        _check_tuple(self.geometries, "geometries")
        for geometry in self.geometries:
            if not isinstance(geometry, Geometry):
                raise TypeError(f"Expected a `Geometry`, got {type(geometry).__name__}")


GeometryType = Union[
    Point, MultiPoint, Line, MultiLine, Polygon, MultiPolygon, GeometryCollection
]

GEOMETRY_TYPES: Dict[str, Type[Geometry]] = {
    cls.__struct_config__.tag: cls
    for cls in (Point, MultiPoint, Line, MultiLine, Polygon, MultiPolygon, GeometryCollection)
}
