"""Conversion between geostruct objects and trees of builtin types.

The builtin tree is what `msgspec.json.decode` (or `yaml.safe_load`) returns
without a type: dicts, lists, str, int, float, bool and None. Decoding
accumulates every structural error, encoding is total.
"""
from __future__ import annotations

import builtins
from typing import Any, Callable, Dict, Type, Union

from ._result import Result, Success, combine, fail, located, traverse
from .crs import CRS, DEFAULT_CRS, NO_CRS, Default, Linked, Named, NoCRS
from .errors import (
    InvalidIdentifierType,
    MalformedCoordinates,
    MalformedCRSProperties,
    MissingRequiredField,
    UnknownGeometryType,
    UnrecognizedCRSType,
    WrongFieldType,
)
from .feature import Feature, FeatureCollection, is_identifier
from .geometry import (
    GEOMETRY_TYPES,
    Geometry,
    GeometryCollection,
    Line,
    MultiLine,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    is_coordinate,
)
from .linestring import LineString, make_line_string, make_linear_ring

__all__ = ("GeoJSON", "convert", "to_builtins")

# A union of every top-level GeoJSON object type
GeoJSON = Union[Geometry, Feature, FeatureCollection]


class _MissingType:
    def __repr__(self):
        return "MISSING"


_MISSING = _MissingType()


def _tag_name(obj):
    return obj if isinstance(obj, str) else repr(obj)


###########################################################################
# Decoding                                                                #
###########################################################################


def _decode_position(obj):
    if isinstance(obj, list) and 2 <= len(obj) <= 4 and all(map(is_coordinate, obj)):
        return Success(tuple(float(x) for x in obj))
    return fail(MalformedCoordinates(expected="a position (an array of 2 to 4 finite numbers)"))


def _decode_positions(obj):
    if not isinstance(obj, list):
        return fail(MalformedCoordinates(expected="an array of positions"))
    return traverse(_decode_position, obj)


def _decode_line(obj):
    # Length checks only run once every position parsed
    return _decode_positions(obj).bind(make_line_string)


def _decode_ring(obj):
    return _decode_positions(obj).bind(make_linear_ring)


def _decode_array_of(decode, expected):
    def inner(obj):
        if not isinstance(obj, list):
            return fail(MalformedCoordinates(expected=expected))
        return traverse(decode, obj)

    return inner


_decode_lines = _decode_array_of(_decode_line, "an array of line strings")
_decode_rings = _decode_array_of(_decode_ring, "an array of linear rings")
_decode_polygons = _decode_array_of(_decode_rings, "an array of polygons")

_COORDINATE_DECODERS: Dict[Type[Geometry], Callable[[Any], Result[Any]]] = {
    Point: _decode_position,
    MultiPoint: _decode_positions,
    Line: _decode_line,
    MultiLine: _decode_lines,
    Polygon: _decode_rings,
    MultiPolygon: _decode_polygons,
}


def _decode_bbox(obj):
    if obj is None:
        return Success(None)
    if (
        isinstance(obj, list)
        and len(obj) >= 4
        and len(obj) % 2 == 0
        and all(map(is_coordinate, obj))
    ):
        return Success(tuple(float(x) for x in obj))
    return fail(
        WrongFieldType(name="bbox", expected="array of 4 or more numbers, even length").at(
            "bbox"
        )
    )


def _decode_crs_properties(tag, props):
    if props is _MISSING:
        return fail(MalformedCRSProperties(reason="missing `properties`"))
    if not isinstance(props, dict):
        reason = "`properties` must be an object"
        return fail(MalformedCRSProperties(reason=reason).at("properties"))

    def string_member(key, required):
        if key not in props and not required:
            return Success(None)
        value = props.get(key)
        if isinstance(value, str):
            return Success(value)
        reason = f"`{key}` must be a string" if key in props else f"missing `{key}`"
        return fail(MalformedCRSProperties(reason=reason).at("properties"))

    if tag == "name":
        return string_member("name", True).map(Named)
    return combine(Linked, string_member("href", True), string_member("type", False))


def _decode_crs(obj) -> Result[CRS]:
    if obj is _MISSING:
        return Success(DEFAULT_CRS)
    if obj is None:
        return Success(NO_CRS)
    if not isinstance(obj, dict):
        return fail(WrongFieldType(name="crs", expected="object"))
    tag = obj.get("type", _MISSING)
    if tag is _MISSING:
        return fail(MissingRequiredField(name="type"))
    if tag not in ("name", "link"):
        return fail(UnrecognizedCRSType(type=_tag_name(tag)).at("type"))
    return _decode_crs_properties(tag, obj.get("properties", _MISSING))


def _decode_geometries(obj):
    geometries = obj.get("geometries", _MISSING)
    if geometries is _MISSING:
        return fail(MissingRequiredField(name="geometries"))
    if not isinstance(geometries, list):
        return fail(WrongFieldType(name="geometries", expected="array").at("geometries"))
    return located(
        traverse(lambda g: _decode_geometry(g, "geometries"), geometries), "geometries"
    )


def _decode_geometry(obj, name="geometry") -> Result[Geometry]:
    if not isinstance(obj, dict):
        return fail(WrongFieldType(name=name, expected="object"))

    tag = obj.get("type", _MISSING)
    if tag is _MISSING:
        kind = fail(MissingRequiredField(name="type"))
    elif isinstance(tag, str) and tag in GEOMETRY_TYPES:
        kind = Success(GEOMETRY_TYPES[tag])
    else:
        kind = fail(UnknownGeometryType(type=_tag_name(tag)).at("type"))

    bbox = _decode_bbox(obj.get("bbox"))
    crs = located(_decode_crs(obj.get("crs", _MISSING)), "crs")

    if not kind.ok:
        # Nothing to decode the payload as, but still report bbox/crs errors
        return combine(lambda *_: None, kind, bbox, crs)

    cls = kind.value
    if cls is GeometryCollection:
        payload = _decode_geometries(obj)
    else:
        coordinates = obj.get("coordinates", _MISSING)
        if coordinates is _MISSING:
            payload = fail(MissingRequiredField(name="coordinates"))
        else:
            payload = located(_COORDINATE_DECODERS[cls](coordinates), "coordinates")

    return combine(lambda p, b, c: cls(p, bbox=b, crs=c), payload, bbox, crs)


def _expect_tag(obj, tag):
    value = obj.get("type", _MISSING)
    if value is _MISSING:
        return fail(MissingRequiredField(name="type"))
    if value != tag:
        return fail(WrongFieldType(name="type", expected=tag).at("type"))
    return Success(tag)


def _decode_optional_geometry(obj):
    if obj is None:
        return Success(None)
    return located(_decode_geometry(obj), "geometry")


def _decode_properties(obj):
    if obj is None:
        return Success({})
    if not isinstance(obj, dict):
        return fail(WrongFieldType(name="properties", expected="object").at("properties"))
    return Success(obj)


def _decode_id(obj):
    if is_identifier(obj):
        return Success(obj)
    return fail(InvalidIdentifierType().at("id"))


def _decode_feature(obj, name="feature") -> Result[Feature]:
    if not isinstance(obj, dict):
        return fail(WrongFieldType(name=name, expected="object"))
    return combine(
        lambda _, geometry, properties, id, bbox, crs: Feature(
            geometry=geometry, properties=properties, id=id, bbox=bbox, crs=crs
        ),
        _expect_tag(obj, "Feature"),
        _decode_optional_geometry(obj.get("geometry")),
        _decode_properties(obj.get("properties")),
        _decode_id(obj.get("id")),
        _decode_bbox(obj.get("bbox")),
        located(_decode_crs(obj.get("crs", _MISSING)), "crs"),
    )


def _decode_features(obj):
    features = obj.get("features", _MISSING)
    if features is _MISSING:
        return fail(MissingRequiredField(name="features"))
    if not isinstance(features, list):
        return fail(WrongFieldType(name="features", expected="array").at("features"))
    return located(traverse(lambda f: _decode_feature(f, "features"), features), "features")


def _decode_feature_collection(obj) -> Result[FeatureCollection]:
    if not isinstance(obj, dict):
        return fail(WrongFieldType(name="feature collection", expected="object"))
    return combine(
        lambda _, features, bbox, crs: FeatureCollection(
            features=features, bbox=bbox, crs=crs
        ),
        _expect_tag(obj, "FeatureCollection"),
        _decode_features(obj),
        _decode_bbox(obj.get("bbox")),
        located(_decode_crs(obj.get("crs", _MISSING)), "crs"),
    )


def _decode_geojson(obj):
    if isinstance(obj, dict):
        tag = obj.get("type")
        if tag == "Feature":
            return _decode_feature(obj)
        elif tag == "FeatureCollection":
            return _decode_feature_collection(obj)
    return _decode_geometry(obj, "GeoJSON")


def convert(obj: Any, type: Any = GeoJSON) -> Result[Any]:
    """Convert a tree of builtin types into a geostruct object.

    Parameters
    ----------
    obj : Any
        The decoded JSON tree (dicts, lists, strings, numbers, bools, None).
    type : type, optional
        The type to decode as. One of `GeoJSON` (the default, dispatching on
        the ``type`` member), `Geometry`, a single geometry class such as
        `Polygon`, `Feature`, or `FeatureCollection`.

    Returns
    -------
    result : Result
        `Success` holding the decoded object, or `Failure` holding every
        structural error found, in document order.
    """
    if type == GeoJSON:
        return _decode_geojson(obj)
    if type is Feature:
        return _decode_feature(obj)
    if type is FeatureCollection:
        return _decode_feature_collection(obj)
    if type is Geometry:
        return _decode_geometry(obj)
    if isinstance(type, builtins.type) and issubclass(type, Geometry):
        tag = type.__struct_config__.tag
        other = obj.get("type") if isinstance(obj, dict) else None
        if isinstance(other, str) and other != tag and other in GEOMETRY_TYPES:
            return fail(WrongFieldType(name="type", expected=tag).at("type"))
        return _decode_geometry(obj)
    raise TypeError(f"Decoding as type {type!r} is unsupported")


###########################################################################
# Encoding                                                                #
###########################################################################


def _encode_position(position):
    return list(position)


def _encode_line(line):
    return [_encode_position(p) for p in line]


def _encode_polygon(rings):
    return [_encode_line(r) for r in rings]


_COORDINATE_ENCODERS = {
    Point: _encode_position,
    MultiPoint: _encode_line,
    Line: _encode_line,
    MultiLine: _encode_polygon,
    Polygon: _encode_polygon,
    MultiPolygon: lambda polygons: [_encode_polygon(p) for p in polygons],
}


def _encode_crs(crs):
    if isinstance(crs, Default):
        return _MISSING
    if isinstance(crs, NoCRS):
        return None
    if isinstance(crs, Named):
        return {"type": "name", "properties": {"name": crs.name}}
    props = {"href": crs.href}
    if crs.type is not None:
        props["type"] = crs.type
    return {"type": "link", "properties": props}


def _encode_common(out, obj):
    if obj.bbox is not None:
        out["bbox"] = list(obj.bbox)
    crs = _encode_crs(obj.crs)
    if crs is not _MISSING:
        out["crs"] = crs
    return out


def _encode_geometry(geometry):
    cls = type(geometry)
    out = {"type": cls.__struct_config__.tag}
    if cls is GeometryCollection:
        out["geometries"] = [_encode_geometry(g) for g in geometry.geometries]
    else:
        out["coordinates"] = _COORDINATE_ENCODERS[cls](geometry.coordinates)
    return _encode_common(out, geometry)


def _encode_feature(feature):
    out = {"type": "Feature"}
    if feature.id is not None:
        out["id"] = feature.id
    out["geometry"] = (
        None if feature.geometry is None else _encode_geometry(feature.geometry)
    )
    out["properties"] = dict(feature.properties)
    return _encode_common(out, feature)


def _encode_feature_collection(collection):
    out = {
        "type": "FeatureCollection",
        "features": [_encode_feature(f) for f in collection.features],
    }
    return _encode_common(out, collection)


def to_builtins(obj: Any) -> Any:
    """Convert a geostruct object into a tree of builtin types.

    The output is suitable for any JSON (or YAML) encoder. A default CRS is
    left out, a `NoCRS` is written as ``null``. This never fails for a
    geostruct object.

    Parameters
    ----------
    obj : Geometry, Feature, FeatureCollection, or LineString
        The object to convert.

    Returns
    -------
    tree : dict or list
    """
    if isinstance(obj, Geometry):
        return _encode_geometry(obj)
    if isinstance(obj, Feature):
        return _encode_feature(obj)
    if isinstance(obj, FeatureCollection):
        return _encode_feature_collection(obj)
    if isinstance(obj, LineString):
        return _encode_line(obj)
    raise TypeError(f"Encoding objects of type {type(obj).__name__} is unsupported")
