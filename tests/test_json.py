import logging

import msgspec
import pytest
from utils import HOLE, SQUARE, line

import geostruct
from geostruct import (
    NO_CRS,
    Feature,
    FeatureCollection,
    GeometryCollection,
    Line,
    Linked,
    MultiPolygon,
    Named,
    Point,
    Polygon,
    RingNotClosed,
    RingTooShort,
    SingletonSequence,
)

VALUES = [
    Point((102.0, 0.5)),
    Line(line((102, 0), (103, 1), (104, 0), (105, 1))),
    Polygon((SQUARE, HOLE), crs=Named("urn:ogc:def:crs:OGC:1.3:CRS84")),
    MultiPolygon(((SQUARE,),), bbox=(0.0, 0.0, 1.0, 1.0)),
    GeometryCollection((Point((1.0, 2.0)), GeometryCollection()), crs=NO_CRS),
    Feature(),
    Feature(geometry=Point((1.0, 2.0, 3.0)), properties={"prop0": "value0"}, id=1),
    FeatureCollection(),
    FeatureCollection(
        features=(
            Feature(geometry=Polygon((SQUARE,)), properties={"a": {"b": [1, None]}}, id="x"),
            Feature(id=2.5, crs=Linked("http://example.com/crs", "proj4")),
        ),
        bbox=(0.0, 0.0, 0.0, 1.0, 1.0, 1.0),
    ),
]


def test_module_dir():
    assert set(dir(geostruct.json)) == {"Encoder", "Decoder", "encode", "decode"}


@pytest.mark.parametrize("val", VALUES)
def test_roundtrip(val):
    msg = geostruct.json.encode(val)
    assert geostruct.json.decode(msg) == val


@pytest.mark.parametrize("val", VALUES)
def test_roundtrip_typed(val):
    typ = type(val)
    dec = geostruct.json.Decoder(typ)
    assert dec.decode(geostruct.json.encode(val)) == val


def test_decode_line_string_singleton():
    with pytest.raises(geostruct.ValidationError) as rec:
        geostruct.json.decode(b'{"type":"LineString","coordinates":[[1,2]]}')
    assert rec.value.errors == (SingletonSequence(path=("coordinates",)),)
    assert "Expected at least 2 positions, got 1 - at `$.coordinates`" in str(rec.value)


def test_decode_polygon():
    poly = geostruct.json.decode('{"type":"Polygon","coordinates":[[[0,0],[1,0],[1,1],[0,0]]]}')
    assert isinstance(poly, Polygon)
    assert len(poly.coordinates) == 1
    assert len(poly.exterior) == 4
    assert poly.exterior.head == poly.exterior.last


def test_decode_empty_feature_collection():
    fc = geostruct.json.decode(b'{"type":"FeatureCollection","features":[]}')
    assert fc == FeatureCollection()
    assert fc.crs is geostruct.DEFAULT_CRS
    assert fc.bbox is None


def test_decode_reports_all_errors_at_once():
    msg = b"""
    {
        "type": "Polygon",
        "coordinates": [
            [[0, 0], [1, 0], [1, 1], [0, 1]],
            [[0, 0], [1, 1], [0, 0]]
        ]
    }
    """
    with pytest.raises(geostruct.ValidationError) as rec:
        geostruct.json.decode(msg)
    assert rec.value.errors == (
        RingNotClosed(path=("coordinates", 0)),
        RingTooShort(length=3, path=("coordinates", 1)),
    )


@pytest.mark.parametrize("msg", [b"{", b"[1, 2", b"nope", b""])
def test_decode_parse_error(msg):
    with pytest.raises(geostruct.DecodeError) as rec:
        geostruct.json.decode(msg)
    assert not isinstance(rec.value, geostruct.ValidationError)


def test_decode_str_or_bytes():
    msg = '{"type":"Point","coordinates":[1,2]}'
    assert geostruct.json.decode(msg) == geostruct.json.decode(msg.encode())


def test_validate_does_not_raise():
    dec = geostruct.json.Decoder()
    res = dec.validate(b'{"type":"Point","coordinates":[1]}')
    assert not res.ok
    assert dec.validate(b'{"type":"Point","coordinates":[1, 2]}').value == Point((1.0, 2.0))


def test_validate_logs_failures(caplog):
    with caplog.at_level(logging.DEBUG, logger="geostruct.json"):
        geostruct.json.Decoder().validate(b'{"type":"Point"}')
    assert "failed validation with 1 error(s)" in caplog.text


def test_unknown_member_tolerated_and_dropped():
    msg = b'{"type":"Feature","geometry":null,"properties":null,"foo":{"bar":1}}'
    feature = geostruct.json.decode(msg)
    assert feature == Feature()
    assert b"foo" not in geostruct.json.encode(feature)


def test_encode_default_crs_omitted():
    assert geostruct.json.encode(Point((1.0, 2.0))) == b'{"type":"Point","coordinates":[1.0,2.0]}'


@pytest.mark.parametrize("order", ["deterministic", "sorted"])
def test_encode_order(order):
    res = geostruct.json.encode(Point((1.0, 2.0), bbox=(1.0, 2.0, 1.0, 2.0)), order=order)
    assert res == b'{"bbox":[1.0,2.0,1.0,2.0],"coordinates":[1.0,2.0],"type":"Point"}'


def test_encoder_reusable():
    enc = geostruct.json.Encoder()
    assert enc.order is None
    assert enc.encode(Feature()) == enc.encode(Feature())
    assert msgspec.json.decode(enc.encode(Feature())) == {
        "type": "Feature",
        "geometry": None,
        "properties": {},
    }


def test_encode_unsupported():
    with pytest.raises(TypeError, match="unsupported"):
        geostruct.json.encode({"type": "Point"})


def test_decode_as_geometry_rejects_feature():
    with pytest.raises(geostruct.ValidationError) as rec:
        geostruct.json.decode(b'{"type":"Feature"}', type=geostruct.Geometry)
    assert rec.value.errors == (geostruct.UnknownGeometryType(type="Feature", path=("type",)),)
