from ._codec import GeoJSON, convert, to_builtins
from ._result import Failure, Result, Success, collect, combine, traverse
from .crs import CRS, DEFAULT_CRS, NO_CRS, Default, Linked, Named, NoCRS
from .errors import (
    DecodeError,
    EmptySequence,
    GeoJSONError,
    InvalidIdentifierType,
    MalformedCoordinates,
    MalformedCRSProperties,
    MissingRequiredField,
    RingNotClosed,
    RingTooShort,
    SingletonSequence,
    StructuralError,
    UnknownGeometryType,
    UnrecognizedCRSType,
    ValidationError,
    WrongFieldType,
)
from .feature import Feature, FeatureCollection
from .geometry import (
    GEOMETRY_TYPES,
    BoundingBox,
    Geometry,
    GeometryCollection,
    Line,
    MultiLine,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    Position,
)
from .linestring import (
    LinearRing,
    LineString,
    make_line_string,
    make_line_string_from,
    make_linear_ring,
)

from . import json, yaml

__version__ = "0.1.0"
