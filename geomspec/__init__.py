import logging

from ._errors import (
    GeoJSONError,
    InsufficientPoints,
    JSONSyntaxError,
    MalformedCoordinate,
    MalformedObject,
    MalformedProperty,
    MissingField,
    UnrecognizedGeometryType,
)
from .structs import (
    KINDS,
    FeatureCollection,
    Geometry,
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    Property,
)

from . import json, structs
from .json import Decoder, decode, decode_from_path, decode_from_reader
from ._version import __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())
