from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple

import msgspec

from ._errors import (
    InsufficientPoints,
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
    bucket_name,
)

_json_encode = msgspec.json.encode


class Options(NamedTuple):
    strict_properties: bool = False
    max_depth: Optional[int] = None


class Member(NamedTuple):
    """A feature or geometry collection member being decoded.

    For a feature ``node`` is the feature object and ``geometry`` its
    ``geometry`` member. For a bare geometry both are the same object.
    """

    node: dict
    path: str
    geometry: dict
    geometry_path: str
    index: int


def _json_type(obj: Any) -> str:
    if obj is None:
        return "null"
    elif isinstance(obj, bool):
        return "bool"
    elif isinstance(obj, int):
        return "int"
    elif isinstance(obj, float):
        return "float"
    elif isinstance(obj, str):
        return "str"
    elif isinstance(obj, list):
        return "array"
    elif isinstance(obj, dict):
        return "object"
    return type(obj).__name__


def read_coordinates(
    obj: Any,
    rank: int,
    path: str = "$",
    *,
    min_positions: int = 0,
    kind: Optional[str] = None,
    index: Optional[int] = None,
) -> tuple:
    """Read a nested array of numbers into nested tuples of floats.

    Parameters
    ----------
    obj : Any
        The decoded JSON value.
    rank : int
        The nesting depth to read, from 1 (a single position) to 4 (a
        MultiPolygon).
    path : str, optional
        The JSON path of ``obj``, used in error messages.
    min_positions : int, optional
        The minimum number of positions every rank 2 array (a line) must
        hold. Checked as each line is read.
    kind : str, optional
        The geometry kind being read, used in error messages.
    index : int, optional
        The index of the enclosing member, attached to any error raised.

    Returns
    -------
    coordinates : tuple
        Tuples nested ``rank`` deep, with floats at the leaves.
    """
    if rank < 1 or rank > 4:
        raise ValueError(f"rank must be between 1 and 4, got {rank}")
    if type(obj) is not list:
        raise MalformedCoordinate(
            f"Expected `array`, got `{_json_type(obj)}`", path, index
        )
    if rank == 1:
        out = []
        for i, x in enumerate(obj):
            if type(x) is float:
                out.append(x)
            elif type(x) is int:
                try:
                    out.append(float(x))
                except OverflowError:
                    raise MalformedCoordinate(
                        "Integer value out of range for `float`", f"{path}[{i}]", index
                    ) from None
            else:
                raise MalformedCoordinate(
                    f"Expected `float`, got `{_json_type(x)}`", f"{path}[{i}]", index
                )
        return tuple(out)

    out = tuple(
        read_coordinates(
            x,
            rank - 1,
            f"{path}[{i}]",
            min_positions=min_positions,
            kind=kind,
            index=index,
        )
        for i, x in enumerate(obj)
    )
    if rank == 2 and len(out) < min_positions:
        raise InsufficientPoints(kind, len(out), path, index)
    return out


def read_properties(
    node: dict,
    path: str = "$",
    *,
    strict: bool = False,
    index: Optional[int] = None,
) -> Tuple[Property, ...]:
    """Read the ``properties`` member of ``node`` as ``(key, text)`` pairs.

    Strings are kept as is. Any other value is converted to its compact JSON
    text (``1.5``, ``true``, ``null``, ``{"a":1}``), unless ``strict`` is set,
    in which case it's an error. A missing or ``null`` member gives an empty
    tuple.
    """
    props = node.get("properties")
    if props is None:
        return ()
    if type(props) is not dict:
        raise MalformedProperty(
            f"Expected `object` or `null`, got `{_json_type(props)}`",
            f"{path}.properties",
            index,
        )
    out = []
    for key, value in props.items():
        if type(value) is str:
            text = value
        elif strict:
            raise MalformedProperty(
                f"Expected `str`, got `{_json_type(value)}`",
                f"{path}.properties.{key}",
                index,
            )
        else:
            text = _json_encode(value).decode("utf-8")
        out.append(Property(key, text))
    return tuple(out)


def _coordinate_decoder(cls, rank: int, name: str, min_positions: int = 0):
    kind = cls.__struct_config__.tag

    def decode(member: Member, options: Options, depth: int) -> Geometry:
        properties = read_properties(
            member.node,
            member.path,
            strict=options.strict_properties,
            index=member.index,
        )
        try:
            coordinates = member.geometry["coordinates"]
        except KeyError:
            raise MissingField(
                "coordinates", member.geometry_path, member.index
            ) from None
        coordinates = read_coordinates(
            coordinates,
            rank,
            f"{member.geometry_path}.coordinates",
            min_positions=min_positions,
            kind=kind,
            index=member.index,
        )
        return cls(index=member.index, properties=properties, coordinates=coordinates)

    decode.__name__ = decode.__qualname__ = name
    return decode


decode_point = _coordinate_decoder(Point, 1, "decode_point")
decode_multi_point = _coordinate_decoder(MultiPoint, 2, "decode_multi_point")
decode_line_string = _coordinate_decoder(
    LineString, 2, "decode_line_string", min_positions=2
)
decode_multi_line_string = _coordinate_decoder(
    MultiLineString, 3, "decode_multi_line_string", min_positions=2
)
decode_polygon = _coordinate_decoder(Polygon, 3, "decode_polygon")
decode_multi_polygon = _coordinate_decoder(MultiPolygon, 4, "decode_multi_polygon")


def decode_geometry_collection(
    member: Member, options: Options, depth: int
) -> GeometryCollection:
    depth += 1
    if options.max_depth is not None and depth > options.max_depth:
        raise MalformedObject(
            f"GeometryCollection nested deeper than max_depth={options.max_depth}",
            member.geometry_path,
            member.index,
        )
    properties = read_properties(
        member.node,
        member.path,
        strict=options.strict_properties,
        index=member.index,
    )
    items = _require_array(
        member.geometry, "geometries", member.geometry_path, member.index
    )
    geometries, buckets = decode_members(
        items, f"{member.geometry_path}.geometries", locate_geometry, options, depth
    )
    return GeometryCollection(
        index=member.index, properties=properties, geometries=geometries, **buckets
    )


_DECODERS: Dict[str, Callable[[Member, Options, int], Geometry]] = {
    "Point": decode_point,
    "MultiPoint": decode_multi_point,
    "LineString": decode_line_string,
    "MultiLineString": decode_multi_line_string,
    "Polygon": decode_polygon,
    "MultiPolygon": decode_multi_polygon,
    "GeometryCollection": decode_geometry_collection,
}


def decode_geometry(member: Member, options: Options, depth: int = 0) -> Geometry:
    """Decode a single member, dispatching on its geometry's ``type``."""
    try:
        kind = member.geometry["type"]
    except KeyError:
        raise MissingField("type", member.geometry_path, member.index) from None
    decoder = _DECODERS.get(kind) if type(kind) is str else None
    if decoder is None:
        raise UnrecognizedGeometryType(
            kind, f"{member.geometry_path}.type", member.index
        )
    return decoder(member, options, depth)


def locate_feature(node: Any, path: str, index: int) -> Member:
    if type(node) is not dict:
        raise MalformedObject(
            f"Expected `object`, got `{_json_type(node)}`", path, index
        )
    try:
        geometry = node["geometry"]
    except KeyError:
        raise MissingField("geometry", path, index) from None
    geometry_path = f"{path}.geometry"
    if type(geometry) is not dict:
        raise MalformedObject(
            f"Expected `object`, got `{_json_type(geometry)}`", geometry_path, index
        )
    return Member(node, path, geometry, geometry_path, index)


def locate_geometry(node: Any, path: str, index: int) -> Member:
    if type(node) is not dict:
        raise MalformedObject(
            f"Expected `object`, got `{_json_type(node)}`", path, index
        )
    return Member(node, path, node, path, index)


def decode_members(
    items: list,
    path: str,
    locate: Callable[[Any, str, int], Member],
    options: Options,
    depth: int = 0,
) -> Tuple[tuple, Dict[str, tuple]]:
    """Decode an array of geometry-bearing nodes.

    Parameters
    ----------
    items : list
        The decoded JSON array (``features`` or ``geometries``).
    path : str
        The JSON path of ``items``.
    locate : callable
        Finds the geometry of one item, either `locate_feature` or
        `locate_geometry`.
    options : Options
    depth : int, optional
        The current geometry collection nesting depth.

    Returns
    -------
    geometries : tuple
        Every decoded geometry, in source order.
    buckets : dict
        A mapping of bucket name to the geometries of that kind, each in
        source order. Always has all seven buckets.
    """
    geometries = tuple(
        decode_geometry(locate(node, f"{path}[{i}]", i), options, depth)
        for i, node in enumerate(items)
    )
    buckets: Dict[str, List[Geometry]] = {bucket_name(k): [] for k in KINDS}
    for geometry in geometries:
        buckets[bucket_name(geometry.kind)].append(geometry)
    return geometries, {k: tuple(v) for k, v in buckets.items()}


def _require_array(obj: dict, field: str, path: str, index: Optional[int]) -> list:
    try:
        out = obj[field]
    except KeyError:
        raise MissingField(field, path, index) from None
    if type(out) is not list:
        raise MalformedObject(
            f"Expected `array`, got `{_json_type(out)}`", f"{path}.{field}", index
        )
    return out


def decode_feature_collection(
    obj: Any, options: Options = Options()
) -> FeatureCollection:
    """Build a `FeatureCollection` from an already parsed JSON value."""
    if type(obj) is not dict:
        raise MalformedObject(f"Expected `object`, got `{_json_type(obj)}`", "$")
    features = _require_array(obj, "features", "$", None)
    geometries, buckets = decode_members(
        features, "$.features", locate_feature, options
    )
    return FeatureCollection(features=geometries, **buckets)
