"""The typed GeoJSON tree.

Every type here is a frozen ``msgspec.Struct``; instances are created once
by the decoder and never mutated afterwards.
"""
from __future__ import annotations

from typing import Tuple, Union

import msgspec

__all__ = (
    "KINDS",
    "bucket_name",
    "Position",
    "Property",
    "Geometry",
    "Point",
    "MultiPoint",
    "LineString",
    "MultiLineString",
    "Polygon",
    "MultiPolygon",
    "GeometryCollection",
    "AnyGeometry",
    "FeatureCollection",
)


def __dir__():
    return __all__


# The seven geometry kinds, in bucket order
KINDS = (
    "Point",
    "MultiPoint",
    "LineString",
    "MultiLineString",
    "Polygon",
    "MultiPolygon",
    "GeometryCollection",
)

_BUCKETS = dict(
    zip(
        KINDS,
        (
            "points",
            "multi_points",
            "line_strings",
            "multi_line_strings",
            "polygons",
            "multi_polygons",
            "geometry_collections",
        ),
    )
)


def bucket_name(kind: str) -> str:
    """Get the name of the bucket attribute holding geometries of ``kind``.

    Parameters
    ----------
    kind : str
        One of `KINDS`.

    Returns
    -------
    name : str
        The attribute name on `GeometryCollection` and `FeatureCollection`
        (e.g. ``"multi_line_strings"``).
    """
    try:
        return _BUCKETS[kind]
    except KeyError:
        raise ValueError(f"Unknown geometry kind {kind!r}") from None


# A single position, e.g. (x, y) or (x, y, z). Extra dimensions are kept.
Position = Tuple[float, ...]


class Property(msgspec.Struct, frozen=True, array_like=True):
    """One ``key: value`` entry of a feature's properties, as text."""

    key: str
    value: str


class Geometry(msgspec.Struct, frozen=True, kw_only=True, tag_field="type"):
    """The fields shared by every geometry kind.

    Parameters
    ----------
    index : int
        The position of this geometry within its enclosing array (the
        ``features`` array, or a geometry collection's ``geometries``).
    properties : tuple of Property, optional
        The properties in source order. Empty if the source had none.
    """

    index: int
    properties: Tuple[Property, ...] = ()

    @property
    def kind(self) -> str:
        """The geometry kind, one of `KINDS`."""
        return self.__struct_config__.tag


class Point(Geometry, tag=True, kw_only=True):
    coordinates: Position


class MultiPoint(Geometry, tag=True, kw_only=True):
    coordinates: Tuple[Position, ...]


class LineString(Geometry, tag=True, kw_only=True):
    """A line through two or more positions."""

    coordinates: Tuple[Position, ...]


class MultiLineString(Geometry, tag=True, kw_only=True):
    """Several lines, each through two or more positions."""

    coordinates: Tuple[Tuple[Position, ...], ...]


class Polygon(Geometry, tag=True, kw_only=True):
    """A polygon as a sequence of linear rings.

    Ring size and closure aren't checked.
    """

    coordinates: Tuple[Tuple[Position, ...], ...]


class MultiPolygon(Geometry, tag=True, kw_only=True):
    coordinates: Tuple[Tuple[Tuple[Position, ...], ...], ...]


class GeometryCollection(Geometry, tag=True, kw_only=True):
    """A collection of member geometries, possibly nested.

    ``geometries`` holds every member in source order. Each of the seven
    buckets holds the members of one kind, in the same relative order.
    A member's ``index`` is its position in ``geometries``, not within its
    bucket.
    """

    geometries: Tuple[AnyGeometry, ...] = ()
    points: Tuple[Point, ...] = ()
    multi_points: Tuple[MultiPoint, ...] = ()
    line_strings: Tuple[LineString, ...] = ()
    multi_line_strings: Tuple[MultiLineString, ...] = ()
    polygons: Tuple[Polygon, ...] = ()
    multi_polygons: Tuple[MultiPolygon, ...] = ()
    geometry_collections: Tuple[GeometryCollection, ...] = ()


AnyGeometry = Union[
    Point,
    MultiPoint,
    LineString,
    MultiLineString,
    Polygon,
    MultiPolygon,
    GeometryCollection,
]


class FeatureCollection(
    msgspec.Struct, frozen=True, kw_only=True, tag_field="type", tag=True
):
    """The decoded top-level collection.

    Parameters
    ----------
    features : tuple of geometries
        The geometry of every feature, in source order.
    points, multi_points, line_strings, multi_line_strings : tuple
        The same geometries bucketed by kind, each bucket in source order.
    polygons, multi_polygons, geometry_collections : tuple
        As above.
    """

    features: Tuple[AnyGeometry, ...] = ()
    points: Tuple[Point, ...] = ()
    multi_points: Tuple[MultiPoint, ...] = ()
    line_strings: Tuple[LineString, ...] = ()
    multi_line_strings: Tuple[MultiLineString, ...] = ()
    polygons: Tuple[Polygon, ...] = ()
    multi_polygons: Tuple[MultiPolygon, ...] = ()
    geometry_collections: Tuple[GeometryCollection, ...] = ()

    @property
    def kind(self) -> str:
        """Always ``"FeatureCollection"``."""
        return self.__struct_config__.tag

    @property
    def total_features(self) -> int:
        """The number of features, summed over all seven buckets."""
        return sum(len(getattr(self, name)) for name in _BUCKETS.values())
