import inspect
import sys
from contextlib import contextmanager

import msgspec


def feature(geometry, properties=None, **extra):
    out = {"type": "Feature", "geometry": geometry}
    if properties is not None:
        out["properties"] = properties
    out.update(extra)
    return out


def feature_collection(*features):
    return {"type": "FeatureCollection", "features": list(features)}


def geometry(kind, coordinates):
    return {"type": kind, "coordinates": coordinates}


def collection(*geometries):
    return {"type": "GeometryCollection", "geometries": list(geometries)}


def encode_features(*features):
    """Encode a FeatureCollection of ``features`` as JSON bytes"""
    return msgspec.json.encode(feature_collection(*features))


ONE_OF_EACH = [
    geometry("Point", [1, 2]),
    geometry("MultiPoint", [[1, 2], [3, 4]]),
    geometry("LineString", [[1, 2], [3, 4]]),
    geometry("MultiLineString", [[[1, 2], [3, 4]], [[5, 6], [7, 8]]]),
    geometry("Polygon", [[[0, 0], [1, 0], [1, 1], [0, 0]]]),
    geometry("MultiPolygon", [[[[0, 0], [1, 0], [1, 1], [0, 0]]]]),
    collection(geometry("Point", [1, 2])),
]


@contextmanager
def max_call_depth(n):
    """Limit the interpreter to ``n`` frames above the current stack depth"""
    cur_depth = len(inspect.stack(0))
    orig = sys.getrecursionlimit()
    try:
        # The measured depth can be off by a bit, and setting a limit below
        # the current depth raises. Retry with a slightly higher limit.
        for i in range(64):
            try:
                sys.setrecursionlimit(cur_depth + i + n)
                break
            except RecursionError:
                pass
        else:
            raise ValueError("Failed to set a low recursion limit")
        yield
    finally:
        sys.setrecursionlimit(orig)
