from typing import Optional

__all__ = (
    "GeoJSONError",
    "JSONSyntaxError",
    "UnrecognizedGeometryType",
    "InsufficientPoints",
    "MalformedCoordinate",
    "MalformedProperty",
    "MissingField",
    "MalformedObject",
)


class GeoJSONError(ValueError):
    """The base class for all errors raised while decoding GeoJSON.

    Parameters
    ----------
    msg : str
        A description of what went wrong.
    path : str, optional
        A JSON path (e.g. ``$.features[0].geometry``) locating the offending
        value. Appended to the message when set.
    index : int, optional
        The position of the innermost enclosing feature (or geometry
        collection member) within its array.
    """

    def __init__(
        self, msg: str, path: Optional[str] = None, index: Optional[int] = None
    ):
        self.msg = msg
        self.path = path
        self.index = index
        if path is not None:
            msg = f"{msg} - at `{path}`"
        super().__init__(msg)

    def __reduce__(self):
        return (type(self), (self.msg, self.path, self.index))


class JSONSyntaxError(GeoJSONError):
    """The input is not well-formed JSON."""


class UnrecognizedGeometryType(GeoJSONError):
    """A ``type`` member names none of the seven geometry kinds."""

    def __init__(self, type_name, path=None, index=None):
        self.type_name = type_name
        super().__init__(f"Unrecognized geometry type {type_name!r}", path, index)

    def __reduce__(self):
        return (type(self), (self.type_name, self.path, self.index))


class InsufficientPoints(GeoJSONError):
    """A line (a LineString, or one line of a MultiLineString) has fewer than
    two positions."""

    def __init__(self, kind, count, path=None, index=None):
        self.kind = kind
        self.count = count
        if kind is None:
            what = "Line"
        elif kind == "LineString":
            what = kind
        else:
            what = f"{kind} element"
        super().__init__(
            f"{what} must contain at least two positions, {count} given", path, index
        )

    def __reduce__(self):
        return (type(self), (self.kind, self.count, self.path, self.index))


class MalformedCoordinate(GeoJSONError):
    """A coordinate array, or a number within one, has the wrong JSON type."""


class MalformedProperty(GeoJSONError):
    """A ``properties`` member, or one of its values, can't be read as text."""


class MissingField(GeoJSONError):
    """A required member is absent."""

    def __init__(self, field, path=None, index=None):
        self.field = field
        super().__init__(f"Object missing required field `{field}`", path, index)

    def __reduce__(self):
        return (type(self), (self.field, self.path, self.index))


class MalformedObject(GeoJSONError):
    """A structural node has the wrong JSON type, or geometry collections are
    nested deeper than allowed."""
