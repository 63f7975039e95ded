import logging
import os
from typing import IO, Optional, Union

import msgspec

from ._decoding import Options as _Options, decode_feature_collection as _decode
from ._errors import (
    JSONSyntaxError as _JSONSyntaxError,
    MalformedObject as _MalformedObject,
)
from .structs import FeatureCollection

__all__ = ("Decoder", "decode", "decode_from_reader", "decode_from_path")


def __dir__():
    return __all__


logger = logging.getLogger(__name__)


class Decoder:
    """A GeoJSON decoder.

    Parameters
    ----------
    strict_properties : bool, optional
        If ``False`` (the default) non-string property values are converted
        to their compact JSON text. If ``True`` they're an error.
    max_depth : int, optional
        The maximum allowed nesting depth of geometry collections, where a
        feature's own GeometryCollection is depth 1. Defaults to no limit
        beyond the interpreter's recursion limit; input nested past that
        raises `MalformedObject`.
    """

    __slots__ = ("_options",)

    def __init__(
        self, *, strict_properties: bool = False, max_depth: Optional[int] = None
    ):
        if type(strict_properties) is not bool:
            raise TypeError(
                "strict_properties must be a bool, got "
                f"{type(strict_properties).__name__}"
            )
        if max_depth is not None:
            if type(max_depth) is not int:
                raise TypeError(
                    f"max_depth must be an int or None, got {type(max_depth).__name__}"
                )
            if max_depth < 1:
                raise ValueError(f"max_depth must be >= 1, got {max_depth}")
        self._options = _Options(strict_properties, max_depth)

    @property
    def strict_properties(self) -> bool:
        return self._options.strict_properties

    @property
    def max_depth(self) -> Optional[int]:
        return self._options.max_depth

    def __repr__(self):
        return (
            f"geomspec.json.Decoder(strict_properties={self.strict_properties!r}, "
            f"max_depth={self.max_depth!r})"
        )

    def decode(self, buf: Union[bytes, str]) -> FeatureCollection:
        """Deserialize a GeoJSON FeatureCollection.

        Parameters
        ----------
        buf : bytes-like or str
            The message to decode.

        Returns
        -------
        obj : FeatureCollection
            The decoded collection.

        Raises
        ------
        GeoJSONError
            If ``buf`` isn't valid JSON, or doesn't describe a valid feature
            collection. No partial result is produced.
        """
        try:
            obj = msgspec.json.decode(buf)
            out = _decode(obj, self._options)
        except msgspec.DecodeError as exc:
            raise _JSONSyntaxError(str(exc)) from None
        except RecursionError:
            raise _MalformedObject("GeometryCollection nesting too deep", "$") from None
        logger.debug("Decoded %d features", out.total_features)
        return out

    def decode_from_reader(self, fp: IO) -> FeatureCollection:
        """Read all of ``fp`` and decode it.

        ``fp.read()`` may return either bytes or str.
        """
        buf = fp.read()
        logger.debug("Read %d bytes from %r", len(buf), fp)
        return self.decode(buf)

    def decode_from_path(
        self, path: Union[str, "os.PathLike[str]"]
    ) -> FeatureCollection:
        """Read the file at ``path`` and decode it."""
        with open(path, "rb") as f:
            buf = f.read()
        logger.debug("Read %d bytes from %s", len(buf), os.fspath(path))
        return self.decode(buf)


_default_decoder = Decoder()


def _get_decoder(strict_properties: bool, max_depth: Optional[int]) -> Decoder:
    if strict_properties is False and max_depth is None:
        return _default_decoder
    return Decoder(strict_properties=strict_properties, max_depth=max_depth)


def decode(
    buf: Union[bytes, str],
    *,
    strict_properties: bool = False,
    max_depth: Optional[int] = None,
) -> FeatureCollection:
    """Deserialize a GeoJSON FeatureCollection.

    Parameters
    ----------
    buf : bytes-like or str
        The message to decode.
    strict_properties : bool, optional
        Whether non-string property values are an error. See `Decoder`.
    max_depth : int, optional
        The maximum allowed geometry collection nesting depth. See `Decoder`.

    Returns
    -------
    obj : FeatureCollection
        The decoded collection.

    See Also
    --------
    Decoder.decode
    """
    return _get_decoder(strict_properties, max_depth).decode(buf)


def decode_from_reader(
    fp: IO,
    *,
    strict_properties: bool = False,
    max_depth: Optional[int] = None,
) -> FeatureCollection:
    """Read a file-like object to the end and decode it.

    See Also
    --------
    decode
    """
    return _get_decoder(strict_properties, max_depth).decode_from_reader(fp)


def decode_from_path(
    path: Union[str, "os.PathLike[str]"],
    *,
    strict_properties: bool = False,
    max_depth: Optional[int] = None,
) -> FeatureCollection:
    """Read a file and decode it.

    Errors opening or reading the file are raised unchanged as `OSError`.

    See Also
    --------
    decode
    """
    return _get_decoder(strict_properties, max_depth).decode_from_path(path)
