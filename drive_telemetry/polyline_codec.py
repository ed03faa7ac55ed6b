"""Encoded polyline conversion for recorded routes.

Routes are stored and shared as encoded polyline strings at five decimal
digits of precision. Decoding is lenient: callers treat an empty coordinate
list as "no route to draw", so corrupt or truncated strings never raise from
:func:`decode_polyline`.
"""

from __future__ import annotations

import logging
import math
from typing import Any, List, Sequence

import polyline

from .config import POLYLINE_PRECISION
from .errors import PolylineDecodeError
from .models import Coordinate, LatLon, as_lat_lon

_LOG = logging.getLogger(__name__)

# Each character holds 5 data bits plus a continuation bit, offset by 63.
_MIN_CHAR = 63
_MAX_CHAR = 63 + 0x3F


def encode_polyline(points: Sequence[Coordinate]) -> str:
    """Encode TrackPoints or ``(lat, lon)`` pairs into a polyline string."""

    if not points:
        return ""
    coords = [as_lat_lon(point) for point in points]
    return polyline.encode(coords, precision=POLYLINE_PRECISION)


def decode_polyline_strict(encoded: str) -> List[LatLon]:
    """Decode a polyline string, raising ``PolylineDecodeError`` on bad input."""

    if not isinstance(encoded, str):
        raise PolylineDecodeError(
            f"Encoded polyline must be a string, got {type(encoded).__name__}"
        )
    if not encoded:
        return []
    for position, char in enumerate(encoded):
        if not _MIN_CHAR <= ord(char) <= _MAX_CHAR:
            raise PolylineDecodeError(
                f"Invalid polyline character {char!r} at offset {position}"
            )
    try:
        decoded = polyline.decode(encoded, precision=POLYLINE_PRECISION)
    except (IndexError, ValueError, TypeError) as exc:
        raise PolylineDecodeError("Unable to decode polyline") from exc
    coords = [(float(lat), float(lon)) for lat, lon in decoded]
    for lat, lon in coords:
        if not (_is_valid(lat, 90.0) and _is_valid(lon, 180.0)):
            raise PolylineDecodeError(
                f"Decoded coordinate out of range: ({lat}, {lon})"
            )
    return coords


def decode_polyline(encoded: Any) -> List[LatLon]:
    """Decode a polyline string, returning ``[]`` for empty or malformed input."""

    if not encoded:
        return []
    try:
        return decode_polyline_strict(encoded)
    except PolylineDecodeError as exc:
        _LOG.debug("Discarding malformed polyline: %s", exc)
        return []


def _is_valid(value: float, bound: float) -> bool:
    return math.isfinite(value) and -bound <= value <= bound


__all__ = ["encode_polyline", "decode_polyline", "decode_polyline_strict"]
