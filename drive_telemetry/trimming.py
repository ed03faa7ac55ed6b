"""Privacy trimming: hide the first and last stretch of a shared route."""

from __future__ import annotations

import logging
from typing import List, Sequence, TypeVar

import numpy as np

from .geodesy import pairwise_distances_m
from .models import Coordinate
from .settings import Settings

_LOG = logging.getLogger(__name__)

PointT = TypeVar("PointT", bound=Coordinate)


def trim_route(points: Sequence[PointT], trim_m: float) -> List[PointT]:
    """Drop the leading and trailing ``trim_m`` metres of a route.

    Parameters:
        points: Ordered TrackPoints or ``(lat, lon)`` pairs.
        trim_m: Distance to hide at each end, in metres.

    Returns:
        A new list. The new start is the first point at which the distance
        walked from the beginning reaches ``trim_m``; the new end is the point
        just before the one at which the distance walked back from the end
        reaches ``trim_m``. The input is returned unchanged when ``trim_m`` is
        not positive, fewer than two points exist, or the two trims meet or
        overlap (a route is never trimmed away entirely).
    """

    if trim_m <= 0 or len(points) < 2:
        return list(points)

    segments = pairwise_distances_m(points)
    last_index = len(points) - 1

    forward_hits = np.flatnonzero(np.cumsum(segments) >= trim_m)
    start_index = int(forward_hits[0]) + 1 if forward_hits.size else 0

    backward_hits = np.flatnonzero(np.cumsum(segments[::-1]) >= trim_m)
    end_index = last_index
    if backward_hits.size:
        end_index = last_index - 1 - int(backward_hits[0])

    if end_index <= start_index:
        _LOG.debug(
            "Route of %s points too short to trim %.1f m from each end",
            len(points),
            trim_m,
        )
        return list(points)
    return list(points[start_index : end_index + 1])


def trim_route_km(points: Sequence[PointT], trim_km: float) -> List[PointT]:
    """Kilometre flavour of :func:`trim_route`; negative values mean no trim."""

    return trim_route(points, max(0.0, trim_km) * 1000.0)


def shared_route(points: Sequence[PointT], settings: Settings) -> List[PointT]:
    """Return the route variant that may be shown to other users."""

    if not settings.hide_start_end:
        return list(points)
    return trim_route(points, settings.trim_m)


__all__ = ["trim_route", "trim_route_km", "shared_route"]
