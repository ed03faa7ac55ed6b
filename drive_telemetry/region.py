"""Map viewport framing for a set of coordinates."""

from __future__ import annotations

from typing import Sequence

from .config import (
    REGION_FALLBACK_CENTER,
    REGION_FALLBACK_DELTA,
    REGION_MARGIN,
    REGION_MIN_DELTA,
)
from .models import BoundingRegion, Coordinate, as_lat_lon


def region_for_points(
    points: Sequence[Coordinate],
    *,
    padding_factor: float = 1.0,
) -> BoundingRegion:
    """Return a viewport containing every point.

    With no points the fixed fallback region is returned. Otherwise the
    center is the midpoint of the bounding box and each delta is the span
    (scaled by ``padding_factor``) plus a margin, never below the minimum
    delta, so a single point still yields a visible viewport.
    """

    if not points:
        lat, lon = REGION_FALLBACK_CENTER
        return BoundingRegion(lat, lon, REGION_FALLBACK_DELTA, REGION_FALLBACK_DELTA)

    coords = [as_lat_lon(point) for point in points]
    lats = [lat for lat, _ in coords]
    lons = [lon for _, lon in coords]
    min_lat, max_lat = min(lats), max(lats)
    min_lon, max_lon = min(lons), max(lons)
    scale = max(padding_factor, 0.0)
    return BoundingRegion(
        latitude=(min_lat + max_lat) / 2.0,
        longitude=(min_lon + max_lon) / 2.0,
        latitude_delta=max(
            REGION_MIN_DELTA, (max_lat - min_lat) * scale + REGION_MARGIN
        ),
        longitude_delta=max(
            REGION_MIN_DELTA, (max_lon - min_lon) * scale + REGION_MARGIN
        ),
    )


__all__ = ["region_for_points"]
