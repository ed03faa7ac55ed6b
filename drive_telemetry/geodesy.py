"""Great-circle distance helpers on a spherical Earth model."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from .config import EARTH_RADIUS_M, MPS_TO_KMH
from .models import Coordinate, as_lat_lon

DistanceArray = NDArray[np.float64]


def _clamp_lat(lat: float) -> float:
    return min(90.0, max(-90.0, lat))


def _wrap_lon(lon: float) -> float:
    if -180.0 <= lon <= 180.0:
        return lon
    return (lon + 180.0) % 360.0 - 180.0


def haversine_m(first: Coordinate, second: Coordinate) -> float:
    """Return the great-circle distance in metres between two points.

    Parameters:
        first: TrackPoint or ``(lat, lon)`` pair in degrees.
        second: TrackPoint or ``(lat, lon)`` pair in degrees.

    Returns:
        A non-negative distance in metres. Latitudes outside [-90, 90] are
        clamped and longitudes are wrapped into [-180, 180] first, so
        malformed inputs degrade to a bounded value instead of ``nan``.
    """

    lat1, lon1 = as_lat_lon(first)
    lat2, lon2 = as_lat_lon(second)
    lat1_rad = math.radians(_clamp_lat(lat1))
    lat2_rad = math.radians(_clamp_lat(lat2))
    delta_lat = lat2_rad - lat1_rad
    delta_lon = math.radians(_wrap_lon(lon2) - _wrap_lon(lon1))
    sin_half_lat = math.sin(delta_lat / 2.0)
    sin_half_lon = math.sin(delta_lon / 2.0)
    a = sin_half_lat**2 + math.cos(lat1_rad) * math.cos(lat2_rad) * sin_half_lon**2
    a = min(1.0, max(0.0, a))
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    return EARTH_RADIUS_M * c


def speed_kmh_from_mps(mps: float) -> float:
    """Convert metres/second to kilometres/hour."""

    return mps * MPS_TO_KMH


def pairwise_distances_m(points: Sequence[Coordinate]) -> DistanceArray:
    """Return haversine distances between consecutive points as an array.

    The result has ``len(points) - 1`` entries (empty for fewer than two
    points) and uses the same clamping as :func:`haversine_m`.
    """

    if len(points) < 2:
        return np.zeros(0, dtype=float)
    coords = np.asarray([as_lat_lon(point) for point in points], dtype=float)
    lats = np.radians(np.clip(coords[:, 0], -90.0, 90.0))
    lons = coords[:, 1]
    out_of_range = (lons < -180.0) | (lons > 180.0)
    lons = np.where(out_of_range, (lons + 180.0) % 360.0 - 180.0, lons)
    lons = np.radians(lons)
    delta_lat = np.diff(lats)
    delta_lon = np.diff(lons)
    a = (
        np.sin(delta_lat / 2.0) ** 2
        + np.cos(lats[:-1]) * np.cos(lats[1:]) * np.sin(delta_lon / 2.0) ** 2
    )
    a = np.clip(a, 0.0, 1.0)
    c = 2.0 * np.arctan2(np.sqrt(a), np.sqrt(1.0 - a))
    return EARTH_RADIUS_M * c


def cumulative_distances_m(points: Sequence[Coordinate]) -> DistanceArray:
    """Return cumulative distance along the route, starting at 0.0."""

    if not points:
        return np.zeros(0, dtype=float)
    return np.concatenate(([0.0], np.cumsum(pairwise_distances_m(points))))


__all__ = [
    "haversine_m",
    "speed_kmh_from_mps",
    "pairwise_distances_m",
    "cumulative_distances_m",
]
