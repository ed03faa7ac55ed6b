"""Authoritative trip statistics recomputed from the raw point log.

The recorder keeps running figures while a drive is live; this module derives
the persisted summary from the captured points alone so the stored record is
reproducible regardless of any drift in the live counters.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from .config import MPS_TO_KMH
from .geodesy import pairwise_distances_m, speed_kmh_from_mps
from .models import TrackPoint, TripStats

_LOG = logging.getLogger(__name__)


def finalize(points: Sequence[TrackPoint]) -> TripStats:
    """Return distance, duration, average and top speed for a point list."""

    if len(points) < 2:
        return TripStats.zero()

    distance_m = float(pairwise_distances_m(points).sum())

    elapsed_ms = points[-1].timestamp_ms - points[0].timestamp_ms
    if elapsed_ms < 0:
        _LOG.debug(
            "Last timestamp precedes first by %s ms; clamping duration to zero",
            -elapsed_ms,
        )
    duration_s = max(elapsed_ms, 0) / 1000.0

    avg_kmh = distance_m / duration_s * MPS_TO_KMH if duration_s > 0 else 0.0
    top_mps = max(_recorded_speed(point) for point in points)
    return TripStats(
        distance_m=distance_m,
        duration_s=duration_s,
        avg_kmh=avg_kmh,
        top_kmh=speed_kmh_from_mps(top_mps),
    )


def _recorded_speed(point: TrackPoint) -> float:
    speed = point.speed_mps
    if speed is None or not math.isfinite(speed) or speed < 0:
        return 0.0
    return float(speed)


__all__ = ["finalize"]
