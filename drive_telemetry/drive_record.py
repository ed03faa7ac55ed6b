"""Build the payload handed to the persistence sink for a finished drive."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Dict

from .errors import DiscardableTripError
from .polyline_codec import encode_polyline
from .recorder import RecordingResult
from .settings import Settings
from .trimming import shared_route

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DriveRecord:
    started_at: str
    ended_at: str
    duration_s: int
    distance_m: int
    avg_kmh: float
    top_kmh: float
    polyline_raw: str
    polyline_shared: str
    hide_start_end: bool

    def to_payload(self) -> Dict[str, Any]:
        return asdict(self)


def _iso_utc(timestamp_ms: int) -> str:
    return datetime.fromtimestamp(timestamp_ms / 1000.0, tz=timezone.utc).isoformat()


def build_drive_record(result: RecordingResult, settings: Settings) -> DriveRecord:
    """Return the persisted summary of ``result``.

    Figures come from the finalized ``result.stats`` so the record can be
    reproduced from the raw points. ``polyline_shared`` is the privacy-trimmed
    route when ``settings.hide_start_end`` is on and equals ``polyline_raw``
    otherwise (including when the route is too short to trim).

    Raises:
        DiscardableTripError: when the recording holds fewer than two points.
    """

    if result.is_discardable:
        raise DiscardableTripError(
            f"Recording has {len(result.points)} point(s); nothing to save"
        )
    points = result.points
    stats = result.stats
    polyline_raw = encode_polyline(points)
    shared = shared_route(points, settings)
    trimmed = len(shared) < len(points)
    polyline_shared = encode_polyline(shared) if trimmed else polyline_raw
    if settings.hide_start_end and not trimmed:
        _LOG.info(
            "Route too short to hide %.1f km at each end; sharing full route",
            settings.trim_km,
        )
    return DriveRecord(
        started_at=_iso_utc(points[0].timestamp_ms),
        ended_at=_iso_utc(points[-1].timestamp_ms),
        duration_s=int(round(stats.duration_s)),
        distance_m=int(round(stats.distance_m)),
        avg_kmh=round(stats.avg_kmh, 2),
        top_kmh=round(stats.top_kmh, 2),
        polyline_raw=polyline_raw,
        polyline_shared=polyline_shared,
        hide_start_end=settings.hide_start_end,
    )


__all__ = ["DriveRecord", "build_drive_record"]
