"""Dataclasses describing track points, trip summaries and map viewports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple, Union

from .config import MPS_TO_KMH

LatLon = Tuple[float, float]


@dataclass(frozen=True, slots=True)
class TrackPoint:
    """A single location fix delivered by the location source.

    Attributes:
        latitude: Latitude in decimal degrees.
        longitude: Longitude in decimal degrees.
        timestamp_ms: Unix epoch milliseconds.
        speed_mps: Instantaneous speed in metres/second, ``None`` when unknown.
        accuracy_m: Horizontal accuracy in metres, ``None`` when unknown.
    """

    latitude: float
    longitude: float
    timestamp_ms: int
    speed_mps: Optional[float] = None
    accuracy_m: Optional[float] = None

    @property
    def lat_lon(self) -> LatLon:
        return (self.latitude, self.longitude)

    def to_route_dict(self) -> dict[str, Any]:
        """Return the compact ``{lat, lng, ts, speed_mps}`` route entry."""

        entry: dict[str, Any] = {
            "lat": self.latitude,
            "lng": self.longitude,
            "ts": self.timestamp_ms,
        }
        if self.speed_mps is not None:
            entry["speed_mps"] = self.speed_mps
        return entry

    @classmethod
    def from_route_dict(cls, entry: Mapping[str, Any]) -> "TrackPoint":
        speed = entry.get("speed_mps")
        return cls(
            latitude=float(entry["lat"]),
            longitude=float(entry["lng"]),
            timestamp_ms=int(entry["ts"]),
            speed_mps=float(speed) if speed is not None else None,
        )


Coordinate = Union[TrackPoint, LatLon]


def as_lat_lon(point: Coordinate) -> LatLon:
    """Normalise a TrackPoint or ``(lat, lon)`` pair to a float tuple."""

    if isinstance(point, TrackPoint):
        return point.lat_lon
    lat, lon = point
    return (float(lat), float(lon))


@dataclass(frozen=True, slots=True)
class TripStats:
    """Authoritative summary of a completed trip."""

    distance_m: float
    duration_s: float
    avg_kmh: float
    top_kmh: float

    @classmethod
    def zero(cls) -> "TripStats":
        return cls(distance_m=0.0, duration_s=0.0, avg_kmh=0.0, top_kmh=0.0)


@dataclass(frozen=True, slots=True)
class LiveStats:
    """Snapshot of the running counters of a recording session."""

    distance_m: float = 0.0
    top_kmh: float = 0.0
    current_kmh: float = 0.0
    duration_s: int = 0
    point_count: int = 0

    @property
    def avg_kmh(self) -> float:
        """Average speed over the wall-clock duration."""

        if self.duration_s <= 0:
            return 0.0
        return self.distance_m / self.duration_s * MPS_TO_KMH


@dataclass(frozen=True, slots=True)
class BoundingRegion:
    """Map viewport: a center point plus latitude/longitude spans."""

    latitude: float
    longitude: float
    latitude_delta: float
    longitude_delta: float


__all__ = [
    "LatLon",
    "Coordinate",
    "TrackPoint",
    "TripStats",
    "LiveStats",
    "BoundingRegion",
    "as_lat_lon",
]
