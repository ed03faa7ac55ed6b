"""Drive telemetry core: live trip recording, statistics and route encoding."""

import logging

from .drive_record import DriveRecord, build_drive_record
from .errors import DiscardableTripError, DriveTelemetryError, PolylineDecodeError
from .finalizer import finalize
from .geodesy import haversine_m, speed_kmh_from_mps
from .models import BoundingRegion, LiveStats, TrackPoint, TripStats
from .polyline_codec import decode_polyline, encode_polyline
from .recorder import RecorderState, RecordingResult, StartResult, TripRecorder
from .region import region_for_points
from .settings import Settings
from .trimming import shared_route, trim_route


def configure_logging(level: int = logging.INFO) -> None:
    """Install a basic root handler unless the host app already has one."""

    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=level,
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )


__all__ = [
    "configure_logging",
    "BoundingRegion",
    "DiscardableTripError",
    "DriveRecord",
    "DriveTelemetryError",
    "LiveStats",
    "PolylineDecodeError",
    "RecorderState",
    "RecordingResult",
    "Settings",
    "StartResult",
    "TrackPoint",
    "TripRecorder",
    "TripStats",
    "build_drive_record",
    "decode_polyline",
    "encode_polyline",
    "finalize",
    "haversine_m",
    "region_for_points",
    "shared_route",
    "speed_kmh_from_mps",
    "trim_route",
]
