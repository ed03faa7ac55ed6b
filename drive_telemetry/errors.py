"""Central error types used across the telemetry core."""

from __future__ import annotations


class DriveTelemetryError(RuntimeError):
    """Base error for the drive telemetry package."""


class PolylineDecodeError(DriveTelemetryError, ValueError):
    """Raised when an encoded route string cannot be decoded."""


class DiscardableTripError(DriveTelemetryError):
    """Raised when a recording has too few points to describe a trip."""


__all__ = [
    "DriveTelemetryError",
    "PolylineDecodeError",
    "DiscardableTripError",
]
