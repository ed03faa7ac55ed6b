"""Central configuration for the drive telemetry core.

All values are constants imported by the rest of the package. Defaults that a
deployment may want to tune are read from environment variables (optionally
via a local `.env`).
"""

from __future__ import annotations

import os

from dotenv import load_dotenv


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


# Load .env from the current directory or any parent folder.
load_dotenv()


# ---------------------------------------------------------------------------
# Geodesy
# ---------------------------------------------------------------------------
# Mean Earth radius used by the haversine formula.
EARTH_RADIUS_M = 6_371_000.0

# Multiplier from metres/second to kilometres/hour.
MPS_TO_KMH = 3.6


# ---------------------------------------------------------------------------
# Route encoding
# ---------------------------------------------------------------------------
# Decimal digits kept by the encoded polyline (~1.1 m at the equator).
POLYLINE_PRECISION = 5


# ---------------------------------------------------------------------------
# Privacy trimming defaults
# ---------------------------------------------------------------------------
# Distance hidden at each end of a shared route.
DEFAULT_TRIM_KM = max(0.0, _env_float("DRIVE_TRIM_KM", 1.0))

# Hide the start/end of shared routes unless the user opts in.
DEFAULT_HIDE_START_END = _env_bool("DRIVE_HIDE_START_END", False)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
# Interval between duration ticks while recording. Set to 0 to disable the
# background ticker (duration is then only advanced by explicit tick() calls).
RECORDER_TICK_SECONDS = _env_float("DRIVE_RECORDER_TICK_SECONDS", 1.0)


# ---------------------------------------------------------------------------
# Map viewport
# ---------------------------------------------------------------------------
# Shown when a route has no coordinates (New Delhi).
REGION_FALLBACK_CENTER = (28.6139, 77.209)
REGION_FALLBACK_DELTA = 0.1

# Padding added to the route span and the smallest span ever returned.
REGION_MARGIN = 0.01
REGION_MIN_DELTA = 0.01
