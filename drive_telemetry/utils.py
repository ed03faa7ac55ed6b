"""Display helpers for trip figures."""

from __future__ import annotations


def format_distance(meters: float) -> str:
    """Format metres as ``"12 km"`` from 10 km upward, else ``"1.7 km"``."""

    km = max(meters, 0.0) / 1000.0
    if km >= 10:
        return f"{int(km + 0.5)} km"
    return f"{km:.1f} km"


def format_duration(seconds: float) -> str:
    """Format seconds into a ``Xh Ym`` or ``Ym`` string."""

    total = max(int(seconds), 0)
    hours, remainder = divmod(total, 3600)
    minutes = remainder // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_clock(seconds: float) -> str:
    """Live timer text: ``M:SS`` below an hour, ``H:MM:SS`` after."""

    total = max(int(seconds), 0)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_speed(kmh: float) -> str:
    return f"{int(max(kmh, 0.0) + 0.5)} km/h"


__all__ = ["format_distance", "format_duration", "format_clock", "format_speed"]
