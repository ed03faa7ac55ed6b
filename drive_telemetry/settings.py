"""User-facing privacy settings consumed by the route trimmer's callers."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Any, Mapping

from .config import DEFAULT_HIDE_START_END, DEFAULT_TRIM_KM

_LOG = logging.getLogger(__name__)


def _coerce_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
        return default
    if isinstance(value, (int, float)):
        return bool(value)
    return default


def _coerce_km(value: Any, default: float) -> float:
    try:
        km = float(value)
    except (TypeError, ValueError):
        _LOG.debug("Ignoring invalid trim distance %r", value)
        return default
    if not math.isfinite(km):
        _LOG.debug("Ignoring non-finite trim distance %r", value)
        return default
    return max(0.0, km)


@dataclass(frozen=True, slots=True)
class Settings:
    """Privacy settings for shared routes.

    Attributes:
        hide_start_end: Trim the shared route when True.
        trim_km: Distance hidden at each end, in kilometres (clamped to >= 0).
    """

    hide_start_end: bool = DEFAULT_HIDE_START_END
    trim_km: float = DEFAULT_TRIM_KM

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "hide_start_end",
            _coerce_bool(self.hide_start_end, DEFAULT_HIDE_START_END),
        )
        object.__setattr__(self, "trim_km", _coerce_km(self.trim_km, DEFAULT_TRIM_KM))

    @property
    def trim_m(self) -> float:
        return self.trim_km * 1000.0

    @classmethod
    def from_mapping(cls, stored: Mapping[str, Any] | None) -> "Settings":
        """Overlay stored values (``hideStartEnd``/``trimKm``) on the defaults."""

        if not stored:
            return cls()
        hide = stored.get("hideStartEnd", stored.get("hide_start_end"))
        trim = stored.get("trimKm", stored.get("trim_km"))
        return cls(
            hide_start_end=_coerce_bool(hide, DEFAULT_HIDE_START_END),
            trim_km=DEFAULT_TRIM_KM if trim is None else trim,
        )

    def to_mapping(self) -> dict[str, Any]:
        return {"hideStartEnd": self.hide_start_end, "trimKm": self.trim_km}

    def updated(self, **changes: Any) -> "Settings":
        return replace(self, **changes)


__all__ = ["Settings"]
