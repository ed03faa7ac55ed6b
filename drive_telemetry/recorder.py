"""Live recording session for a single drive.

The recorder owns the session state. A location source delivers samples to
:meth:`TripRecorder.ingest` and a background ticker advances the wall-clock
duration once a second. All mutations happen under one lock so a concurrent
``stop()`` always observes a consistent snapshot.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional, Protocol, Tuple

from .config import RECORDER_TICK_SECONDS
from .finalizer import finalize
from .geodesy import haversine_m, speed_kmh_from_mps
from .models import LiveStats, TrackPoint, TripStats

PERMISSION_DENIED = "permission_denied"
ALREADY_RECORDING = "already_recording"

SampleCallback = Callable[[TrackPoint], None]
Clock = Callable[[], float]


class RecorderState(Enum):
    IDLE = "idle"
    RECORDING = "recording"
    STOPPED = "stopped"


class Subscription(Protocol):
    def remove(self) -> None:
        """Stop delivering samples to the watcher."""


class LocationSource(Protocol):
    """Capability the recorder needs from the device location service."""

    def request_permission(self) -> bool:
        """Return True when foreground location access is granted."""

    def watch(self, callback: SampleCallback) -> Subscription:
        """Start delivering samples to ``callback`` until removed."""


@dataclass(frozen=True, slots=True)
class StartResult:
    """Outcome of :meth:`TripRecorder.start`; falsy when the start was declined."""

    started: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.started


@dataclass(frozen=True, slots=True)
class RecordingResult:
    """Everything handed back to the caller when a recording stops.

    ``live`` holds the figures accumulated while recording (duration measured
    by the wall clock); ``stats`` holds the figures recomputed from
    ``points`` by :func:`~drive_telemetry.finalizer.finalize`.
    """

    points: Tuple[TrackPoint, ...]
    live: LiveStats
    stats: TripStats

    @property
    def is_discardable(self) -> bool:
        return len(self.points) < 2

    @property
    def route(self) -> List[dict[str, Any]]:
        return [point.to_route_dict() for point in self.points]


@dataclass(slots=True)
class _Session:
    started_at: float
    points: List[TrackPoint] = field(default_factory=list)
    distance_m: float = 0.0
    top_kmh: float = 0.0
    current_kmh: float = 0.0
    duration_s: int = 0

    def snapshot(self) -> LiveStats:
        return LiveStats(
            distance_m=self.distance_m,
            top_kmh=self.top_kmh,
            current_kmh=self.current_kmh,
            duration_s=self.duration_s,
            point_count=len(self.points),
        )


@dataclass(slots=True)
class _Handles:
    subscription: Optional[Subscription] = None
    ticker: Optional[threading.Thread] = None
    ticker_stop: Optional[threading.Event] = None


class TripRecorder:
    """State machine driving one recording session at a time.

    States move IDLE -> RECORDING -> STOPPED; ``start()`` is accepted from
    IDLE or STOPPED and ``reset()`` returns to IDLE from anywhere. Samples
    delivered outside RECORDING are ignored.
    """

    def __init__(
        self,
        location_source: LocationSource,
        *,
        clock: Clock = time.monotonic,
        tick_interval_s: float = RECORDER_TICK_SECONDS,
    ) -> None:
        self._log = logging.getLogger(self.__class__.__name__)
        self._source = location_source
        self._clock = clock
        self._tick_interval_s = tick_interval_s
        self._lock = threading.Lock()
        self._state = RecorderState.IDLE
        self._session: Optional[_Session] = None
        self._handles = _Handles()
        self._last_result: Optional[RecordingResult] = None

    @property
    def state(self) -> RecorderState:
        with self._lock:
            return self._state

    @property
    def points(self) -> Tuple[TrackPoint, ...]:
        with self._lock:
            return tuple(self._session.points) if self._session else ()

    def snapshot(self) -> LiveStats:
        """Return the current running counters (zeros when idle)."""

        with self._lock:
            return self._session.snapshot() if self._session else LiveStats()

    def start(self) -> StartResult:
        with self._lock:
            if self._state is RecorderState.RECORDING:
                return StartResult(False, ALREADY_RECORDING)

        if not self._source.request_permission():
            self._log.info("Location permission denied; recording not started")
            return StartResult(False, PERMISSION_DENIED)

        with self._lock:
            if self._state is RecorderState.RECORDING:
                return StartResult(False, ALREADY_RECORDING)
            stale = self._detach_locked()
            session = _Session(started_at=self._clock())
            self._session = session
            self._state = RecorderState.RECORDING
            self._last_result = None
            ticker_stop = threading.Event()
            ticker: Optional[threading.Thread] = None
            if self._tick_interval_s > 0:
                ticker = threading.Thread(
                    target=self._run_ticker,
                    args=(ticker_stop,),
                    name="trip-recorder-ticker",
                    daemon=True,
                )
            self._handles = _Handles(ticker=ticker, ticker_stop=ticker_stop)
        self._teardown(stale)
        if ticker is not None:
            ticker.start()

        try:
            subscription = self._source.watch(self.ingest)
        except Exception:
            with self._lock:
                failed = _Handles()
                if self._session is session:
                    self._state = RecorderState.IDLE
                    self._session = None
                    failed = self._detach_locked()
            self._teardown(failed)
            self._log.warning("Location watch failed; recording not started")
            raise
        with self._lock:
            if self._session is session and self._state is RecorderState.RECORDING:
                self._handles.subscription = subscription
                subscription = None
        if subscription is not None:
            # stop() or reset() won the race while we were subscribing.
            self._teardown(_Handles(subscription=subscription))
        self._log.info("Recording started")
        return StartResult(True)

    def ingest(self, sample: TrackPoint) -> None:
        """Apply one location sample to the running session."""

        with self._lock:
            session = self._session
            if self._state is not RecorderState.RECORDING or session is None:
                return
            if session.points:
                session.distance_m += haversine_m(session.points[-1], sample)
            session.points.append(sample)
            speed = sample.speed_mps
            current_kmh = 0.0
            if speed is not None and speed > 0:
                current_kmh = speed_kmh_from_mps(speed)
            session.current_kmh = current_kmh
            if current_kmh > 0:
                session.top_kmh = max(session.top_kmh, current_kmh)

    def tick(self) -> None:
        """Refresh the elapsed duration from the clock while recording."""

        with self._lock:
            if self._state is RecorderState.RECORDING and self._session is not None:
                self._session.duration_s = self._elapsed_s(self._session)

    def stop(self) -> Optional[RecordingResult]:
        """Stop recording and return the captured points with both stat sets.

        Returns the same result again when already stopped and ``None`` when
        no session was ever started.
        """

        with self._lock:
            if self._state is RecorderState.STOPPED:
                return self._last_result
            session = self._session
            if self._state is RecorderState.IDLE or session is None:
                return None
            self._state = RecorderState.STOPPED
            session.duration_s = self._elapsed_s(session)
            session.current_kmh = 0.0
            points = tuple(session.points)
            result = RecordingResult(
                points=points,
                live=session.snapshot(),
                stats=finalize(points),
            )
            self._last_result = result
            handles = self._detach_locked()
        self._teardown(handles)
        self._log.info(
            "Recording stopped: points=%s distance=%.1fm duration=%ss",
            len(points),
            result.stats.distance_m,
            result.live.duration_s,
        )
        return result

    def reset(self) -> None:
        """Discard any session and return to IDLE."""

        with self._lock:
            self._state = RecorderState.IDLE
            self._session = None
            self._last_result = None
            handles = self._detach_locked()
        self._teardown(handles)

    def _elapsed_s(self, session: _Session) -> int:
        return max(0, int(math.floor(self._clock() - session.started_at)))

    def _run_ticker(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self._tick_interval_s):
            self.tick()

    def _detach_locked(self) -> _Handles:
        handles = self._handles
        self._handles = _Handles()
        return handles

    def _teardown(self, handles: _Handles) -> None:
        if handles.ticker_stop is not None:
            handles.ticker_stop.set()
        if handles.subscription is not None:
            try:
                handles.subscription.remove()
            except Exception:
                self._log.warning(
                    "Failed to remove location subscription", exc_info=True
                )
        ticker = handles.ticker
        if ticker is None or ticker is threading.current_thread():
            return
        if ticker.is_alive():
            ticker.join(timeout=max(self._tick_interval_s, 0.0) + 1.0)


__all__ = [
    "RecorderState",
    "LocationSource",
    "Subscription",
    "StartResult",
    "RecordingResult",
    "TripRecorder",
    "PERMISSION_DENIED",
    "ALREADY_RECORDING",
]
