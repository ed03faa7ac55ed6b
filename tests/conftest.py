"""Global pytest fixtures & helpers.

Adds project root to path and provides reusable fixtures for route, recorder
and finalizer tests to avoid duplication across files.
"""
from __future__ import annotations

import os
import random
import sys
from typing import Callable, List, Optional

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from drive_telemetry.models import TrackPoint


# --- Factory helpers -------------------------------------------------
def make_point(lat, lon, ts_ms=0, speed=None):
    return TrackPoint(latitude=lat, longitude=lon, timestamp_ms=ts_ms, speed_mps=speed)


def make_meridian_route(count, step_deg=0.001, start_lat=28.6, lon=77.2, interval_ms=1000):
    """Points heading due north, ``step_deg`` apart (~111 m per 0.001 deg)."""
    return [
        make_point(start_lat + i * step_deg, lon, i * interval_ms, speed=10.0)
        for i in range(count)
    ]


def make_random_route(seed, count=50):
    rng = random.Random(seed)
    lat, lon, ts = 28.6139, 77.2090, 1_700_000_000_000
    points = []
    for _ in range(count):
        lat += rng.uniform(-0.002, 0.002)
        lon += rng.uniform(-0.002, 0.002)
        ts += rng.randint(500, 3000)
        speed = rng.choice([None, -1.0, 0.0, rng.uniform(0.0, 40.0)])
        points.append(make_point(lat, lon, ts, speed))
    return points


class FakeSubscription:
    def __init__(self):
        self.removed = 0

    def remove(self):
        self.removed += 1


class FakeLocationSource:
    """In-memory location source; tests push samples with ``emit``."""

    def __init__(self, granted=True):
        self.granted = granted
        self.permission_requests = 0
        self.callback: Optional[Callable[[TrackPoint], None]] = None
        self.subscriptions: List[FakeSubscription] = []

    def request_permission(self):
        self.permission_requests += 1
        return self.granted

    def watch(self, callback):
        self.callback = callback
        subscription = FakeSubscription()
        self.subscriptions.append(subscription)
        return subscription

    def emit(self, sample):
        assert self.callback is not None, "No watcher registered"
        self.callback(sample)


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def delhi_points():
    return [
        make_point(28.6139, 77.2090, 0, 0.0),
        make_point(28.6145, 77.2090, 10_000, 2.0),
        make_point(28.6150, 77.2090, 20_000, 3.0),
    ]


@pytest.fixture
def location_source():
    return FakeLocationSource()


@pytest.fixture
def fake_clock():
    return FakeClock()
