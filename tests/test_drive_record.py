import pytest

from drive_telemetry.drive_record import build_drive_record
from drive_telemetry.errors import DiscardableTripError
from drive_telemetry.finalizer import finalize
from drive_telemetry.models import LiveStats
from drive_telemetry.polyline_codec import decode_polyline, encode_polyline
from drive_telemetry.recorder import RecordingResult
from drive_telemetry.settings import Settings
from drive_telemetry.trimming import trim_route
from conftest import make_meridian_route, make_point


def _result(points) -> RecordingResult:
    points = tuple(points)
    return RecordingResult(points=points, live=LiveStats(point_count=len(points)), stats=finalize(points))


def test_payload_uses_finalized_stats(delhi_points) -> None:
    start_ms = 1_700_000_000_000
    points = [make_point(p.latitude, p.longitude, start_ms + p.timestamp_ms, p.speed_mps) for p in delhi_points]
    record = build_drive_record(_result(points), Settings(hide_start_end=False))
    payload = record.to_payload()
    assert payload["started_at"] == "2023-11-14T22:13:20+00:00"
    assert payload["ended_at"] == "2023-11-14T22:13:40+00:00"
    assert payload["duration_s"] == 20
    assert payload["distance_m"] == 122
    assert payload["avg_kmh"] == pytest.approx(22.02)
    assert payload["top_kmh"] == pytest.approx(10.8)
    assert payload["hide_start_end"] is False
    assert payload["polyline_raw"] == encode_polyline(points)
    assert payload["polyline_shared"] == payload["polyline_raw"]


def test_hidden_route_is_trimmed() -> None:
    route = make_meridian_route(41)
    record = build_drive_record(_result(route), Settings(hide_start_end=True, trim_km=1.0))
    assert record.hide_start_end is True
    assert record.polyline_shared != record.polyline_raw
    shared = decode_polyline(record.polyline_shared)
    assert len(shared) == len(trim_route(route, 1000.0))
    # full route is still stored privately
    assert len(decode_polyline(record.polyline_raw)) == len(route)


def test_short_route_shares_full_polyline_when_hidden() -> None:
    route = make_meridian_route(5)
    record = build_drive_record(_result(route), Settings(hide_start_end=True, trim_km=1.0))
    assert record.polyline_shared == record.polyline_raw


@pytest.mark.parametrize("count", [0, 1])
def test_discardable_recording_raises(count) -> None:
    with pytest.raises(DiscardableTripError):
        build_drive_record(_result(make_meridian_route(count)), Settings())
