import random

import pytest

from drive_telemetry.errors import PolylineDecodeError
from drive_telemetry.polyline_codec import (
    decode_polyline,
    decode_polyline_strict,
    encode_polyline,
)
from conftest import make_point

REFERENCE_POINTS = [(38.5, -120.2), (40.7, -120.95), (43.252, -126.453)]
REFERENCE_POLYLINE = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"


def test_reference_fixture_encodes() -> None:
    assert encode_polyline(REFERENCE_POINTS) == REFERENCE_POLYLINE


def test_reference_fixture_decodes() -> None:
    decoded = decode_polyline(REFERENCE_POLYLINE)
    assert decoded == [pytest.approx(p) for p in REFERENCE_POINTS]


def test_empty_inputs() -> None:
    assert encode_polyline([]) == ""
    assert decode_polyline("") == []
    assert decode_polyline(None) == []
    assert decode_polyline_strict("") == []


def test_track_points_encode_like_tuples() -> None:
    points = [make_point(lat, lon) for lat, lon in REFERENCE_POINTS]
    assert encode_polyline(points) == REFERENCE_POLYLINE


def test_single_point_round_trip() -> None:
    decoded = decode_polyline(encode_polyline([(28.6139, 77.2090)]))
    assert len(decoded) == 1
    assert decoded[0][0] == pytest.approx(28.6139, abs=0.5e-5)
    assert decoded[0][1] == pytest.approx(77.2090, abs=0.5e-5)


def test_round_trip_within_precision() -> None:
    rng = random.Random(42)
    points = [(rng.uniform(-90.0, 90.0), rng.uniform(-180.0, 180.0)) for _ in range(200)]
    decoded = decode_polyline(encode_polyline(points))
    assert len(decoded) == len(points)
    for (lat, lon), (dlat, dlon) in zip(points, decoded):
        assert abs(lat - dlat) <= 0.5e-5 + 1e-9
        assert abs(lon - dlon) <= 0.5e-5 + 1e-9


@pytest.mark.parametrize(
    "encoded",
    [
        "_p~iF",  # latitude without longitude
        "_p~iF~ps|U_",  # trailing continuation chunk
        "_p~iF ~ps|U",  # space is outside the alphabet
        "abc!",
        "éé",
    ],
)
def test_malformed_input_decodes_to_empty(encoded) -> None:
    assert decode_polyline(encoded) == []
    with pytest.raises(PolylineDecodeError):
        decode_polyline_strict(encoded)


def test_out_of_range_coordinates_are_rejected() -> None:
    encoded = encode_polyline([(95.0, 10.0)])
    assert decode_polyline(encoded) == []


def test_non_string_input_is_lenient() -> None:
    assert decode_polyline(12345) == []
    with pytest.raises(ValueError):
        decode_polyline_strict(12345)
