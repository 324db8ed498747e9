import json
from datetime import datetime, timezone, timedelta

import pytest

from response_core.errors import InvalidCoordinate, InvalidTimestamp
from response_core.geo.coordinates import (
    Coordinate,
    CoordinateFailure,
    dms_to_decimal,
    haversine_km,
    parse_coordinate,
    parse_timestamp,
    require_coordinate,
)


@pytest.mark.parametrize("raw", [
    {"lat": 8.38, "lng": 124.88},
    {"latitude": 8.38, "longitude": 124.88},
    json.dumps({"lat": 8.38, "lng": 124.88}),
    b'{"lat": "8.38", "lng": "124.88"}',
    (8.38, 124.88),
    [8.38, 124.88],
    Coordinate(8.38, 124.88),
])
def test_parse_accepts_every_shape(raw):
    result = parse_coordinate(raw)
    assert result.ok
    assert result.coordinate == Coordinate(8.38, 124.88)


@pytest.mark.parametrize("raw, failure", [
    (None, CoordinateFailure.MISSING),
    ("", CoordinateFailure.MISSING),
    ("not json", CoordinateFailure.MALFORMED),
    ({"lat": 8.38}, CoordinateFailure.MALFORMED),
    ([1, 2, 3], CoordinateFailure.MALFORMED),
    ({"lat": "north", "lng": 124.0}, CoordinateFailure.NOT_NUMERIC),
    ({"lat": True, "lng": 124.0}, CoordinateFailure.NOT_NUMERIC),
    ((0, 0), CoordinateFailure.NULL_ISLAND),
    ((90.5, 124.0), CoordinateFailure.LATITUDE_OUT_OF_RANGE),
    ((-91, 124.0), CoordinateFailure.LATITUDE_OUT_OF_RANGE),
    ((8.0, 180.01), CoordinateFailure.LONGITUDE_OUT_OF_RANGE),
])
def test_parse_reports_specific_failure(raw, failure):
    result = parse_coordinate(raw)
    assert not result.ok
    assert result.coordinate is None
    assert result.failure == failure


def test_bounds_are_inclusive():
    assert parse_coordinate((90, 180)).ok
    assert parse_coordinate((-90, -180)).ok
    assert parse_coordinate((0, 1)).ok


def test_require_coordinate_raises_with_reason():
    with pytest.raises(InvalidCoordinate) as exc:
        require_coordinate({"lat": 0, "lng": 0})
    assert exc.value.reason == "null_island"
    assert exc.value.code == "validation_error"


def test_haversine_known_distance():
    # One degree of latitude along a meridian
    assert haversine_km(Coordinate(8.0, 124.0), Coordinate(9.0, 124.0)) == pytest.approx(111.19, abs=0.01)
    assert haversine_km(Coordinate(8.0, 124.0), Coordinate(8.0, 124.0)) == 0


def test_dms_to_decimal_forms():
    assert dms_to_decimal([8, 22, 30], "N") == pytest.approx(8.375)
    assert dms_to_decimal({"value": [124, 52, 48]}, "E") == pytest.approx(124.88)
    assert dms_to_decimal("8° 22' 30\"", "S") == pytest.approx(-8.375)
    assert dms_to_decimal(124.5, "W") == -124.5


def test_parse_timestamp_normalises_to_naive_utc():
    assert parse_timestamp("2026-03-02T09:30:00Z") == datetime(2026, 3, 2, 9, 30)
    assert parse_timestamp("2026-03-02T17:30:00+08:00") == datetime(2026, 3, 2, 9, 30)
    aware = datetime(2026, 3, 2, 17, 30, tzinfo=timezone(timedelta(hours=8)))
    assert parse_timestamp(aware) == datetime(2026, 3, 2, 9, 30)


@pytest.mark.parametrize("raw", ["", "tomorrow", None, 12345])
def test_parse_timestamp_rejects_garbage(raw):
    with pytest.raises(InvalidTimestamp):
        parse_timestamp(raw)
