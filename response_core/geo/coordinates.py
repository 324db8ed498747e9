"""
Coordinate and timestamp parsing.

Coordinates reach the core as typed values, (lat, lng) pairs, plain mappings
or JSON text. ``parse_coordinate`` folds all of them into one tagged result so
the classifier, the router and the HTTP layer validate the same way.
"""
import json
import math
import re
from dataclasses import dataclass
from datetime import datetime, UTC
from enum import Enum
from typing import Any, Mapping, Optional, Sequence

from ..errors import InvalidCoordinate, InvalidTimestamp

EARTH_RADIUS_KM = 6371.0

_DMS_PATTERN = re.compile(r"(\d+(?:\.\d+)?)°\s*(\d+(?:\.\d+)?)'\s*(\d+(?:\.\d+)?)\"")


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lng: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.lat, self.lng)

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lng": self.lng}


class CoordinateFailure(str, Enum):
    MISSING = "missing"
    MALFORMED = "malformed"
    NOT_NUMERIC = "not_numeric"
    LATITUDE_OUT_OF_RANGE = "latitude_out_of_range"
    LONGITUDE_OUT_OF_RANGE = "longitude_out_of_range"
    NULL_ISLAND = "null_island"


@dataclass(frozen=True)
class CoordinateParse:
    """Tagged parse result: exactly one of ``coordinate`` / ``failure`` is set."""
    coordinate: Optional[Coordinate] = None
    failure: Optional[CoordinateFailure] = None

    @property
    def ok(self) -> bool:
        return self.coordinate is not None


def _fail(reason: CoordinateFailure) -> CoordinateParse:
    return CoordinateParse(failure=reason)


def _to_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _extract_pair(raw: Any):
    if isinstance(raw, Mapping):
        lat = raw.get("lat", raw.get("latitude"))
        lng = raw.get("lng", raw.get("longitude"))
        if lat is None or lng is None:
            return None
        return lat, lng
    if isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)) and len(raw) == 2:
        return raw[0], raw[1]
    return None


def check_coordinate(lat: float, lng: float) -> CoordinateParse:
    if lat < -90 or lat > 90:
        return _fail(CoordinateFailure.LATITUDE_OUT_OF_RANGE)
    if lng < -180 or lng > 180:
        return _fail(CoordinateFailure.LONGITUDE_OUT_OF_RANGE)
    if lat == 0 and lng == 0:
        return _fail(CoordinateFailure.NULL_ISLAND)
    return CoordinateParse(coordinate=Coordinate(lat=lat, lng=lng))


def parse_coordinate(raw: Any) -> CoordinateParse:
    """Parse and validate a loosely-typed coordinate."""
    if raw is None:
        return _fail(CoordinateFailure.MISSING)
    if isinstance(raw, Coordinate):
        return check_coordinate(raw.lat, raw.lng)
    if isinstance(raw, (str, bytes)):
        text = raw.decode() if isinstance(raw, bytes) else raw
        if not text.strip():
            return _fail(CoordinateFailure.MISSING)
        try:
            raw = json.loads(text)
        except ValueError:
            return _fail(CoordinateFailure.MALFORMED)

    pair = _extract_pair(raw)
    if pair is None:
        return _fail(CoordinateFailure.MALFORMED)

    lat, lng = _to_float(pair[0]), _to_float(pair[1])
    if lat is None or lng is None:
        return _fail(CoordinateFailure.NOT_NUMERIC)
    return check_coordinate(lat, lng)


def require_coordinate(raw: Any) -> Coordinate:
    result = parse_coordinate(raw)
    if not result.ok:
        raise InvalidCoordinate(result.failure.value, raw)
    return result.coordinate


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in kilometres."""
    dlat = math.radians(b.lat - a.lat)
    dlng = math.radians(b.lng - a.lng)
    x = math.sin(dlat / 2) ** 2 + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(dlng / 2) ** 2
    c = 2 * math.atan2(math.sqrt(x), math.sqrt(1 - x))
    return EARTH_RADIUS_KM * c


def dms_to_decimal(value: Any, ref: str = "") -> float:
    """
    Convert an EXIF GPS component to signed decimal degrees.

    Accepts [deg, min, sec] / [deg, min] sequences, ``{"value": ...}`` objects,
    ``D° M' S"`` strings and plain numbers. ``S`` and ``W`` references negate.
    """
    decimal = 0.0
    if isinstance(value, Mapping) and "value" in value:
        value = value["value"]

    if isinstance(value, (list, tuple)):
        parts = [_to_float(p) or 0.0 for p in value]
        if len(parts) >= 3:
            decimal = parts[0] + parts[1] / 60 + parts[2] / 3600
        elif len(parts) == 2:
            decimal = parts[0] + parts[1] / 60
        elif len(parts) == 1:
            decimal = parts[0]
    elif isinstance(value, str):
        match = _DMS_PATTERN.search(value)
        if match:
            degrees, minutes, seconds = (float(g) for g in match.groups())
            decimal = degrees + minutes / 60 + seconds / 3600
        else:
            decimal = _to_float(value) or 0.0
    else:
        decimal = _to_float(value) or 0.0

    if ref.strip().upper() in ("S", "W"):
        decimal = -decimal
    return decimal


def parse_timestamp(value: Any) -> datetime:
    """Parse ISO-8601 text or a datetime into naive UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            raise InvalidTimestamp(value) from None
    else:
        raise InvalidTimestamp(value)

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)
    return parsed


def format_timestamp(value: datetime) -> str:
    return value.isoformat()
