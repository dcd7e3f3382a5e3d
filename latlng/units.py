from __future__ import annotations

import math
from enum import Enum

from latlng.errors import InvalidArgumentError

# Mean earth radius (IUGG).
EARTH_RADIUS_KM = 6371.009


class LengthUnit(str, Enum):
    METER = "meter"
    KILOMETER = "kilometer"
    MILE = "mile"
    NAUTICAL_MILE = "nautical_mile"
    ROD = "rod"

    @property
    def meters(self) -> float:
        return _METERS_PER_UNIT[self]

    def to_meters(self, length: float) -> float:
        return length * self.meters

    def from_meters(self, meters: float) -> float:
        return meters / self.meters

    def convert_to(self, other: "LengthUnit", length: float) -> float:
        return other.from_meters(self.to_meters(length))

    @classmethod
    def from_name(cls, name: str) -> "LengthUnit":
        key = (name or "").strip().lower()
        unit = _UNIT_ALIASES.get(key)
        if unit is None:
            try:
                unit = cls(key)
            except ValueError:
                raise InvalidArgumentError("unit", f"unknown length unit {name!r}") from None
        return unit


_METERS_PER_UNIT: dict[LengthUnit, float] = {
    LengthUnit.METER: 1.0,
    LengthUnit.KILOMETER: 1_000.0,
    LengthUnit.MILE: 1_609.344,
    LengthUnit.NAUTICAL_MILE: 1_852.0,
    LengthUnit.ROD: 5.0292,
}

_UNIT_ALIASES: dict[str, LengthUnit] = {
    "m": LengthUnit.METER,
    "km": LengthUnit.KILOMETER,
    "mi": LengthUnit.MILE,
    "nmi": LengthUnit.NAUTICAL_MILE,
    "rd": LengthUnit.ROD,
}


def earth_radius(unit: LengthUnit) -> float:
    return LengthUnit.KILOMETER.convert_to(unit, EARTH_RADIUS_KM)


def _check_length(length: float) -> float:
    if not math.isfinite(length):
        raise InvalidArgumentError("length", f"must be finite, got {length!r}")
    return float(length)


def length_to_latitude_delta(length: float, unit: LengthUnit) -> float:
    """
    Degrees of latitude spanned by a north-south length; independent of where it is measured.
    """
    return math.degrees(_check_length(length) / earth_radius(unit))


def length_to_longitude_delta(length: float, unit: LengthUnit, latitude: float) -> float:
    """
    Degrees of longitude spanned by an east-west length along the given parallel.

    Meridians converge toward the poles, so the same length covers more degrees at high
    latitudes; at a pole the result is effectively unbounded (callers clamp to 360).
    """
    parallel_radius = earth_radius(unit) * math.cos(math.radians(float(latitude)))
    return math.degrees(_check_length(length) / parallel_radius)


def latitude_delta_to_length(delta: float, unit: LengthUnit) -> float:
    return math.radians(float(delta)) * earth_radius(unit)


def longitude_delta_to_length(delta: float, unit: LengthUnit, latitude: float) -> float:
    return math.radians(float(delta)) * earth_radius(unit) * math.cos(math.radians(float(latitude)))
