from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal, localcontext

from latlng.config import to_degrees
from latlng.errors import InvalidArgumentError
from latlng.formatting import format_degrees

DEGREE_90 = Decimal(90)
DEGREE_180 = Decimal(180)
DEGREE_360 = Decimal(360)

DegreeInput = float | int | str | Decimal


def _as_decimal(value: DegreeInput, argument: str) -> Decimal:
    if isinstance(value, Decimal):
        d = value
    elif isinstance(value, str):
        try:
            d = Decimal(value.strip())
        except ArithmeticError:
            raise InvalidArgumentError(argument, f"not a number: {value!r}") from None
    else:
        d = Decimal(value)
    if not d.is_finite():
        raise InvalidArgumentError(argument, f"must be finite, got {value!r}")
    return d


def normalize_latitude(latitude: DegreeInput) -> Decimal:
    """
    Squash a latitude into [-90, 90].

    Values past a pole clamp to that pole; they never wrap into the other hemisphere.
    """
    d = _as_decimal(latitude, "latitude")
    if d > DEGREE_90:
        d = DEGREE_90
    elif d < -DEGREE_90:
        d = -DEGREE_90
    return to_degrees(d)


def normalize_longitude(longitude: DegreeInput) -> Decimal:
    """
    Wrap a longitude into (-180, 180].

    Rounding happens before the wrap, so a value that rounds onto -180 still ends up as 180.
    """
    d = _as_decimal(longitude, "longitude")
    with localcontext() as ctx:
        # Remainder needs the integer quotient to fit the context precision.
        ctx.prec = max(ctx.prec, d.adjusted() + 20)
        d = to_degrees(d)
        # Decimal % keeps the sign of the dividend.
        d = d % DEGREE_360
    if d > DEGREE_180:
        d -= DEGREE_360
    elif d <= -DEGREE_180:
        d += DEGREE_360
    return d


@dataclass(frozen=True, init=False)
class LatLng:
    """
    A point on the globe in decimal degrees.

    Both components are stored as quantized Decimals so that bound comparisons are
    exact; latitude is squashed into [-90, 90] and longitude wrapped into (-180, 180].
    """

    latitude: Decimal
    longitude: Decimal

    def __init__(self, latitude: DegreeInput, longitude: DegreeInput) -> None:
        object.__setattr__(self, "latitude", normalize_latitude(latitude))
        object.__setattr__(self, "longitude", normalize_longitude(longitude))

    @property
    def lat_float(self) -> float:
        return float(self.latitude)

    @property
    def lng_float(self) -> float:
        return float(self.longitude)

    def is_pole(self) -> bool:
        return abs(self.latitude) == DEGREE_90

    def __str__(self) -> str:
        return f"({format_degrees(self.latitude)}, {format_degrees(self.longitude)})"


def is_finite_number(value: object) -> bool:
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return math.isfinite(value)
    return False
