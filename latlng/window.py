from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Generic, TypeVar

from latlng.aoi import BBox
from latlng.config import to_degrees
from latlng.coords import (
    DEGREE_180,
    DEGREE_360,
    LatLng,
    is_finite_number,
    normalize_latitude,
    normalize_longitude,
)
from latlng.errors import InvalidArgumentError
from latlng.formatting import format_degrees
from latlng.units import (
    LengthUnit,
    latitude_delta_to_length,
    length_to_latitude_delta,
    length_to_longitude_delta,
    longitude_delta_to_length,
)

logger = logging.getLogger(__name__)

W = TypeVar("W", bound="LatLngWindow")

_ZERO = Decimal(0)


class LatLngWindow(ABC, Generic[W]):
    """
    A region of the globe that can answer membership and intersection queries.
    """

    @property
    @abstractmethod
    def center(self) -> LatLng: ...

    @abstractmethod
    def contains(self, point: LatLng) -> bool: ...

    @abstractmethod
    def overlaps(self, window: W) -> bool: ...


@dataclass(frozen=True)
class _WindowState:
    center: LatLng
    latitude_delta: Decimal
    longitude_delta: Decimal
    min_latitude: Decimal
    max_latitude: Decimal
    # normalize(center - delta / 2) and normalize(center + delta / 2)
    left_longitude: Decimal
    right_longitude: Decimal
    crosses_antimeridian: bool

    @property
    def full_longitude(self) -> bool:
        return self.longitude_delta >= DEGREE_360


def _coerce_unit(unit: LengthUnit | str) -> LengthUnit:
    return unit if isinstance(unit, LengthUnit) else LengthUnit.from_name(unit)


class RectangularWindow(LatLngWindow["RectangularWindow"]):
    """
    A "pseudo-rectangular" window bounded by min/max latitude and left/right longitude.

    The larger the window, the less rectangular it really is. A window spans at most
    180 degrees of latitude and 360 degrees of longitude.

    The requested latitude span is not a guarantee: bounds that would pass a pole are
    squashed onto it. A window centered on (90, 0) with a 10 degree span ends up with
    max latitude 90 and min latitude 85.

    Windows crossing the antimeridian keep `left_longitude > right_longitude`; the
    covered longitudes are then [left, 180] plus [-180, right].
    """

    def __init__(
        self,
        center: LatLng,
        delta_lat: float | Decimal,
        delta_lng: float | Decimal,
    ) -> None:
        self._state: _WindowState
        self.set_window(center, delta_lat, delta_lng)

    @classmethod
    def from_size(
        cls,
        center: LatLng,
        width: float,
        height: float,
        unit: LengthUnit | str,
    ) -> "RectangularWindow":
        """
        Window covering `height / 2` north and south and `width / 2` east and west of center.

        Width is measured along the center's parallel, so in the northern hemisphere the
        top edge is narrower than the bottom one.
        """
        delta_lat, delta_lng = _size_to_deltas(center, width, height, unit)
        return cls(center, delta_lat, delta_lng)

    @classmethod
    def square(cls, center: LatLng, size: float, unit: LengthUnit | str) -> "RectangularWindow":
        return cls.from_size(center, size, size, unit)

    def set_window(
        self,
        center: LatLng,
        delta_lat: float | Decimal,
        delta_lng: float | Decimal,
    ) -> None:
        """
        Recompute every bound from a center and angular spans in degrees.

        Arguments are validated before anything changes; on error the previous window
        is kept as-is.
        """
        if center is None:
            raise InvalidArgumentError("center", "a center point is required")
        if not is_finite_number(delta_lat):
            raise InvalidArgumentError("delta_lat", f"must be a finite number, got {delta_lat!r}")
        if not is_finite_number(delta_lng):
            raise InvalidArgumentError("delta_lng", f"must be a finite number, got {delta_lng!r}")

        dlat = to_degrees(min(abs(Decimal(delta_lat)), DEGREE_180))
        dlng = to_degrees(min(abs(Decimal(delta_lng)), DEGREE_360))

        min_lat, max_lat = _latitude_bounds(center.latitude, dlat)
        left, right, crosses = _longitude_bounds(center.longitude, dlng)

        state = _WindowState(
            center=center,
            latitude_delta=dlat,
            longitude_delta=dlng,
            min_latitude=min_lat,
            max_latitude=max_lat,
            left_longitude=left,
            right_longitude=right,
            crosses_antimeridian=crosses,
        )
        # Single assignment: readers see the old window or the new one, never a mix.
        self._state = state
        logger.debug("window set: %s", self)

    def set_window_size(
        self,
        center: LatLng,
        width: float,
        height: float,
        unit: LengthUnit | str,
    ) -> None:
        delta_lat, delta_lng = _size_to_deltas(center, width, height, unit)
        self.set_window(center, delta_lat, delta_lng)

    def contains(self, point: LatLng) -> bool:
        s = self._state

        latitude = point.latitude
        if latitude > s.max_latitude or latitude < s.min_latitude:
            return False

        if s.full_longitude:
            return True

        longitude = point.longitude
        if s.crosses_antimeridian:
            # Split window: [left, 180] for the eastern half, [-180, right] for the western.
            if longitude < _ZERO and longitude > s.right_longitude:
                return False
            if longitude >= _ZERO and longitude < s.left_longitude:
                return False
        elif longitude > s.right_longitude or longitude < s.left_longitude:
            return False
        return True

    def overlaps(self, window: "RectangularWindow") -> bool:
        s = self._state
        o = window._state

        if o.max_latitude < s.min_latitude or o.min_latitude > s.max_latitude:
            return False

        if s.full_longitude or o.full_longitude:
            return True

        this_left = s.left_longitude
        this_right = s.right_longitude
        that_left = o.left_longitude
        that_right = o.right_longitude
        # Both intervals are laid out on one number line starting at this_left.
        # that_left is deliberately left untouched.
        if this_right < this_left:
            this_right += DEGREE_360
        if that_right < this_left:
            that_right += DEGREE_360

        if this_right < that_left or this_left > that_right:
            return False
        return True

    def height(self, unit: LengthUnit | str) -> float:
        return latitude_delta_to_length(float(self._state.latitude_delta), _coerce_unit(unit))

    def width(self, unit: LengthUnit | str) -> float:
        """
        Width of the window along the center's parallel.
        """
        s = self._state
        return longitude_delta_to_length(
            float(s.longitude_delta), _coerce_unit(unit), s.center.lat_float
        )

    def to_bboxes(self) -> list[BBox]:
        """
        The window as plain lon/lat boxes: two of them when it crosses the antimeridian.
        """
        s = self._state
        min_lat = float(s.min_latitude)
        max_lat = float(s.max_latitude)
        if s.full_longitude:
            return [BBox(min_lon=-180.0, min_lat=min_lat, max_lon=180.0, max_lat=max_lat)]
        left = float(s.left_longitude)
        right = float(s.right_longitude)
        if s.crosses_antimeridian:
            return [
                BBox(min_lon=left, min_lat=min_lat, max_lon=180.0, max_lat=max_lat),
                BBox(min_lon=-180.0, min_lat=min_lat, max_lon=right, max_lat=max_lat),
            ]
        return [BBox(min_lon=left, min_lat=min_lat, max_lon=right, max_lat=max_lat)]

    @property
    def center(self) -> LatLng:
        return self._state.center

    @property
    def crosses_antimeridian(self) -> bool:
        """
        True when the window spans the 180th meridian.

        Code using the raw bounds must then test whether a longitude lies *outside*
        (right, left) instead of between left and right.
        """
        return self._state.crosses_antimeridian

    @property
    def latitude_delta(self) -> Decimal:
        return self._state.latitude_delta

    @property
    def longitude_delta(self) -> Decimal:
        return self._state.longitude_delta

    @property
    def min_latitude(self) -> Decimal:
        return self._state.min_latitude

    @property
    def max_latitude(self) -> Decimal:
        return self._state.max_latitude

    @property
    def left_longitude(self) -> Decimal:
        return self._state.left_longitude

    @property
    def right_longitude(self) -> Decimal:
        return self._state.right_longitude

    def __str__(self) -> str:
        s = self._state
        return (
            f"center: {s.center}; "
            f"lat range: [{format_degrees(s.min_latitude)},{format_degrees(s.max_latitude)}]; "
            f"lng range: [{format_degrees(s.left_longitude)},{format_degrees(s.right_longitude)}]; "
            f"meridian? {s.crosses_antimeridian}"
        )

    def __repr__(self) -> str:
        s = self._state
        return (
            f"RectangularWindow(center={s.center!r}, "
            f"delta_lat={s.latitude_delta!r}, delta_lng={s.longitude_delta!r})"
        )


def _size_to_deltas(
    center: LatLng, width: float, height: float, unit: LengthUnit | str
) -> tuple[float, float]:
    if center is None:
        raise InvalidArgumentError("center", "a center point is required")
    u = _coerce_unit(unit)
    delta_lat = length_to_latitude_delta(height, u)
    delta_lng = length_to_longitude_delta(width, u, center.lat_float)
    return delta_lat, delta_lng


def _latitude_bounds(center_lat: Decimal, dlat: Decimal) -> tuple[Decimal, Decimal]:
    # Round one edge and derive the other from it so the span stays exactly dlat.
    low = to_degrees(center_lat - dlat / 2)
    lat1 = normalize_latitude(low + dlat)
    lat2 = normalize_latitude(low)
    if lat1 - lat2 < dlat:
        logger.debug(
            "latitude span squashed at pole: requested %s, got [%s, %s]", dlat, lat2, lat1
        )
    return min(lat1, lat2), max(lat1, lat2)


def _longitude_bounds(center_lng: Decimal, dlng: Decimal) -> tuple[Decimal, Decimal, bool]:
    left = to_degrees(center_lng - dlng / 2)
    right = left + dlng
    # -180 normalizes to 180, so a left edge sitting exactly on it already wraps.
    crosses = right > DEGREE_180 or left <= -DEGREE_180
    if crosses:
        logger.debug("window crosses the antimeridian: raw lng edges [%s, %s]", left, right)
    return normalize_longitude(left), normalize_longitude(right), crosses
