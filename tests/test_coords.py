from __future__ import annotations

from decimal import Decimal

import pytest

from latlng.coords import LatLng, normalize_latitude, normalize_longitude
from latlng.errors import InvalidArgumentError
from latlng.formatting import format_degrees


@pytest.mark.parametrize(
    "raw, expected",
    [
        (0, "0"),
        (179.5, "179.5"),
        (180, "180"),
        (181, "-179"),
        (-180, "180"),
        (-181, "179"),
        (360, "0"),
        (540, "180"),
        (-725, "-5"),
    ],
)
def test_normalize_longitude_wraps_into_half_open_range(raw, expected):
    assert normalize_longitude(raw) == Decimal(expected)


def test_normalize_latitude_squashes_at_poles():
    assert normalize_latitude(95) == Decimal(90)
    assert normalize_latitude(-91.5) == Decimal(-90)
    assert normalize_latitude(45.25) == Decimal("45.25")


def test_latlng_is_normalized_and_quantized():
    p = LatLng(91, 190)
    assert p.latitude == Decimal(90)
    assert p.longitude == Decimal(-170)
    assert p.is_pole()

    q = LatLng(0.1, "-3.0000004")
    assert q.latitude == Decimal("0.100000")
    assert q.longitude == Decimal("-3.000000")
    assert q.lat_float == pytest.approx(0.1)


def test_latlng_equality_uses_normalized_values():
    assert LatLng(10, -180) == LatLng(10, 180)
    assert hash(LatLng(10, 540)) == hash(LatLng(10, 180))


@pytest.mark.parametrize("lat, lng, argument", [
    (float("nan"), 0, "latitude"),
    (0, float("inf"), "longitude"),
    ("north", 0, "latitude"),
])
def test_latlng_rejects_unusable_values(lat, lng, argument):
    with pytest.raises(InvalidArgumentError) as exc:
        LatLng(lat, lng)
    assert exc.value.argument == argument


def test_string_rendering():
    assert str(LatLng(10, -20.5)) == "(10.0, -20.5)"
    assert format_degrees(Decimal("177.5000")) == "177.5"
    assert format_degrees(Decimal("-0.0000001")) == "0.0"


@pytest.mark.parametrize("raw", [180.0000004, -179.9999999, "-180.0000003"])
def test_longitude_rounding_onto_the_antimeridian_lands_on_180(raw):
    assert normalize_longitude(raw) == Decimal(180)
    assert LatLng(0, raw) == LatLng(0, 180)
    assert hash(LatLng(0, raw)) == hash(LatLng(0, 180))
