import math

import pytest

from tsroute.geometry import Point2, Point3
from tsroute.pointprocessor import (
    calculate_xy_angle,
    calculate_xy_distance,
    utm_to_wgs84,
    wgs84_to_utm,
)


@pytest.mark.parametrize(
    "lat, lon, zone",
    [
        (56.7778, -5.024737, 30),
        (56.809481, -5.025113, 30),
        (51.5, -0.12, 30),
        (45.0, 10.0, 32),
    ],
)
def test_northern_round_trip(lat, lon, zone):
    utm = wgs84_to_utm(Point3(lat, lon, 123.0))
    back = utm_to_wgs84(utm, zone, True)
    assert back.x == pytest.approx(lat, abs=1e-7)
    assert back.y == pytest.approx(lon, abs=1e-7)
    assert back.z == 123.0


def test_southern_round_trip():
    utm = wgs84_to_utm(Point2(-33.9, 18.4))
    back = utm_to_wgs84(utm, 34, False)
    assert back.x == pytest.approx(-33.9, abs=1e-7)
    assert back.y == pytest.approx(18.4, abs=1e-7)


def test_southern_northing_uses_false_northing():
    utm = wgs84_to_utm(Point2(-10.0, 3.0))
    assert 0 < utm.y < 10_000_000


def test_equator_on_central_meridian():
    utm = wgs84_to_utm(Point2(0.0, 3.0))
    assert utm.x == pytest.approx(500_000.0, abs=1e-6)
    assert utm.y == pytest.approx(0.0, abs=1e-6)


def test_reverse_of_zone_origin():
    p = utm_to_wgs84(Point2(500_000.0, 0.0), 31, True)
    assert p.x == pytest.approx(0.0, abs=1e-9)
    assert p.y == pytest.approx(3.0, abs=1e-9)


def test_eastings_symmetric_about_central_meridian():
    west = wgs84_to_utm(Point2(56.8, -5.0))
    east = wgs84_to_utm(Point2(56.8, -1.0))
    assert west.x + east.x == pytest.approx(1_000_000.0, abs=1e-6)
    assert west.y == pytest.approx(east.y, abs=1e-6)


def test_norway_exception_zone():
    utm = wgs84_to_utm(Point2(60.0, 5.0))
    back = utm_to_wgs84(utm, 32, True)
    assert back.x == pytest.approx(60.0, abs=1e-7)
    assert back.y == pytest.approx(5.0, abs=1e-7)


def test_type_is_preserved():
    p2 = wgs84_to_utm(Point2(56.0, -5.0))
    p3 = wgs84_to_utm(Point3(56.0, -5.0, 1.0))
    assert isinstance(p2, Point2) and isinstance(p3, Point3)
    assert p3.xy == p2


@pytest.mark.parametrize("lat", [91.0, -95.0, 85.0, -81.0])
def test_forward_rejects_out_of_band_latitude(lat):
    with pytest.raises(ValueError):
        wgs84_to_utm(Point2(lat, 0.0))


@pytest.mark.parametrize(
    "point, zone, northern",
    [
        (Point2(2_000_000.0, 100.0), 30, True),
        (Point2(500_000.0, 12_000_000.0), 30, True),
        (Point2(500_000.0, 100.0), 30, False),
        (Point2(500_000.0, 100.0), 0, True),
        (Point2(500_000.0, 100.0), 61, True),
    ],
)
def test_reverse_rejects_out_of_range(point, zone, northern):
    with pytest.raises(ValueError):
        utm_to_wgs84(point, zone, northern)


def test_xy_distance_ignores_z():
    assert calculate_xy_distance(Point3(0, 0, 5), Point3(3, 4, -2)) == pytest.approx(5.0)


def test_xy_distance_symmetric():
    a, b = Point3(1.5, -2.0, 0), Point3(-7.0, 3.0, 9)
    assert calculate_xy_distance(a, b) == calculate_xy_distance(b, a)


def test_xy_angle():
    assert calculate_xy_angle(Point3(0, 0, 0), Point3(0, 1, 0)) == pytest.approx(math.pi / 2)
    assert calculate_xy_angle(Point3(0, 0, 0), Point3(1, 0, 7)) == 0.0