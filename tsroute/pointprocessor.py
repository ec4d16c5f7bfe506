"""Conversion between WGS84 latitude/longitude and UTM, plus planar helpers."""

from __future__ import annotations

import math
from typing import Tuple, TypeVar, Union

from tsroute.geometry import Point2, Point3

_P = TypeVar("_P", Point2, Point3)

_SEMI_MAJOR = 6378137.0
_FLATTENING = 1 / 298.257223563
_K0 = 0.9996
_FALSE_EASTING = 500_000.0
_FALSE_NORTHING_SOUTH = 10_000_000.0

_N = _FLATTENING / (2 - _FLATTENING)
_RECTIFYING_RADIUS = _SEMI_MAJOR / (1 + _N) * (1 + _N**2 / 4 + _N**4 / 64)
_ECC = 2 * math.sqrt(_N) / (1 + _N)

_ALPHA = (
    _N / 2 - 2 * _N**2 / 3 + 5 * _N**3 / 16,
    13 * _N**2 / 48 - 3 * _N**3 / 5,
    61 * _N**3 / 240,
)
_BETA = (
    _N / 2 - 2 * _N**2 / 3 + 37 * _N**3 / 96,
    _N**2 / 48 + _N**3 / 15,
    17 * _N**3 / 480,
)
_DELTA = (
    2 * _N - 2 * _N**2 / 3 - 2 * _N**3,
    7 * _N**2 / 3 - 8 * _N**3 / 5,
    56 * _N**3 / 15,
)


def _normalize_longitude(lon: float) -> float:
    lon = math.remainder(lon, 360.0)
    return 180.0 if lon == -180.0 else lon


def _central_meridian(zone: int) -> float:
    return 6.0 * zone - 183.0


def _standard_zone(lat: float, lon: float) -> int:
    ilon = math.floor(math.remainder(lon, 360.0))
    if ilon >= 180:
        ilon -= 360
    zone = (ilon + 186) // 6
    if 56 <= lat < 64 and zone == 31 and ilon >= 3:
        zone = 32
    elif lat >= 72 and 0 <= ilon < 42:
        zone = 2 * ((ilon + 183) // 12) + 1
    return zone


def _forward(lat: float, lon: float) -> Tuple[float, float]:
    if not -90.0 <= lat <= 90.0:
        raise ValueError(f"latitude {lat} is not in [-90, 90]")
    if not -80.0 <= lat < 84.0:
        raise ValueError(f"latitude {lat} lies outside the UTM latitude band")
    zone = _standard_zone(lat, lon)
    northern = lat >= 0

    phi = math.radians(lat)
    dlon = math.radians(_normalize_longitude(lon - _central_meridian(zone)))
    sin_phi = math.sin(phi)
    t = math.sinh(math.atanh(sin_phi) - _ECC * math.atanh(_ECC * sin_phi))
    xi_p = math.atan2(t, math.cos(dlon))
    eta_p = math.atanh(math.sin(dlon) / math.sqrt(1 + t * t))

    xi = xi_p
    eta = eta_p
    for j, alpha in enumerate(_ALPHA, start=1):
        xi += alpha * math.sin(2 * j * xi_p) * math.cosh(2 * j * eta_p)
        eta += alpha * math.cos(2 * j * xi_p) * math.sinh(2 * j * eta_p)

    easting = _FALSE_EASTING + _K0 * _RECTIFYING_RADIUS * eta
    northing = _K0 * _RECTIFYING_RADIUS * xi
    if not northern:
        northing += _FALSE_NORTHING_SOUTH
    return easting, northing


def _reverse(zone: int, northern: bool, easting: float, northing: float) -> Tuple[float, float]:
    if not 1 <= zone <= 60:
        raise ValueError(f"zone {zone} is not a UTM zone")
    if not 0.0 <= easting <= 1_000_000.0:
        raise ValueError(f"easting {easting} is out of range")
    low, high = (-100_000.0, 9_600_000.0) if northern else (900_000.0, 10_100_000.0)
    if not low <= northing <= high:
        raise ValueError(f"northing {northing} is out of range")

    offset = 0.0 if northern else _FALSE_NORTHING_SOUTH
    xi = (northing - offset) / (_K0 * _RECTIFYING_RADIUS)
    eta = (easting - _FALSE_EASTING) / (_K0 * _RECTIFYING_RADIUS)

    xi_p = xi
    eta_p = eta
    for j, beta in enumerate(_BETA, start=1):
        xi_p -= beta * math.sin(2 * j * xi) * math.cosh(2 * j * eta)
        eta_p -= beta * math.cos(2 * j * xi) * math.sinh(2 * j * eta)

    chi = math.asin(math.sin(xi_p) / math.cosh(eta_p))
    phi = chi + sum(
        delta * math.sin(2 * j * chi) for j, delta in enumerate(_DELTA, start=1)
    )
    lon = _central_meridian(zone) + math.degrees(
        math.atan2(math.sinh(eta_p), math.cos(xi_p))
    )
    return math.degrees(phi), _normalize_longitude(lon)


def utm_to_wgs84(point: _P, zone: int, northern: bool) -> _P:
    """Convert a UTM point (easting, northing) to (latitude, longitude).

    A ``Point3`` keeps its ``z``. Raises ValueError for coordinates outside
    the UTM range of the zone.
    """
    lat, lon = _reverse(zone, northern, point.x, point.y)
    if isinstance(point, Point3):
        return Point3(lat, lon, point.z)
    return Point2(lat, lon)


def wgs84_to_utm(point: _P) -> _P:
    """Convert (latitude, longitude) to (easting, northing) in its standard zone.

    A ``Point3`` keeps its ``z``. Raises ValueError for latitudes outside the
    UTM band.
    """
    easting, northing = _forward(point.x, point.y)
    if isinstance(point, Point3):
        return Point3(easting, northing, point.z)
    return Point2(easting, northing)


def calculate_xy_distance(p1: Union[Point2, Point3], p2: Union[Point2, Point3]) -> float:
    """Planar distance between two points, ignoring ``z``."""
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def calculate_xy_angle(p1: Union[Point2, Point3], p2: Union[Point2, Point3]) -> float:
    """Angle in radians of the direction from ``p1`` to ``p2`` in the XY plane."""
    return math.atan2(p2.y - p1.y, p2.x - p1.x)