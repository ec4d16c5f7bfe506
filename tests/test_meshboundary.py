import itertools
import math

import pytest

from tsroute.geometry import Point2, Point3
from tsroute.meshboundary import MeshBoundary


@pytest.fixture
def axis_boundary():
    return MeshBoundary(Point3(0, 0, 0), Point3(100, 0, 0), 1.5)


@pytest.fixture
def diagonal_boundary():
    return MeshBoundary(Point3(1000, 2000, 10), Point3(1300, 2400, 50), 1.5)


def test_dimensions(axis_boundary):
    assert axis_boundary.width == pytest.approx(175.0)
    assert axis_boundary.height == pytest.approx(150.0)
    assert axis_boundary.radii_multiplier == 1.5


def test_midpoint_and_angle(diagonal_boundary):
    assert diagonal_boundary.midpoint == Point2(1150.0, 2200.0)
    assert diagonal_boundary.angle == pytest.approx(math.atan2(400, 300))


def test_endpoints_and_midpoint_bounded(diagonal_boundary):
    assert diagonal_boundary.is_bounded(Point3(1000, 2000, 0))
    assert diagonal_boundary.is_bounded(Point3(1300, 2400, 0))
    assert diagonal_boundary.is_bounded(diagonal_boundary.midpoint)


def test_far_point_not_bounded(diagonal_boundary):
    assert not diagonal_boundary.is_bounded(Point3(10_000, 10_000, 0))
    assert not diagonal_boundary.is_bounded_safe(Point3(10_000, 10_000, 0))


def test_point_near_edge_not_safe(axis_boundary):
    near_edge = Point3(50, 70, 0)
    assert axis_boundary.is_bounded(near_edge)
    assert not axis_boundary.is_bounded_safe(near_edge)
    assert axis_boundary.is_bounded_safe(Point3(50, 0, 0))


def test_safe_implies_bounded(diagonal_boundary):
    for x, y in itertools.product(range(800, 1500, 37), range(1800, 2600, 41)):
        p = Point2(float(x), float(y))
        if diagonal_boundary.is_bounded_safe(p):
            assert diagonal_boundary.is_bounded(p)


def test_corner_extremes_quirk(diagonal_boundary):
    assert diagonal_boundary.ll.x <= diagonal_boundary.ur.x
    assert diagonal_boundary.ll.y >= diagonal_boundary.ur.y


def test_corner_extremes_contain_endpoints(diagonal_boundary):
    b = diagonal_boundary
    for p in (Point2(1000, 2000), Point2(1300, 2400)):
        assert b.ll.x <= p.x <= b.ur.x
        assert b.ur.y <= p.y <= b.ll.y


def test_rotate_point_round_trip_keeps_z():
    mid = Point2(5.0, -3.0)
    p = Point3(12.0, 4.0, 99.0)
    rotated = MeshBoundary.rotate_point(p, mid, 0.7)
    back = MeshBoundary.rotate_point(rotated, mid, -0.7)
    assert isinstance(rotated, Point3)
    assert rotated.z == 99.0
    assert back.x == pytest.approx(p.x) and back.y == pytest.approx(p.y)


def test_rotate_quarter_turn():
    r = MeshBoundary.rotate_point(Point2(1.0, 0.0), Point2(0.0, 0.0), math.pi / 2)
    assert isinstance(r, Point2)
    assert r.x == pytest.approx(0.0, abs=1e-12)
    assert r.y == pytest.approx(1.0)


def test_rotation_preserves_distance_to_midpoint():
    mid = Point2(2.0, 2.0)
    p = Point2(7.0, -1.0)
    r = MeshBoundary.rotate_point(p, mid, 2.3)
    assert math.hypot(r.x - mid.x, r.y - mid.y) == pytest.approx(math.hypot(p.x - mid.x, p.y - mid.y))


def test_filter_points(axis_boundary):
    points = [Point3(0, 0, 1), Point3(1000, 0, 2), Point3(50, 60, 3), Point3(-500, -500, 4)]
    original = list(points)
    kept = axis_boundary.filter_points_outside_boundary(points)
    assert kept == [Point3(0, 0, 1), Point3(50, 60, 3)]
    assert points == original