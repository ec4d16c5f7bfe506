import pytest

from tsroute.geometry import Point2, Point3
from tsroute.tin import Tin

SQUARE = [
    Point3(0, 0, 1),
    Point3(10, 0, 2),
    Point3(0, 10, 3),
    Point3(10, 10, 4),
    Point3(4, 6, 5),
]


def test_points_kept_with_elevation():
    tin = Tin(SQUARE)
    assert len(tin) == len(SQUARE)
    assert [tin.point(v) for v in range(len(tin))] == SQUARE


def test_duplicate_xy_keeps_first():
    tin = Tin([Point3(0, 0, 1), Point3(0, 0, 9), Point3(1, 0, 0), Point3(0, 1, 0)])
    assert len(tin) == 3
    assert tin.point(0).z == 1


def test_face_count_for_square_with_interior_point():
    assert len(Tin(SQUARE).faces()) == 4


def test_faces_reference_valid_vertices():
    tin = Tin(SQUARE)
    for face in tin.faces():
        assert len(set(face.vertices)) == 3
        assert all(0 <= v < len(tin) for v in face.vertices)


@pytest.mark.parametrize("x, y", [(1, 1), (9, 2), (5, 9), (4, 6.5)])
def test_locate_inside_returns_containing_face(x, y):
    tin = Tin(SQUARE)
    face = tin.locate(Point2(x, y))
    assert face in tin.faces()
    a, b, c = (tin.point(v) for v in face.vertices)
    d = (b.y - c.y) * (a.x - c.x) + (c.x - b.x) * (a.y - c.y)
    l1 = ((b.y - c.y) * (x - c.x) + (c.x - b.x) * (y - c.y)) / d
    l2 = ((c.y - a.y) * (x - c.x) + (a.x - c.x) * (y - c.y)) / d
    l3 = 1 - l1 - l2
    assert min(l1, l2, l3) >= -1e-9


def test_locate_outside_is_none():
    tin = Tin(SQUARE)
    assert tin.locate(Point3(20, 20, 0)) is None
    assert tin.locate(Point2(-1, 5)) is None


def test_incident_faces_contain_vertex():
    tin = Tin(SQUARE)
    for v in range(len(tin)):
        faces = tin.incident_faces(v)
        assert faces
        assert all(v in f.vertices for f in faces)
    assert set(tin.incident_faces(4)) == set(tin.faces())


def test_every_face_is_incident_to_its_vertices():
    tin = Tin(SQUARE)
    for face in tin.faces():
        for v in face.vertices:
            assert face in tin.incident_faces(v)


def test_bad_vertex_raises():
    tin = Tin(SQUARE)
    with pytest.raises(IndexError):
        tin.point(len(SQUARE))
    with pytest.raises(IndexError):
        tin.incident_faces(-1)


def test_too_few_points_raises():
    with pytest.raises(ValueError):
        Tin([Point3(0, 0, 0), Point3(1, 1, 1)])


def test_collinear_points_raise():
    with pytest.raises(ValueError):
        Tin([Point3(0, 0, 0), Point3(1, 1, 0), Point3(2, 2, 0), Point3(3, 3, 0)])