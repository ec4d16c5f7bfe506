"""Reading and writing meshes, point clouds and contours."""

from __future__ import annotations

import math
import os
from typing import Iterable, List, Sequence, Union

from tsroute.geometry import Point2, Point3
from tsroute.log import LogLevel, log_message
from tsroute.tin import Tin

PathLike = Union[str, "os.PathLike[str]"]


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def write_mesh_to_obj(filepath: PathLike, tin: Tin) -> None:
    """Write the triangulation as a Wavefront OBJ file with counter-clockwise faces."""
    with open(filepath, "w", encoding="utf-8") as handle:
        for vertex in range(len(tin)):
            p = tin.point(vertex)
            handle.write(f"v {p.x!r} {p.y!r} {p.z!r}\n")
        for face in tin.faces():
            a, b, c = face.vertices
            pa, pb, pc = tin.point(a), tin.point(b), tin.point(c)
            cross = (pb.x - pa.x) * (pc.y - pa.y) - (pb.y - pa.y) * (pc.x - pa.x)
            if cross < 0:
                b, c = c, b
            handle.write(f"f {a + 1} {b + 1} {c + 1}\n")


def load_points_from_xyz_file(filepath: PathLike) -> List[Point3]:
    """Read whitespace separated ``x y z`` triples, rounding each to the nearest integer.

    Reading stops at the first value that is not a number. A file that cannot
    be opened yields no points.
    """
    log_message(LogLevel.TRACE, __file__, 0, "loading points from file")
    try:
        with open(filepath, "r", encoding="utf-8") as handle:
            tokens = handle.read().split()
    except OSError:
        return []

    points: List[Point3] = []
    for start in range(0, len(tokens) - 2, 3):
        try:
            x, y, z = (float(t) for t in tokens[start:start + 3])
        except ValueError:
            break
        points.append(Point3(_round_half_away(x), _round_half_away(y), _round_half_away(z)))
    return points


def write_tin_to_file(filepath: PathLike, tin: Tin) -> bool:
    """Write the triangulation's points; return False if the file cannot be opened."""
    try:
        handle = open(filepath, "w", encoding="utf-8")
    except OSError:
        log_message(LogLevel.ERROR, __file__, 0, "failed to open TIN file")
        return False
    with handle:
        handle.write(f"{len(tin)}\n")
        for vertex in range(len(tin)):
            p = tin.point(vertex)
            handle.write(f"{p.x!r} {p.y!r} {p.z!r}\n")
    return True


def load_tin_from_file(filepath: PathLike) -> Tin:
    """Rebuild a triangulation written by :func:`write_tin_to_file`.

    Raises OSError if the file cannot be opened and ValueError if it is malformed.
    """
    with open(filepath, "r", encoding="utf-8") as handle:
        tokens = handle.read().split()
    if not tokens:
        raise ValueError("TIN file is empty")
    count = int(tokens[0])
    values = [float(t) for t in tokens[1:1 + 3 * count]]
    if len(values) != 3 * count:
        raise ValueError("TIN file is truncated")
    points = [Point3(*values[i:i + 3]) for i in range(0, len(values), 3)]
    return Tin(points)


def write_contours_to_file(
    filepath: PathLike, contours: Iterable[Sequence[Point2]]
) -> None:
    """Write one contour per line as space separated ``x y`` pairs."""
    with open(filepath, "w", encoding="utf-8") as handle:
        for row in contours:
            handle.write("".join(f"{p.x!r} {p.y!r} " for p in row))
            handle.write("\n")


def load_contours_from_file(filepath: PathLike) -> List[List[Point2]]:
    """Read contours written by :func:`write_contours_to_file`.

    Each line gives one contour; reading a line stops at the first incomplete
    or non-numeric pair. Raises OSError if the file cannot be opened.
    """
    contours: List[List[Point2]] = []
    with open(filepath, "r", encoding="utf-8") as handle:
        for line in handle:
            tokens = line.split()
            row: List[Point2] = []
            for start in range(0, len(tokens) - 1, 2):
                try:
                    row.append(Point2(float(tokens[start]), float(tokens[start + 1])))
                except ValueError:
                    break
            contours.append(row)
    return contours