"""Triangulated irregular network built from elevation points."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple, Union

import numpy as np
from scipy.spatial import Delaunay

from tsroute.geometry import Point2, Point3


@dataclass(frozen=True)
class Face:
    """A triangle of the network, identified by its index."""

    index: int
    vertices: Tuple[int, int, int]


class Tin:
    """A Delaunay triangulation in the XY plane that keeps each point's elevation.

    Vertices are integer handles into the points. Points that share x and y
    with an earlier point are dropped, so the first of them is kept.
    """

    def __init__(self, points: Iterable[Point3]) -> None:
        unique: Dict[Tuple[float, float], Point3] = {}
        for p in points:
            point = Point3(float(p[0]), float(p[1]), float(p[2]))
            unique.setdefault((point.x, point.y), point)
        self._points: List[Point3] = list(unique.values())
        if len(self._points) < 3:
            raise ValueError("a triangulation needs at least three distinct points")

        coords = np.array([(p.x, p.y) for p in self._points], dtype=float)
        try:
            self._tri = Delaunay(coords)
        except RuntimeError as exc:
            raise ValueError("points do not span a plane") from exc

        self._faces: List[Face] = [
            Face(i, (int(a), int(b), int(c)))
            for i, (a, b, c) in enumerate(self._tri.simplices)
        ]

        incident: Dict[int, List[Face]] = {v: [] for v in range(len(self._points))}
        for face in self._faces:
            for v in face.vertices:
                incident[v].append(face)
        self._incident: Dict[int, Tuple[Face, ...]] = {
            v: tuple(sorted(faces, key=lambda f, v=v: self._face_angle(f, v)))
            for v, faces in incident.items()
        }

    def _face_angle(self, face: Face, vertex: int) -> float:
        origin = self._points[vertex]
        cx = sum(self._points[v].x for v in face.vertices) / 3.0
        cy = sum(self._points[v].y for v in face.vertices) / 3.0
        return math.atan2(cy - origin.y, cx - origin.x)

    def _check_vertex(self, vertex: int) -> None:
        if not 0 <= vertex < len(self._points):
            raise IndexError(f"vertex {vertex} is not in the triangulation")

    def __len__(self) -> int:
        return len(self._points)

    def point(self, vertex: int) -> Point3:
        """Return the point stored at ``vertex``."""
        self._check_vertex(vertex)
        return self._points[vertex]

    def faces(self) -> List[Face]:
        """Return every triangle of the network."""
        return list(self._faces)

    def locate(self, point: Union[Point2, Point3]) -> Optional[Face]:
        """Return the triangle containing ``point`` in XY, or None outside the hull."""
        index = int(self._tri.find_simplex(np.array([[point[0], point[1]]], dtype=float))[0])
        if index < 0:
            return None
        return self._faces[index]

    def incident_faces(self, vertex: int) -> Tuple[Face, ...]:
        """Return the triangles around ``vertex``, ordered counter-clockwise."""
        self._check_vertex(vertex)
        return self._incident[vertex]