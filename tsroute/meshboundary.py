"""Rotated rectangular search area around a start and end point."""

from __future__ import annotations

import math
from typing import Iterable, List, TypeVar, Union

from tsroute.geometry import Point2, Point3
from tsroute.pointprocessor import calculate_xy_angle, calculate_xy_distance

_P = TypeVar("_P", Point2, Point3)


class MeshBoundary:
    """A rectangle aligned with the line from source to target.

    Its length is the distance plus one radius and its breadth two radii,
    where the radius is half the distance times ``radii_multiplier``.
    ``ll`` and ``ur`` hold the axis-aligned extremes as ``(min x, max y)``
    and ``(max x, min y)``.
    """

    SAFE_DISTANCE_M = 30.0

    def __init__(
        self,
        source_point: Union[Point2, Point3],
        target_point: Union[Point2, Point3],
        radii_multiplier: float,
    ) -> None:
        distance = calculate_xy_distance(source_point, target_point)
        radius = (distance / 2.0) * radii_multiplier

        self.radii_multiplier = radii_multiplier
        self.midpoint = Point2(
            (source_point.x + target_point.x) / 2.0,
            (source_point.y + target_point.y) / 2.0,
        )
        self.angle = calculate_xy_angle(source_point, target_point)
        self.width = distance + radius
        self.height = 2 * radius

        corners = [
            self.rotate_point(
                Point2(self.midpoint.x + sx * self.width / 2, self.midpoint.y + sy * self.height / 2),
                self.midpoint,
                self.angle,
            )
            for sx in (-1, 1)
            for sy in (-1, 1)
        ]
        xs = [c.x for c in corners]
        ys = [c.y for c in corners]
        self.ll = Point2(min(xs), max(ys))
        self.ur = Point2(max(xs), min(ys))

    @staticmethod
    def rotate_point(p: _P, midpoint: Point2, angle: float) -> _P:
        """Rotate ``p`` about ``midpoint`` by ``angle`` radians, keeping any ``z``."""
        s = math.sin(angle)
        c = math.cos(angle)
        x = p.x - midpoint.x
        y = p.y - midpoint.y
        return p._replace(x=x * c - y * s + midpoint.x, y=x * s + y * c + midpoint.y)

    def _contains(self, p: Union[Point2, Point3], margin: float) -> bool:
        q = self.rotate_point(p, self.midpoint, -self.angle)
        half_w = self.width / 2.0
        half_h = self.height / 2.0
        return (
            self.midpoint.x - half_w + margin <= q.x <= self.midpoint.x + half_w - margin
            and self.midpoint.y - half_h + margin <= q.y <= self.midpoint.y + half_h - margin
        )

    def is_bounded(self, p: Union[Point2, Point3]) -> bool:
        """Whether ``p`` lies inside the rectangle, edges included."""
        return self._contains(p, 0.0)

    def is_bounded_safe(self, p: Union[Point2, Point3]) -> bool:
        """Whether ``p`` lies at least ``SAFE_DISTANCE_M`` inside every edge."""
        return self._contains(p, self.SAFE_DISTANCE_M)

    def filter_points_outside_boundary(self, points: Iterable[_P]) -> List[_P]:
        """Return the points that lie inside the rectangle, in their order."""
        return [p for p in points if self.is_bounded(p)]