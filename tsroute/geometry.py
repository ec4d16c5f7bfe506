"""Plain two- and three-dimensional points."""

from __future__ import annotations

from typing import NamedTuple, Union


class Point2(NamedTuple):
    """A point in the plane."""

    x: float
    y: float


class Point3(NamedTuple):
    """A point in space; ``z`` is usually an elevation."""

    x: float
    y: float
    z: float

    @property
    def xy(self) -> Point2:
        """The point projected onto the XY plane."""
        return Point2(self.x, self.y)


def point_to_string(p: Union[Point2, Point3]) -> str:
    """Format a point as ``(x, y, z)`` with six decimals per coordinate."""
    return "(" + ", ".join(f"{float(c):f}" for c in p) + ")"