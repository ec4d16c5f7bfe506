"""Formatting of routes as GPX documents."""

from __future__ import annotations

from typing import Iterable, Union

from tsroute.geometry import Point2, Point3

GPX_HEADER = (
    "<?xml version='1.0' encoding='UTF-8'?>\n <gpx version='1.1' "
    "creator='tsr-route' xmlns='http://www.topografix.com/GPX/1/1'>\n "
    "\t<rte>\n\t\t<name>Test Route</name>\n"
)
GPX_FOOTER = "\t</rte>\n </gpx>\n"


def _format_number(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def format_route_as_gpx(points: Iterable[Union[Point2, Point3]]) -> str:
    """Return a GPX route with one waypoint per point, ``x`` as latitude and ``y`` as longitude."""
    parts = [GPX_HEADER]
    for point in points:
        parts.append(
            f"\t\t<rtept lat='{_format_number(point.x)}' "
            f"lon='{_format_number(point.y)}'>\n\t\t\t<name>Waypoint</name>\n\t\t</rtept>\n"
        )
    parts.append(GPX_FOOTER)
    return "".join(parts)