"""KML documents describing routes, warnings and triangulation faces."""

from __future__ import annotations

import math
from typing import Callable, Iterable, Optional, Sequence, Tuple

from tsroute.fileio import write_data_to_file
from tsroute.geometry import Point3
from tsroute.log import LogLevel, log_message
from tsroute.pointprocessor import utm_to_wgs84
from tsroute.state import TsrState
from tsroute.tin import Face, Tin

UTM_ZONE = 30
UTM_NORTHERN = True

SLIGHT_GRADIENT = 0.2
STEEP_GRADIENT = 0.3

GradientFunction = Callable[[Point3, Point3], float]


def _fmt(value: float) -> str:
    return f"{float(value):f}"


def _to_wgs84(point: Point3) -> Point3:
    return utm_to_wgs84(point, UTM_ZONE, UTM_NORTHERN)


def _format_duration(seconds: float) -> str:
    total = int(seconds)
    sign = "-" if total < 0 else ""
    total = abs(total)
    hours = (total // 3600) % 24
    minutes = (total // 60) % 60
    secs = total % 60
    return f"{sign}{hours:02d}:{minutes:02d}:{secs:02d}"


def _circumcenter(p1: Point3, p2: Point3, p3: Point3) -> Optional[Point3]:
    u = (p2.x - p1.x, p2.y - p1.y, p2.z - p1.z)
    v = (p3.x - p1.x, p3.y - p1.y, p3.z - p1.z)

    def cross(a, b):
        return (
            a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0],
        )

    w = cross(u, v)
    w_sq = sum(c * c for c in w)
    if w_sq == 0:
        return None
    u_sq = sum(c * c for c in u)
    v_sq = sum(c * c for c in v)
    d = tuple(u_sq * vc - v_sq * uc for uc, vc in zip(u, v))
    offset = cross(d, w)
    return Point3(
        p1.x + offset[0] / (2 * w_sq),
        p1.y + offset[1] / (2 * w_sq),
        p1.z + offset[2] / (2 * w_sq),
    )


def generate_kml_document(inner_kml: str) -> str:
    """Wrap ``inner_kml`` in a complete KML document."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<kml xmlns="http://www.opengis.net/kml/2.2">\n'
        "<Document>\n"
        "  <name>TSR Router</name>\n"
        f"{inner_kml}"
        "</Document>\n"
        "</kml>\n"
    )


def generate_kml_faces(tin: Tin, faces: Iterable[Face], name: str) -> str:
    """Return a folder of polygons, one per face, lifted one metre above the ground."""
    parts = ["<Folder>\n", f"<name>{name}</name>\n"]
    for index, face in enumerate(faces):
        corners = [_to_wgs84(tin.point(v)) for v in face.vertices]
        ring = corners + corners[:1]
        parts.append("<Placemark>\n")
        parts.append(f"  <name>Triangle {index}</name>\n")
        parts.append("  <styleUrl>#blueStyle</styleUrl>\n")
        parts.append("  <Polygon>\n")
        parts.append("    <altitudeMode>absolute</altitudeMode>\n")
        parts.append("    <outerBoundaryIs>\n")
        parts.append("      <LinearRing>\n")
        parts.append("        <coordinates>\n")
        for p in ring:
            parts.append(f"          {_fmt(p.y)},{_fmt(p.x)},{_fmt(p.z + 1)}\n")
        parts.append("        </coordinates>\n")
        parts.append("      </LinearRing>\n")
        parts.append("    </outerBoundaryIs>\n")
        parts.append("  </Polygon>\n")
        parts.append("</Placemark>\n")
    parts.append("</Folder>\n")
    return "".join(parts)


def generate_kml_warnings(state: TsrState) -> str:
    """Return a folder with a pin at the circumcentre of every warned face.

    Faces whose centre cannot be converted to latitude and longitude are skipped.
    """
    log_message(LogLevel.TRACE, __file__, 0, "generate warnings KML")
    log_message(LogLevel.TRACE, __file__, 0, f"warning count: {len(state.warnings)}")

    parts = ["<Folder>\n", "<name>Warnings</name>\n"]
    for face, warning_id in state.warnings.items():
        if warning_id == 0:
            continue
        message = state.warning_messages[warning_id]
        p1, p2, p3 = (state.tin.point(v) for v in face.vertices)
        center = _circumcenter(p1, p2, p3)
        if center is None:
            continue
        try:
            wgs = _to_wgs84(center)
        except ValueError:
            continue
        parts.append("<Placemark>\n")
        parts.append("<altitudeMode>clampToGround</altitudeMode>\n")
        parts.append(f"<name>{message}</name>\n")
        parts.append(f"<description>{message}</description>\n")
        parts.append("<Point>\n")
        parts.append(f"<coordinates>{_fmt(wgs.y)},{_fmt(wgs.x)},0</coordinates>\n")
        parts.append("</Point>\n")
        parts.append("</Placemark>\n")
    parts.append("</Folder>\n")
    return "".join(parts)


def generate_kml_line(line: Tuple[Point3, Point3]) -> str:
    """Return a placemark with a line string between two UTM points."""
    source, target = (_to_wgs84(p) for p in line)
    return (
        "<Placemark>\n"
        "<LineString>\n"
        "<altitudeMode>clampToGround</altitudeMode>\n"
        "<coordinates>\n"
        f"{_fmt(source.y)},{_fmt(source.x)},0\n"
        f"{_fmt(target.y)},{_fmt(target.x)},0\n"
        "</coordinates>\n"
        "</LineString>\n"
        "</Placemark>\n"
    )


def _segment_style(gradient: Optional[GradientFunction], source: Point3, target: Point3) -> str:
    if gradient is None:
        return "routeStyle"
    value = gradient(source, target)
    if abs(value) > STEEP_GRADIENT:
        return "steepGradientWarning"
    if abs(value) > SLIGHT_GRADIENT:
        return "slightGradientWarning"
    return "routeStyle"


def generate_kml_route(
    route: Sequence[Point3],
    duration: float,
    gradient: Optional[GradientFunction] = None,
) -> str:
    """Return a folder with the route's end points and styled segments.

    ``gradient`` maps a segment to its gradient; segments steeper than 0.2
    or 0.3 either way get warning styles. Without it every segment gets the
    plain route style. An empty route yields an empty string.
    """
    if not route:
        log_message(LogLevel.WARN, __file__, 0, "Route empty")
        return ""

    start = _to_wgs84(route[0])
    end = _to_wgs84(route[-1])

    parts = [
        "<Folder>\n",
        "<name>Route</name>\n",
        f"<description>Estimated Route Time: {_format_duration(duration)}</description>\n",
        '<Style id="routeStyle"><IconStyle><color>#ff61ffb8</color>',
        "<Icon><href>http://maps.google.com/mapfiles/kml/paddle/blu-blank.png</href></Icon>",
        "</IconStyle><LineStyle><color>#ff61ffb8</color><width>4</width></LineStyle></Style>",
        '<Style id="slightGradientWarning"><LineStyle><color>#ff0050ff</color>'
        "<width>4</width></LineStyle></Style>",
        '<Style id="steepGradientWarning"><LineStyle><color>#ff0045ff</color>'
        "<width>4</width></LineStyle></Style>",
    ]

    for label, point in (("Start Point", start), ("End Point", end)):
        parts.append("<Placemark>\n")
        parts.append("<altitudeMode>clampToGround</altitudeMode>\n")
        parts.append("<styleUrl>routeStyle</styleUrl>\n")
        parts.append(f"<name>{label}</name>\n")
        parts.append("<Point>\n")
        parts.append(f"<coordinates>{_fmt(point.y)},{_fmt(point.x)},0</coordinates>\n")
        parts.append("</Point>\n")
        parts.append("</Placemark>\n")

    for source, target in zip(route, route[1:]):
        style = _segment_style(gradient, source, target)
        source_wgs = _to_wgs84(source)
        target_wgs = _to_wgs84(target)
        parts.append("<Placemark>\n")
        parts.append("<name>route segment</name>\n")
        parts.append(f"<styleUrl>{style}</styleUrl>\n")
        parts.append("<LineString>\n")
        parts.append("<altitudeMode>clampToGround</altitudeMode>\n")
        parts.append("<coordinates>\n")
        parts.append(f"{_fmt(source_wgs.y)},{_fmt(source_wgs.x)},0\n")
        parts.append(f"{_fmt(target_wgs.y)},{_fmt(target_wgs.x)},0\n")
        parts.append("</coordinates>\n")
        parts.append("</LineString>\n")
        parts.append("</Placemark>\n")

    parts.append("</Folder>\n")
    return "".join(parts)


def write_success_state_to_kml(
    filepath, state: TsrState, gradient: Optional[GradientFunction] = None
) -> None:
    """Write the found route and the warnings beside it to ``filepath``."""
    state.process_warnings()
    route = state.fetch_route()
    estimated_time = state.estimate_time()
    route_kml = generate_kml_route(route, estimated_time, gradient)
    warnings_kml = generate_kml_warnings(state)
    write_data_to_file(filepath, generate_kml_document(route_kml + warnings_kml))


def write_failure_state_to_kml(filepath, state: TsrState) -> None:
    """Write the warnings gathered during a failed search to ``filepath``."""
    write_data_to_file(filepath, generate_kml_document(generate_kml_warnings(state)))