"""Shortest-path routing over a triangulation with a pluggable cost feature."""

from __future__ import annotations

import heapq
import itertools
import math
from typing import List, Optional, Tuple, Union

from tsroute.geometry import Point2, Point3
from tsroute.kml import GradientFunction, write_failure_state_to_kml, write_success_state_to_kml
from tsroute.log import LogLevel, log_message
from tsroute.meshboundary import MeshBoundary
from tsroute.pointprocessor import calculate_xy_distance
from tsroute.state import RouteNode, TsrState
from tsroute.tin import Tin


class RoutingError(RuntimeError):
    """Raised when no route can be computed."""


class Router:
    """Finds the cheapest route between two points with Dijkstra's algorithm.

    The cost of a step is the value of the cost feature for the state that
    describes the step. After a search a KML file is written to
    ``success_kml_path`` or, on failure, ``failure_kml_path``.
    """

    def __init__(self) -> None:
        self.state = TsrState()
        self.success_kml_path: str = "success.kml"
        self.failure_kml_path: str = "failure.kml"
        self.gradient: Optional[GradientFunction] = None

    def nearest_vertex(self, tin: Tin, point: Union[Point2, Point3]) -> int:
        """Return the corner nearest in XY of the triangle containing ``point``.

        Raises RoutingError if the point lies outside the triangulation.
        """
        face = tin.locate(point)
        if face is None:
            log_message(LogLevel.ERROR, __file__, 0, "Point outside DTM domain")
            raise RoutingError("Point outside DTM domain")
        best = face.vertices[0]
        best_distance = calculate_xy_distance(tin.point(best), point)
        for vertex in face.vertices[1:]:
            distance = calculate_xy_distance(tin.point(vertex), point)
            if distance < best_distance:
                best = vertex
                best_distance = distance
        return best

    def _fail(self, message: str) -> RoutingError:
        log_message(LogLevel.FATAL, __file__, 0, message)
        write_failure_state_to_kml(self.failure_kml_path, self.state)
        return RoutingError(message)

    def route(
        self,
        tin: Tin,
        cost_feature,
        boundary: MeshBoundary,
        start_point: Union[Point2, Point3],
        end_point: Union[Point2, Point3],
    ) -> List[Point3]:
        """Return the cheapest route's points from start to end.

        Only vertices at a safe distance inside ``boundary`` are expanded.
        Raises RoutingError if either point is outside the triangulation or
        no route of finite cost exists.
        """
        log_message(LogLevel.TRACE, __file__, 0, "Routing")
        state = self.state = TsrState(tin=tin)
        state.start_vertex = self.nearest_vertex(tin, start_point)
        state.end_vertex = self.nearest_vertex(tin, end_point)

        counter = itertools.count()
        queue: List[Tuple[float, int, RouteNode]] = []
        start_node = RouteNode(state.start_vertex, None, g_cost=0.0)
        heapq.heappush(queue, (start_node.g_cost, next(counter), start_node))

        while state.end_vertex not in state.routes:
            if not queue:
                raise self._fail("Could not find safe path")
            _, _, current = heapq.heappop(queue)

            if current.vertex in state.routes:
                continue
            if current.g_cost == math.inf:
                raise self._fail("Could not find safe path")

            state.routes[current.vertex] = current
            state.current_vertex = current.vertex

            for face in tin.incident_faces(current.vertex):
                state.current_face = face
                for vertex in face.vertices:
                    if vertex == current.vertex or vertex in state.routes:
                        continue
                    if not boundary.is_bounded_safe(tin.point(vertex)):
                        continue
                    state.next_vertex = vertex
                    node = RouteNode(
                        vertex,
                        face,
                        g_cost=current.g_cost + cost_feature.calculate(state),
                        parent=current.vertex,
                    )
                    heapq.heappush(queue, (node.g_cost, next(counter), node))

        route = state.fetch_route()
        log_message(LogLevel.TRACE, __file__, 0, f"Sucessfully analysed {len(state.routes)} nodes")
        write_success_state_to_kml(self.success_kml_path, state, self.gradient)
        log_message(LogLevel.TRACE, __file__, 0, "Completed!")
        return route