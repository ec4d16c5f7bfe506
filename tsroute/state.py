"""Search state of a route: settled nodes, the step in progress and warnings."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from tsroute.geometry import Point3
from tsroute.log import LogLevel, log_message
from tsroute.tin import Face, Tin

MIN_WARNING_PRIORITY = 10
DEFAULT_WALKING_SPEED = 1.2


@dataclass(eq=False)
class RouteNode:
    """The best known way to reach ``vertex``, through ``face`` from ``parent``.

    Nodes are equal when their vertices are; they order by ``g_cost``.
    """

    vertex: int
    face: Optional[Face] = None
    g_cost: float = math.inf
    closed: bool = False
    parent: Optional[int] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RouteNode):
            return NotImplemented
        return self.vertex == other.vertex

    def __hash__(self) -> int:
        return hash(self.vertex)

    def __lt__(self, other: RouteNode) -> bool:
        return self.g_cost < other.g_cost


@dataclass
class TsrState:
    """Everything cost features and writers need to know about a search."""

    tin: Optional[Tin] = None
    start_vertex: Optional[int] = None
    end_vertex: Optional[int] = None
    routes: Dict[int, RouteNode] = field(default_factory=dict)
    current_vertex: Optional[int] = None
    next_vertex: Optional[int] = None
    current_face: Optional[Face] = None
    warning_messages: List[str] = field(default_factory=lambda: ["NONE"])
    warning_priorities: Dict[int, int] = field(default_factory=lambda: {0: 0})
    warning_index: Dict[str, int] = field(default_factory=dict)
    warnings: Dict[Face, int] = field(default_factory=dict)

    def add_warning(self, warning: str, priority: int) -> int:
        """Register ``warning`` once and return its index."""
        if warning in self.warning_index:
            return self.warning_index[warning]
        index = len(self.warning_messages)
        self.warning_messages.append(warning)
        self.warning_index[warning] = index
        self.warning_priorities[index] = priority
        return index

    def process_warnings(self) -> None:
        """Keep only the strongest warning beside each vertex of the route.

        A warning is kept when its priority reaches ``MIN_WARNING_PRIORITY``.
        """
        log_message(LogLevel.TRACE, __file__, 0, "processing warnings")
        processed: Dict[Face, int] = {}
        node = self.routes[self.end_vertex]
        while node.vertex != self.start_vertex:
            node = self.routes[node.parent]
            max_priority = 0
            max_face: Optional[Face] = None
            for face in self.tin.incident_faces(node.vertex):
                warning_id = self.warnings.get(face, 0)
                if warning_id == 0:
                    continue
                priority = self.warning_priorities[warning_id]
                if priority > max_priority:
                    max_priority = priority
                    max_face = face
            if max_priority >= MIN_WARNING_PRIORITY:
                processed[max_face] = self.warnings[max_face]
        self.warnings = processed

    def fetch_route(self) -> List[Point3]:
        """Return the route's points from start to end. Raises KeyError if unreached."""
        node = self.routes[self.end_vertex]
        route = [self.tin.point(self.end_vertex)]
        while node.vertex != self.start_vertex:
            node = self.routes[node.parent]
            route.append(self.tin.point(node.vertex))
        route.reverse()
        return route

    def estimate_time(self) -> float:
        """Seconds to walk the route at the default speed, or -1 if unreached."""
        if self.end_vertex not in self.routes:
            return -1
        return self.routes[self.end_vertex].g_cost / DEFAULT_WALKING_SPEED