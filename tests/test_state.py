import math

import pytest

from tsroute.geometry import Point3
from tsroute.state import RouteNode, TsrState
from tsroute.tin import Tin

POINTS = [
    Point3(0, 0, 0),
    Point3(10, 0, 1),
    Point3(0, 10, 2),
    Point3(10, 10, 3),
    Point3(5, 4, 4),
    Point3(3, 7, 5),
    Point3(8, 6, 6),
]


def _state():
    tin = Tin(POINTS)
    state = TsrState(tin=tin, start_vertex=0, end_vertex=3)
    state.routes[0] = RouteNode(0, None, 0.0)
    state.routes[4] = RouteNode(4, None, 6.0, parent=0)
    state.routes[3] = RouteNode(3, None, 12.0, parent=4)
    return state


def test_route_node_defaults():
    node = RouteNode(5)
    assert node.g_cost == math.inf
    assert node.parent is None
    assert node.closed is False


def test_route_node_equality_and_order():
    assert RouteNode(1, g_cost=3.0) == RouteNode(1, g_cost=7.0)
    assert RouteNode(1) != RouteNode(2)
    nodes = [RouteNode(1, g_cost=3.0), RouteNode(2, g_cost=1.0), RouteNode(3, g_cost=2.0)]
    assert [n.vertex for n in sorted(nodes)] == [2, 3, 1]


def test_fetch_route_runs_start_to_end():
    state = _state()
    assert state.fetch_route() == [POINTS[0], POINTS[4], POINTS[3]]


def test_fetch_route_unreached_raises():
    state = _state()
    del state.routes[3]
    with pytest.raises(KeyError):
        state.fetch_route()


def test_estimate_time():
    state = _state()
    assert state.estimate_time() == pytest.approx(10.0)
    del state.routes[3]
    assert state.estimate_time() == -1


def test_add_warning_indexes_once():
    state = TsrState()
    first = state.add_warning("steep", 20)
    second = state.add_warning("water", 5)
    assert first == 1
    assert second == 2
    assert state.add_warning("steep", 99) == first
    assert state.warning_messages == ["NONE", "steep", "water"]
    assert state.warning_priorities[first] == 20


def test_process_warnings_keeps_strong_warnings_beside_route():
    tin = Tin(POINTS)
    state = TsrState(tin=tin, start_vertex=0, end_vertex=3)
    state.routes[0] = RouteNode(0, None, 0.0)
    state.routes[3] = RouteNode(3, None, 5.0, parent=0)

    beside = tin.incident_faces(0)[0]
    away = next(f for f in tin.faces() if 0 not in f.vertices)
    state.warnings[beside] = state.add_warning("beside", 20)
    state.warnings[away] = state.add_warning("away", 30)

    state.process_warnings()
    assert state.warnings == {beside: state.warning_index["beside"]}


def test_process_warnings_drops_weak_warnings():
    tin = Tin(POINTS)
    state = TsrState(tin=tin, start_vertex=0, end_vertex=3)
    state.routes[0] = RouteNode(0, None, 0.0)
    state.routes[3] = RouteNode(3, None, 5.0, parent=0)
    state.warnings[tin.incident_faces(0)[0]] = state.add_warning("mild", 5)

    state.process_warnings()
    assert state.warnings == {}