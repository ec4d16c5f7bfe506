"""Cost features that combine into a routing cost function."""

from __future__ import annotations

import abc
import math
from typing import Any, List

from tsroute.geometry import Point3
from tsroute.state import TsrState


class FeatureBase:
    """A named node of the cost graph with ordered dependencies."""

    def __init__(self, feature_id: str) -> None:
        self.feature_id = feature_id
        self.dependencies: List[FeatureBase] = []

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FeatureBase):
            return NotImplemented
        return self.feature_id == other.feature_id

    def __hash__(self) -> int:
        return hash(self.feature_id)

    def add_dependency(self, feature: FeatureBase) -> None:
        """Append ``feature`` to the dependencies."""
        self.dependencies.append(feature)


class Feature(FeatureBase, abc.ABC):
    """A feature that computes a value for the step described by a state."""

    def initialize(self, tin, boundary) -> None:
        """Prepare data for the area; does nothing by default."""

    def tag(self, tin) -> None:
        """Attach data to the triangulation; does nothing by default."""

    @abc.abstractmethod
    def calculate(self, state: TsrState) -> Any:
        """Return the feature's value for the current step."""


class ConstantFeature(Feature):
    """Always yields the same value."""

    def __init__(self, feature_id: str, constant: Any) -> None:
        super().__init__(feature_id)
        self.constant = constant

    def calculate(self, state: TsrState) -> Any:
        return self.constant


class SimpleBooleanFeature(ConstantFeature):
    """A constant boolean."""

    def __init__(self, feature_id: str, value: bool) -> None:
        super().__init__(feature_id, bool(value))


class SimpleBooleanToDoubleFeature(Feature):
    """Maps its first dependency's boolean to one of two numbers."""

    SIMPLE_BOOLEAN = 0

    def __init__(self, feature_id: str, pos_value: float, neg_value: float) -> None:
        super().__init__(feature_id)
        self.pos_value = pos_value
        self.neg_value = neg_value

    def calculate(self, state: TsrState) -> float:
        value = self.dependencies[self.SIMPLE_BOOLEAN].calculate(state)
        return self.pos_value if value else self.neg_value


class ConditionalFeature(Feature):
    """Dependencies are (condition, then, else); yields the chosen branch's value."""

    CONDITIONAL, A, B = 0, 1, 2

    def calculate(self, state: TsrState) -> Any:
        if self.dependencies[self.CONDITIONAL].calculate(state):
            return self.dependencies[self.A].calculate(state)
        return self.dependencies[self.B].calculate(state)


class DistanceFeature(Feature):
    """Straight-line 3D distance from the current vertex to the next."""

    @staticmethod
    def calculate_distance(p1: Point3, p2: Point3) -> float:
        return math.dist(p1, p2)

    def calculate(self, state: TsrState) -> float:
        return self.calculate_distance(
            state.tin.point(state.current_vertex), state.tin.point(state.next_vertex)
        )


class InverseFeature(Feature):
    """Inverts its first dependency.

    Supported (in, out) types: (bool, bool) negates; (bool, float) yields 1
    for false and infinity for true; (float, float) yields the reciprocal,
    with infinity for zero.
    """

    VALUE = 0
    _SUPPORTED = {(bool, bool), (bool, float), (float, float)}

    def __init__(self, feature_id: str, in_type: type, out_type: type) -> None:
        if (in_type, out_type) not in self._SUPPORTED:
            raise ValueError(
                f"no inverse from {in_type.__name__} to {out_type.__name__}"
            )
        super().__init__(feature_id)
        self.in_type = in_type
        self.out_type = out_type

    def calculate(self, state: TsrState) -> Any:
        value = self.dependencies[self.VALUE].calculate(state)
        if self.in_type is bool:
            if self.out_type is bool:
                return not value
            return math.inf if value else 1.0
        if value == 0:
            return math.inf
        return 1 / value