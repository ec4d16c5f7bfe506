"""Reading line contours from JSON documents."""

from __future__ import annotations

import json
import numbers
import os
from typing import List, Union

from tsroute.geometry import Point2
from tsroute.log import LogLevel, log_message


def _trace(message: str) -> None:
    log_message(LogLevel.TRACE, __file__, 0, message)


def _number(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValueError(f"coordinate {value!r} is not a number")
    return float(value)


def load_contours_from_json_file(
    filepath: Union[str, "os.PathLike[str]"], layer_id: str
) -> List[List[Point2]]:
    """Read the contours of the features in the array named ``layer_id``.

    Each feature contributes the ``geometry.coordinates`` list as one contour
    of ``Point2(first, second)``. Features without geometry or coordinates are
    skipped, as are coordinates with fewer than two values. Raises KeyError if
    the layer is missing and ValueError if it is not an array.
    """
    with open(filepath, "r", encoding="utf-8") as handle:
        document = json.load(handle)
    _trace(f"Opened JSON file {os.fspath(filepath)}")

    if not isinstance(document, dict):
        raise ValueError("JSON document is not an object")
    if layer_id not in document:
        raise KeyError(layer_id)
    layer = document[layer_id]
    if not isinstance(layer, list):
        raise ValueError(f"layer {layer_id!r} is not an array")
    _trace(f"layer {len(layer)}")

    contours: List[List[Point2]] = []
    for feature in layer:
        geometry = feature.get("geometry") if isinstance(feature, dict) else None
        if not isinstance(geometry, dict):
            _trace("failed to find geometry")
            continue
        coordinates = geometry.get("coordinates")
        if not isinstance(coordinates, list):
            _trace("failed to find coordinates")
            continue

        contour = [
            Point2(_number(coord[0]), _number(coord[1]))
            for coord in coordinates
            if isinstance(coord, list) and len(coord) >= 2
        ]
        contours.append(contour)
    return contours