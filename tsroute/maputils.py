"""Small helpers for map zones and hemispheres."""

from __future__ import annotations

import math


def calculate_utm_zone(longitude: float) -> int:
    """Return the zone number computed as ``floor(longitude + 180 / 6) + 1``."""
    return int(math.floor(longitude + 180.0 / 6.0) + 1)


def is_northern_hemisphere(latitude: float) -> bool:
    """Return whether ``latitude`` is greater than 90."""
    return latitude > 90