"""Great-circle distance helpers."""

from __future__ import annotations

from math import atan2, cos, radians, sin, sqrt

from core.models import Coordinates

EARTH_RADIUS_KM = 6371.0


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance in kilometres between two points given in degrees.

    Inputs are not validated; out-of-range coordinates yield a meaningless but
    finite result.
    """
    dlat = radians(lat2 - lat1)
    dlon = radians(lon2 - lon1)
    a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlon / 2) ** 2
    # Rounding can push `a` a hair outside [0, 1] for antipodal points
    a = min(1.0, max(0.0, a))
    return EARTH_RADIUS_KM * 2 * atan2(sqrt(a), sqrt(1 - a))


def distance_between(a: Coordinates, b: Coordinates) -> float:
    return distance_km(a.latitude, a.longitude, b.latitude, b.longitude)


def format_distance(km: float) -> str:
    """Human label: whole metres below 1 km, otherwise kilometres with one decimal."""
    if km < 1:
        return f"{round(km * 1000)} m"
    return f"{km:.1f} km"
