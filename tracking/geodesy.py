"""Great-circle distance between coordinates."""

import math

from models import Coordinate

EARTH_RADIUS_METERS = 6_371_000.0


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance in meters between two lat/lon pairs in degrees."""
    for value in (lat1, lon1, lat2, lon2):
        if not math.isfinite(value):
            raise ValueError(f"Invalid coordinate value: {value}")

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = (math.sin(d_phi / 2) ** 2
         + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2)
    # Rounding can push a fractionally past 1 for antipodal points.
    a = min(1.0, max(0.0, a))
    return 2 * EARTH_RADIUS_METERS * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def distance(a: Coordinate, b: Coordinate) -> float:
    """Distance in meters between two coordinates."""
    return haversine(a.latitude, a.longitude, b.latitude, b.longitude)
