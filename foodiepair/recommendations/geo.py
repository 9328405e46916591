from __future__ import annotations

from geopy.distance import great_circle

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Return the great-circle distance between two points in kilometres."""
    return float(great_circle((lat1, lng1), (lat2, lng2), radius=EARTH_RADIUS_KM).km)
