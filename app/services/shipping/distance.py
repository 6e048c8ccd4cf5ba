"""Great-circle distance between geocoded addresses."""

from math import atan2, cos, radians, sin, sqrt

from app.schemas.shipping import GeoCoordinate

# Approximate radius of Earth in kilometres.
EARTH_RADIUS_KM = 6371.0


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return the great-circle distance in km between two lat/lon points."""
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    return EARTH_RADIUS_KM * 2 * atan2(sqrt(a), sqrt(1 - a))


def distance_between(origin: GeoCoordinate, destination: GeoCoordinate) -> float:
    return haversine(
        origin.latitude,
        origin.longitude,
        destination.latitude,
        destination.longitude,
    )
