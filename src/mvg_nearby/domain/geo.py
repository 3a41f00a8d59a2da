"""Great-circle distance between coordinates."""

from math import asin, cos, radians, sin, sqrt

from mvg_nearby.domain.models.coordinates import Coordinates

EARTH_RADIUS_METERS = 6_371_000.0


def distance(a: Coordinates, b: Coordinates) -> float:
    """Haversine distance in meters."""
    lat1, lon1, lat2, lon2 = map(radians, [a.latitude, a.longitude, b.latitude, b.longitude])

    dlat = lat2 - lat1
    dlon = lon2 - lon1
    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding can push h marginally above 1 for antipodal points
    return 2 * EARTH_RADIUS_METERS * asin(sqrt(min(1.0, h)))
