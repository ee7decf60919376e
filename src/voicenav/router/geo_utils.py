# geo_utils.py
# Pure mathematical / geographic helper functions.
# No side effects, no imports beyond models.

import math

from .models import Coord


EARTH_RADIUS_M = 6_371_000.0


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance between two points in metres.

    Args:
        lat1, lon1: Origin in decimal degrees.
        lat2, lon2: Destination in decimal degrees.

    Returns:
        Distance in metres.
    """
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def distance(a: Coord, b: Coord) -> float:
    """Great-circle distance between two coordinates in metres."""
    return haversine_distance(a.lat, a.lng, b.lat, b.lng)


def interpolate(start: Coord, end: Coord, lat_share: float, lng_share: float) -> Coord:
    """
    Point offset from start by a share of the lat/lng deltas to end.

    Shares are applied per axis, so (0.3, 0.0) moves only north/south.
    """
    return start.offset(
        (end.lat - start.lat) * lat_share,
        (end.lng - start.lng) * lng_share,
    )
