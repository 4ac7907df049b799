"""
Great-circle distance helpers.
"""

import math

EARTH_RADIUS_KM = 6371.0


def deg2rad(deg: float) -> float:
    return deg * (math.pi / 180)


def haversine_km(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    radius_km: float = EARTH_RADIUS_KM,
) -> float:
    """
    Haversine distance in km between two points given in degrees.
    (0, 0) -> (0, 1) is ~111.19 km with the default radius.
    """
    d_lat = deg2rad(lat2 - lat1)
    d_lon = deg2rad(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(deg2rad(lat1)) * math.cos(deg2rad(lat2)) * math.sin(d_lon / 2) ** 2
    )
    # Float error can push a slightly past 1 for antipodal points
    a = min(max(a, 0.0), 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return radius_km * c
