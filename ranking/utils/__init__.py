"""Shared helpers used by the ranking stages."""

from .geo import EARTH_RADIUS_KM, deg2rad, haversine_km

__all__ = [
    "EARTH_RADIUS_KM",
    "deg2rad",
    "haversine_km",
]
