"""
GeoLocation model and lenient coercion from the shapes coordinates arrive in.

Product documents carry the seller location as a Firestore GeoPoint, which the
product adapter turns into {"latitude", "longitude"}. JSON exports use
{"_latitude", "_longitude"}; older clients sent {"lat", "lng"} or a pair.
"""

import math
from collections.abc import Mapping, Sequence
from typing import Any, Optional

from pydantic import BaseModel

_KEY_PAIRS = (
    ("latitude", "longitude"),
    ("_latitude", "_longitude"),
    ("lat", "lng"),
    ("lat", "lon"),
)


class GeoLocation(BaseModel):
    """A latitude/longitude pair in degrees."""

    latitude: float
    longitude: float


def coerce_coordinate(value: Any) -> Optional[float]:
    """Return value as a finite float, or None if it is not a real number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    value = float(value)
    if not math.isfinite(value):
        return None
    return value


def make_location(latitude: Any, longitude: Any) -> Optional[GeoLocation]:
    """Build a GeoLocation from two raw values; None if either is unusable or out of range."""
    lat = coerce_coordinate(latitude)
    lon = coerce_coordinate(longitude)
    if lat is None or lon is None:
        return None
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        return None
    return GeoLocation(latitude=lat, longitude=lon)


def coerce_location(value: Any) -> Optional[GeoLocation]:
    """
    Convert any supported coordinate shape to a GeoLocation.

    Accepts a GeoLocation, a GeoPoint-like object (latitude/longitude attributes),
    a mapping with one of the known key pairs, or a (lat, lon) sequence.
    Returns None for anything malformed; never raises.
    """
    if value is None:
        return None
    if isinstance(value, GeoLocation):
        return value
    if isinstance(value, Mapping):
        for lat_key, lon_key in _KEY_PAIRS:
            if lat_key in value and lon_key in value:
                return make_location(value[lat_key], value[lon_key])
        return None
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        if len(value) != 2:
            return None
        return make_location(value[0], value[1])
    if hasattr(value, "latitude") and hasattr(value, "longitude"):
        return make_location(value.latitude, value.longitude)
    return None
