"""
Purpose: Great-circle distance math (the "how far" layer).
What it does:
Converts two (lat, lng) points in degrees into a haversine distance in kilometers.

Rule: Pure math. No thresholds, no scoring, no HTTP.
"""

from __future__ import annotations

import math
from typing import NamedTuple

EARTH_RADIUS_KM = 6371.0


class GeoPoint(NamedTuple):
    """
    A (latitude, longitude) pair in degrees.
    Out-of-range values are not rejected here; validation belongs to the caller.
    """
    lat: float
    lng: float


def haversine_km(a: GeoPoint, b: GeoPoint, radius_km: float = EARTH_RADIUS_KM) -> float:
    """
    Haversine great-circle distance between two points.

    Symmetric and non-negative. NaN coordinates give a NaN distance instead of
    raising, so callers must treat NaN as "unscoreable".
    """
    # math.sin(inf) raises; treat infinities like NaN
    if not all(math.isfinite(v) for v in (a.lat, a.lng, b.lat, b.lng)):
        return math.nan

    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)

    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2

    # Rounding can push h a hair above 1.0 for antipodal points
    return 2 * radius_km * math.asin(math.sqrt(min(h, 1.0)))
