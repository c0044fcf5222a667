"""Great-circle distance for radius targeting."""

from __future__ import annotations

import math

EARTH_RADIUS_M = 6_371_000.0


def distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Haversine distance in metres between two lat/lng points (degrees)."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # Rounding can push a a hair outside [0, 1] near antipodes.
    a = min(1.0, max(0.0, a))
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def within_radius(
    center_lat: float,
    center_lng: float,
    lat: float | None,
    lng: float | None,
    meters: float,
) -> bool:
    """True if (lat, lng) lies within ``meters`` of the centre; False without coordinates."""
    if lat is None or lng is None:
        return False
    return distance(center_lat, center_lng, lat, lng) <= meters
