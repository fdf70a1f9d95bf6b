"""Great-circle distance and radius filtering for geotagged records."""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any, TypeVar

EARTH_RADIUS_M = 6_371_000.0
DEFAULT_RADIUS_M = 5000.0

T = TypeVar("T")


def get_attr(o: Any, key: str, default=None):
    if isinstance(o, dict):
        return o.get(key, default)
    return getattr(o, key, default)


def haversine_m(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Distance in meters between two lat/lng points."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    # sign of the deltas does not matter, both are squared through sin()
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lng2 - lng1)
    a = (
        math.sin(dphi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    )
    # rounding can push a just past 1 for antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def filter_by_radius(
    records: Iterable[T] | None,
    lat: float | None,
    lng: float | None,
    radius_m: float | None = None,
) -> list[T]:
    """
    Return the records within ``radius_m`` meters of (lat, lng).

    Without a reference point every record passes; 0 is a real coordinate.
    Once a point is given, records lacking latitude or longitude are dropped.
    A falsy radius means ``DEFAULT_RADIUS_M``, not zero. Records may be models
    or plain mappings.
    """
    candidates = list(records or [])
    if lat is None or lng is None:
        return candidates

    limit = float(radius_m or DEFAULT_RADIUS_M)
    ref_lat = float(lat)
    ref_lng = float(lng)
    nearby: list[T] = []
    for record in candidates:
        r_lat = get_attr(record, "latitude")
        r_lng = get_attr(record, "longitude")
        if r_lat is None or r_lng is None:
            continue
        if haversine_m(ref_lat, ref_lng, float(r_lat), float(r_lng)) <= limit:
            nearby.append(record)
    return nearby


__all__ = ["DEFAULT_RADIUS_M", "EARTH_RADIUS_M", "filter_by_radius", "haversine_m"]
