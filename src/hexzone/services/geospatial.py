"""Geospatial helper functions.

Zone math works on a local tangent plane around the restaurant: an
equirectangular projection scaled by the cosine of the origin latitude. It is
accurate enough for delivery radii of a few kilometres.
"""

from __future__ import annotations

import math
from typing import Optional

from ..models.domain import GeoPoint

EARTH_RADIUS_M = 6378137.0

_DEG2RAD = math.pi / 180.0


def project_to_local_meters(point: GeoPoint, origin: GeoPoint) -> tuple[float, float]:
    """Return (x, y) meters of ``point`` relative to ``origin``; x east, y north."""

    cos_lat0 = math.cos(origin.latitude * _DEG2RAD)
    x = (point.longitude - origin.longitude) * _DEG2RAD * EARTH_RADIUS_M * cos_lat0
    y = (point.latitude - origin.latitude) * _DEG2RAD * EARTH_RADIUS_M
    return x, y


def unproject_local_meters(x: float, y: float, origin: GeoPoint) -> GeoPoint:
    """Inverse of :func:`project_to_local_meters`."""

    cos_lat0 = math.cos(origin.latitude * _DEG2RAD)
    longitude = origin.longitude + x / (_DEG2RAD * EARTH_RADIUS_M * cos_lat0)
    latitude = origin.latitude + y / (_DEG2RAD * EARTH_RADIUS_M)
    return GeoPoint(longitude=longitude, latitude=latitude)


def haversine_meters(a: GeoPoint, b: GeoPoint) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(a.latitude), math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_M * c


def normalize_lng_lat(value: object) -> Optional[GeoPoint]:
    """Coerce ``[lng, lat]``, a GeoJSON point or a GeoPoint into a valid GeoPoint.

    Returns None when the value is missing, malformed or out of range.
    """

    if isinstance(value, GeoPoint):
        point = value
    else:
        if isinstance(value, dict):
            value = value.get("coordinates")
        if not isinstance(value, (list, tuple)) or len(value) != 2:
            return None
        try:
            point = GeoPoint(longitude=float(value[0]), latitude=float(value[1]))
        except (TypeError, ValueError, OverflowError):
            return None
    return point if point.is_valid() else None
