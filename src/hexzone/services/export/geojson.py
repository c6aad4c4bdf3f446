"""GeoJSON export of a restaurant's delivery grid."""

from __future__ import annotations

from typing import Any, Dict, List

from shapely.geometry import Polygon, mapping

from ...models.domain import AxialCoordinate, GeoPoint, RestaurantDeliveryConfig
from ..geospatial import normalize_lng_lat, unproject_local_meters
from ..grid.axial import hex_corners
from ..grid.rings import ring_ceiling, ring_of
from ..grid.spiral import enumerate_cells
from ..zoning.resolver import find_override, merge_pricing
from ..zoning.zone_id import ZoneId


def cell_polygon(cell: AxialCoordinate, origin: GeoPoint, size: float) -> Polygon:
    """Hexagon of ``cell`` in lng/lat."""
    corners = [unproject_local_meters(x, y, origin) for x, y in hex_corners(cell, size)]
    return Polygon([(corner.longitude, corner.latitude) for corner in corners])


def grid_feature_collection(config: RestaurantDeliveryConfig) -> Dict[str, Any]:
    """Build a FeatureCollection with one hexagon per cell inside the service radius.

    Args:
        config: Restaurant delivery configuration snapshot

    Returns:
        GeoJSON FeatureCollection; feature properties carry the zone id and the
        pricing a customer in that cell would get.
    """
    origin = normalize_lng_lat(config.origin)
    if origin is None:
        raise ValueError(f"Restaurant '{config.restaurant_id}' has no valid location.")

    size = config.grid.cell_size_meters
    if not (size > 0):
        raise ValueError(f"Invalid grid cell size: {size}")
    k_max = ring_ceiling(config.grid.radius_meters, size)
    if k_max is None:
        raise ValueError(f"Invalid grid radius: {config.grid.radius_meters}")

    restricted = bool(config.overrides)
    features: List[Dict[str, Any]] = []
    for index, cell in enumerate_cells(k_max):
        zone_id = ZoneId(cell)
        override = find_override(config.overrides, zone_id)
        min_order, fee = merge_pricing(override, config.defaults)
        if override is not None:
            is_active = override.is_active
        else:
            is_active = not restricted
        features.append(
            {
                "type": "Feature",
                "id": str(zone_id),
                "geometry": mapping(cell_polygon(cell, origin, size)),
                "properties": {
                    "zoneId": str(zone_id),
                    "hexId": zone_id.axial_key,
                    "index": index,
                    "ring": ring_of(cell),
                    "q": cell.q,
                    "r": cell.r,
                    "configured": override is not None,
                    "isActive": is_active,
                    "minOrderAmount": min_order,
                    "feeAmount": fee,
                    "zoneName": override.name if override else None,
                },
            }
        )

    return {
        "type": "FeatureCollection",
        "features": features,
        "properties": {
            "restaurantId": config.restaurant_id,
            "cellSizeMeters": size,
            "radiusMeters": config.grid.radius_meters,
            "ringMax": k_max,
            "orientation": "pointy",
        },
    }
