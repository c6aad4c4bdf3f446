"""Delivery zone identity, resolution and listing."""

from .listing import list_deliverable_restaurants
from .resolver import aresolve_zone, find_override, merge_pricing, resolve_for_config, resolve_zone
from .zone_id import ZoneId

__all__ = [
    "ZoneId",
    "aresolve_zone",
    "find_override",
    "list_deliverable_restaurants",
    "merge_pricing",
    "resolve_for_config",
    "resolve_zone",
]
