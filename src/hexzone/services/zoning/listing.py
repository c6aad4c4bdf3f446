"""List restaurants that deliver to a customer location."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from ...models.domain import RestaurantDeliveryConfig
from ..geospatial import haversine_meters, normalize_lng_lat
from .resolver import resolve_for_config


def list_deliverable_restaurants(
    customer_location: Any,
    candidates: Iterable[RestaurantDeliveryConfig],
    *,
    max_radius_meters: float,
) -> list[dict]:
    """Resolve every nearby candidate and keep the ones serving the location.

    Candidates further than ``max_radius_meters`` in a straight line are
    skipped before any grid math. Entries are sorted by ascending distance.
    """

    customer = normalize_lng_lat(customer_location)
    if customer is None:
        raise ValueError("customer location must be [lng, lat] within valid ranges.")

    items: list[dict] = []
    skipped = 0
    for config in candidates:
        origin = normalize_lng_lat(config.origin)
        if origin is None:
            skipped += 1
            continue
        distance_m = haversine_meters(customer, origin)
        if distance_m > max_radius_meters:
            continue

        resolution = resolve_for_config(config, customer)
        if not resolution.ok:
            continue

        items.append(
            {
                "restaurantId": config.restaurant_id,
                "name": config.name,
                "distanceMeters": distance_m,
                "distanceKm": round(distance_m / 1000.0, 2),
                "deliveryFee": resolution.fee_amount,
                "deliveryMinOrderAmount": resolution.min_order_amount,
                "deliveryEtaMin": config.eta_min or None,
                "deliveryEtaMax": config.eta_max or None,
                "deliveryZone": {
                    "id": str(resolution.zone_id),
                    "name": resolution.zone_name,
                    "ring": resolution.ring,
                    "minOrderAmount": resolution.min_order_amount,
                    "feeAmount": resolution.fee_amount,
                },
            }
        )

    if skipped:
        logging.warning(f"Skipped {skipped} delivery candidates without a valid location")
    items.sort(key=lambda item: item["distanceMeters"])
    return items
