"""Resolve a customer location to a delivery zone of a restaurant.

Checks run cheapest first: restaurant flags, coordinates, grid math, then the
per-zone override table. Business rejections are returned as
``ZoneResolution(ok=False)``; only a failing configuration read raises.

Override policy:
- no overrides configured => every cell inside the radius is served with the
  restaurant defaults
- overrides configured => only the listed cells are served; anything else is
  ``ZONE_NOT_CONFIGURED``
"""

from __future__ import annotations

import inspect
import logging
import math
from typing import Any, Awaitable, Callable, Optional, Sequence, Union

from ...models.domain import (
    PricingDefaults,
    ReasonCode,
    ResolutionStage,
    RestaurantDeliveryConfig,
    ZoneOverride,
    ZoneResolution,
)
from ..geospatial import normalize_lng_lat, project_to_local_meters
from ..grid.axial import locate_cell
from ..grid.rings import evaluate_ring
from .zone_id import ZoneId

ConfigLoader = Callable[
    [str],
    Union[Optional[RestaurantDeliveryConfig], Awaitable[Optional[RestaurantDeliveryConfig]]],
]


def _finite_or(value: Optional[float], fallback: float) -> float:
    if value is not None and math.isfinite(value):
        return value
    return fallback


def merge_pricing(override: Optional[ZoneOverride], defaults: PricingDefaults) -> tuple[float, float]:
    """Return (min_order_amount, fee_amount) with override values taking precedence."""

    min_order = defaults.min_order_amount
    fee = defaults.fee_amount
    if override is not None:
        min_order = _finite_or(override.min_order_amount, min_order)
        fee = _finite_or(override.fee_amount, fee)
    return max(0.0, min_order), max(0.0, fee)


def find_override(overrides: Sequence[ZoneOverride], zone_id: ZoneId) -> Optional[ZoneOverride]:
    for override in overrides:
        if ZoneId.parse(override.zone_id) == zone_id:
            return override
    return None


def _reject(
    stage: ResolutionStage,
    reason: ReasonCode,
    config: Optional[RestaurantDeliveryConfig] = None,
    **diagnostics: Any,
) -> ZoneResolution:
    logging.debug(
        f"Zone resolution rejected at {stage.value}: {reason.value} "
        f"(restaurant={config.restaurant_id if config else None})"
    )
    return ZoneResolution(
        ok=False,
        stage=ResolutionStage.REJECTED,
        rejected_at=stage,
        reason=reason,
        defaults=config.defaults if config else None,
        **diagnostics,
    )


def resolve_for_config(
    config: Optional[RestaurantDeliveryConfig],
    customer_location: Any,
    precomputed_zone_id: Optional[str] = None,
) -> ZoneResolution:
    """Resolve ``customer_location`` against a restaurant configuration snapshot."""

    stage = ResolutionStage.VALIDATING_SOURCE
    if config is None:
        return _reject(stage, ReasonCode.RESTAURANT_NOT_FOUND)
    if not config.is_active or config.status != "active":
        return _reject(stage, ReasonCode.RESTAURANT_INACTIVE, config)
    if not config.delivery_enabled:
        return _reject(stage, ReasonCode.DELIVERY_DISABLED, config)

    origin = normalize_lng_lat(config.origin)
    if origin is None:
        return _reject(stage, ReasonCode.RESTAURANT_LOCATION_MISSING, config)

    customer = normalize_lng_lat(customer_location)
    if customer is None:
        return _reject(stage, ReasonCode.INVALID_CUSTOMER_LOCATION, config)

    stage = ResolutionStage.PROJECTING
    x, y = project_to_local_meters(customer, origin)

    stage = ResolutionStage.GRID_MAPPING
    grid = config.grid
    cell = locate_cell(x, y, grid.cell_size_meters)
    if cell is None:
        return _reject(stage, ReasonCode.INVALID_GRID_SIZE, config)

    stage = ResolutionStage.RADIUS_CHECK
    check = evaluate_ring(cell, grid.radius_meters, grid.cell_size_meters)
    if not check.accepted:
        return _reject(stage, check.reason, config, cell=cell, ring=check.ring, ring_max=check.ring_max)

    stage = ResolutionStage.INDEXING
    zone_id = ZoneId(cell)
    zone_index = zone_id.index
    diagnostics = {"zone_id": zone_id, "cell": cell, "ring": check.ring, "ring_max": check.ring_max}
    if precomputed_zone_id:
        hinted = ZoneId.parse(precomputed_zone_id)
        if hinted != zone_id:
            logging.warning(
                f"Ignoring precomputed zone id '{precomputed_zone_id}' for restaurant "
                f"{config.restaurant_id}: location resolves to {zone_id}"
            )

    stage = ResolutionStage.OVERRIDE_LOOKUP
    override = find_override(config.overrides, zone_id)
    if config.overrides and override is None:
        return _reject(stage, ReasonCode.ZONE_NOT_CONFIGURED, config, **diagnostics)
    if override is not None and not override.is_active:
        return _reject(
            stage, ReasonCode.ZONE_INACTIVE, config, zone_name=override.name, **diagnostics
        )

    min_order, fee = merge_pricing(override, config.defaults)
    logging.debug(
        f"Restaurant {config.restaurant_id}: resolved zone {zone_index} at ring {check.ring}/{check.ring_max}"
    )
    return ZoneResolution(
        ok=True,
        stage=ResolutionStage.RESOLVED,
        is_active=True,
        min_order_amount=min_order,
        fee_amount=fee,
        zone_name=override.name if override else None,
        defaults=config.defaults,
        **diagnostics,
    )


def resolve_zone(
    restaurant_id: str,
    customer_location: Any,
    precomputed_zone_id: Optional[str] = None,
    *,
    loader: Callable[[str], Optional[RestaurantDeliveryConfig]],
) -> ZoneResolution:
    """Load a fresh configuration snapshot and resolve against it.

    Must be re-run at order commit time; an earlier result is advisory only.
    """

    config = loader(restaurant_id)
    return resolve_for_config(config, customer_location, precomputed_zone_id)


async def aresolve_zone(
    restaurant_id: str,
    customer_location: Any,
    precomputed_zone_id: Optional[str] = None,
    *,
    loader: ConfigLoader,
) -> ZoneResolution:
    """Async variant of :func:`resolve_zone`; ``loader`` may be sync or async."""

    loaded = loader(restaurant_id)
    if inspect.isawaitable(loaded):
        loaded = await loaded
    return resolve_for_config(loaded, customer_location, precomputed_zone_id)
