"""Domain models for restaurant delivery configuration and zone resolution."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..services.zoning.zone_id import ZoneId


class ReasonCode(str, Enum):
    """Why a resolution was rejected."""

    RESTAURANT_NOT_FOUND = "RESTAURANT_NOT_FOUND"
    RESTAURANT_INACTIVE = "RESTAURANT_INACTIVE"
    DELIVERY_DISABLED = "DELIVERY_DISABLED"
    RESTAURANT_LOCATION_MISSING = "RESTAURANT_LOCATION_MISSING"
    INVALID_CUSTOMER_LOCATION = "INVALID_CUSTOMER_LOCATION"
    INVALID_GRID_SIZE = "INVALID_GRID_SIZE"
    INVALID_GRID_RADIUS = "INVALID_GRID_RADIUS"
    OUT_OF_RADIUS = "OUT_OF_RADIUS"
    ZONE_NOT_CONFIGURED = "ZONE_NOT_CONFIGURED"
    ZONE_INACTIVE = "ZONE_INACTIVE"


class ResolutionStage(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    VALIDATING_SOURCE = "VALIDATING_SOURCE"
    PROJECTING = "PROJECTING"
    GRID_MAPPING = "GRID_MAPPING"
    RADIUS_CHECK = "RADIUS_CHECK"
    INDEXING = "INDEXING"
    OVERRIDE_LOOKUP = "OVERRIDE_LOOKUP"
    RESOLVED = "RESOLVED"
    REJECTED = "REJECTED"


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """WGS84 position in degrees."""

    longitude: float
    latitude: float

    def is_valid(self) -> bool:
        return (
            math.isfinite(self.longitude)
            and math.isfinite(self.latitude)
            and -180.0 <= self.longitude <= 180.0
            and -90.0 <= self.latitude <= 90.0
        )


@dataclass(frozen=True, slots=True)
class AxialCoordinate:
    """Integer pointy-top hex cell address."""

    q: int
    r: int

    def to_cube(self) -> tuple[int, int, int]:
        return (self.q, -self.q - self.r, self.r)


@dataclass(frozen=True, slots=True)
class GridSettings:
    """Hex grid laid around a restaurant.

    ``orientation`` is carried for compatibility with stored settings; the
    grid is always pointy-top.
    """

    cell_size_meters: float
    radius_meters: float
    orientation: str = "pointy"


@dataclass(frozen=True, slots=True)
class PricingDefaults:
    min_order_amount: float = 0.0
    fee_amount: float = 0.0


@dataclass(frozen=True, slots=True)
class ZoneOverride:
    """Operator-configured pricing/availability for a single cell."""

    zone_id: str
    name: Optional[str] = None
    is_active: bool = True
    min_order_amount: Optional[float] = None
    fee_amount: Optional[float] = None


@dataclass(frozen=True, slots=True)
class RestaurantDeliveryConfig:
    """Read-only snapshot of a restaurant's delivery configuration."""

    restaurant_id: str
    is_active: bool
    status: str
    delivery_enabled: bool
    origin: Optional[GeoPoint]
    grid: GridSettings
    defaults: PricingDefaults = field(default_factory=PricingDefaults)
    overrides: tuple[ZoneOverride, ...] = ()
    name: Optional[str] = None
    eta_min: Optional[int] = None
    eta_max: Optional[int] = None


@dataclass(frozen=True, slots=True)
class ZoneResolution:
    """Outcome of resolving a customer location against a restaurant grid.

    When ``ok`` is False the pricing fields are None and ``is_active`` is
    False; ``defaults`` still carries the restaurant-level pricing when the
    restaurant was found, for display purposes only.
    """

    ok: bool
    stage: ResolutionStage
    rejected_at: Optional[ResolutionStage] = None
    reason: Optional[ReasonCode] = None
    zone_id: Optional[ZoneId] = None
    cell: Optional[AxialCoordinate] = None
    ring: Optional[int] = None
    ring_max: Optional[int] = None
    is_active: bool = False
    min_order_amount: Optional[float] = None
    fee_amount: Optional[float] = None
    zone_name: Optional[str] = None
    defaults: Optional[PricingDefaults] = None
