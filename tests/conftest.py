from typing import Callable

import pytest

from hexzone.models.domain import (
    AxialCoordinate,
    GeoPoint,
    GridSettings,
    PricingDefaults,
    RestaurantDeliveryConfig,
    ZoneOverride,
)
from hexzone.services.geospatial import unproject_local_meters
from hexzone.services.grid.axial import axial_to_local_meters

ORIGIN = GeoPoint(longitude=29.0, latitude=41.0)


@pytest.fixture
def origin() -> GeoPoint:
    return ORIGIN


@pytest.fixture
def cell_point() -> Callable[..., GeoPoint]:
    """Geographic position of a cell center on a grid around ``ORIGIN``."""

    def _point(q: int, r: int, size: float = 450.0) -> GeoPoint:
        x, y = axial_to_local_meters(AxialCoordinate(q=q, r=r), size)
        return unproject_local_meters(x, y, ORIGIN)

    return _point


@pytest.fixture
def make_config() -> Callable[..., RestaurantDeliveryConfig]:
    def _make(
        *,
        restaurant_id: str = "R1",
        is_active: bool = True,
        status: str = "active",
        delivery_enabled: bool = True,
        origin: GeoPoint | None = ORIGIN,
        cell_size: float = 450.0,
        radius: float = 3000.0,
        min_order: float = 100.0,
        fee: float = 20.0,
        overrides: tuple[ZoneOverride, ...] = (),
        name: str | None = "Kebapci",
    ) -> RestaurantDeliveryConfig:
        return RestaurantDeliveryConfig(
            restaurant_id=restaurant_id,
            is_active=is_active,
            status=status,
            delivery_enabled=delivery_enabled,
            origin=origin,
            grid=GridSettings(cell_size_meters=cell_size, radius_meters=radius),
            defaults=PricingDefaults(min_order_amount=min_order, fee_amount=fee),
            overrides=overrides,
            name=name,
        )

    return _make
