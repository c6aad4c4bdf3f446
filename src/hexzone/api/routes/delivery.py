"""API routes for delivery zone resolution."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, status

from ...config import settings
from ...data.restaurant_repository import get_restaurant_config, list_delivery_candidates
from ...errors import ZoneComputationError, ZoneConfigUnavailableError
from ...schemas.delivery import (
    DeliverableRestaurant,
    DeliverableRestaurantsResponse,
    ResolveZoneRequest,
    ResolveZoneResponse,
)
from ...services.export.geojson import grid_feature_collection
from ...services.zoning.listing import list_deliverable_restaurants
from ...services.zoning.resolver import resolve_zone

router = APIRouter(prefix="/delivery", tags=["delivery"])


def _unavailable(exc: Exception) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=f"Delivery configuration is temporarily unavailable: {exc}",
    )


@router.post("/resolve-zone", status_code=status.HTTP_200_OK)
def resolve_delivery_zone(payload: ResolveZoneRequest) -> dict:
    """Resolve the delivery zone serving a customer location.

    The answer reflects the configuration at call time; checkout must call
    this again rather than trust a previously displayed result.
    """
    try:
        resolution = resolve_zone(
            payload.restaurantId,
            payload.customerLocation,
            payload.hexId,
            loader=get_restaurant_config,
        )
    except ZoneConfigUnavailableError as exc:
        raise _unavailable(exc) from exc
    except ZoneComputationError as exc:
        logging.error(f"Zone computation failed for restaurant {payload.restaurantId}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to compute delivery zone.",
        ) from exc
    return ResolveZoneResponse.from_resolution(resolution).to_wire()


@router.get("/restaurants", response_model=DeliverableRestaurantsResponse, status_code=status.HTTP_200_OK)
def list_restaurants_for_location(
    lng: float = Query(..., ge=-180, le=180, description="Customer longitude"),
    lat: float = Query(..., ge=-90, le=90, description="Customer latitude"),
) -> DeliverableRestaurantsResponse:
    """Restaurants whose delivery grid covers the given location, nearest first."""
    try:
        candidates = list_delivery_candidates()
        items = list_deliverable_restaurants(
            [lng, lat],
            candidates,
            max_radius_meters=settings.delivery_max_radius_meters,
        )
    except ZoneConfigUnavailableError as exc:
        raise _unavailable(exc) from exc
    except ZoneComputationError as exc:
        logging.error(f"Zone computation failed while listing restaurants: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to compute delivery zones.",
        ) from exc

    logging.info(f"{len(items)} of {len(candidates)} delivery restaurants serve ({lng}, {lat})")
    return DeliverableRestaurantsResponse(
        location=[lng, lat],
        items=[DeliverableRestaurant(**item) for item in items],
    )


@router.get("/restaurants/{restaurant_id}/grid", status_code=status.HTTP_200_OK)
def get_restaurant_grid(restaurant_id: str) -> dict:
    """GeoJSON hexagons of a restaurant's delivery grid with per-zone state."""
    try:
        config = get_restaurant_config(restaurant_id)
    except ZoneConfigUnavailableError as exc:
        raise _unavailable(exc) from exc
    if config is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Restaurant '{restaurant_id}' not found.",
        )
    try:
        return grid_feature_collection(config)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
