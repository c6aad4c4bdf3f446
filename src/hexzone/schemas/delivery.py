"""Pydantic request/response models for delivery zone endpoints."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from ..models.domain import ZoneResolution


class ResolveZoneRequest(BaseModel):
    restaurantId: str = Field(..., description="Restaurant to resolve against.")
    customerLocation: Optional[Any] = Field(
        default=None,
        description="Customer position as [lng, lat].",
    )
    hexId: Optional[str] = Field(
        default=None,
        description="Zone id computed earlier by the client; advisory only.",
    )

    @field_validator("restaurantId")
    @classmethod
    def validate_restaurant_id(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("restaurantId is required")
        return value


class ResolveZoneResponse(BaseModel):
    ok: bool
    reason: Optional[str] = None
    hexId: Optional[str] = None
    zoneId: Optional[str] = None
    isActive: bool = False
    minOrderAmount: float = 0.0
    feeAmount: float = 0.0
    zoneName: Optional[str] = None
    ring: Optional[int] = None
    ringMax: Optional[int] = None

    @classmethod
    def from_resolution(cls, resolution: ZoneResolution) -> "ResolveZoneResponse":
        if resolution.ok:
            min_order = resolution.min_order_amount or 0.0
            fee = resolution.fee_amount or 0.0
        elif resolution.defaults is not None:
            min_order = resolution.defaults.min_order_amount
            fee = resolution.defaults.fee_amount
        else:
            min_order = fee = 0.0
        return cls(
            ok=resolution.ok,
            reason=resolution.reason.value if resolution.reason else None,
            hexId=f"axial:{resolution.cell.q},{resolution.cell.r}" if resolution.cell else None,
            zoneId=str(resolution.zone_id) if resolution.ok and resolution.zone_id else None,
            isActive=resolution.is_active,
            minOrderAmount=min_order,
            feeAmount=fee,
            zoneName=resolution.zone_name if resolution.ok else None,
            ring=resolution.ring,
            ringMax=resolution.ring_max,
        )

    def to_wire(self) -> dict:
        """Serialize, leaving out ``ring``/``ringMax`` when they were not computed."""
        payload = self.model_dump()
        for key in ("ring", "ringMax"):
            if payload[key] is None:
                payload.pop(key)
        return payload


class DeliveryZoneSummary(BaseModel):
    id: str
    name: Optional[str] = None
    ring: Optional[int] = None
    minOrderAmount: float
    feeAmount: float


class DeliverableRestaurant(BaseModel):
    restaurantId: str
    name: Optional[str] = None
    distanceKm: float
    deliveryFee: float
    deliveryMinOrderAmount: float
    deliveryEtaMin: Optional[int] = None
    deliveryEtaMax: Optional[int] = None
    deliveryZone: DeliveryZoneSummary


class DeliverableRestaurantsResponse(BaseModel):
    location: list[float]
    items: list[DeliverableRestaurant]
