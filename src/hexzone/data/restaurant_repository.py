"""Restaurant delivery configuration loader with database-first approach, falling back to a JSON file.

Nothing here is cached: every call reads a fresh snapshot so that a zone
resolved at checkout reflects the configuration at that moment.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Iterable, Optional

from ..config import settings
from ..db.supabase import get_supabase_client
from ..errors import ZoneConfigUnavailableError
from ..models.domain import (
    GeoPoint,
    GridSettings,
    PricingDefaults,
    RestaurantDeliveryConfig,
    ZoneOverride,
)


def _pick(record: dict, *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return default


def _as_float(value: Any, default: float) -> float:
    """Coerce to float; None means ``default``, garbage becomes NaN."""
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return math.nan


def _finite_number(value: Any) -> Optional[float]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _as_int(value: Any) -> Optional[int]:
    number = _finite_number(value)
    return int(number) if number is not None else None


def _parse_origin(record: dict) -> Optional[GeoPoint]:
    location = _pick(record, "location")
    coordinates = None
    if isinstance(location, dict):
        coordinates = location.get("coordinates")
    elif isinstance(location, (list, tuple)):
        coordinates = location
    if coordinates is None:
        lng = _pick(record, "longitude", "lng")
        lat = _pick(record, "latitude", "lat")
        if lng is not None and lat is not None:
            coordinates = [lng, lat]
    if not isinstance(coordinates, (list, tuple)) or len(coordinates) != 2:
        return None
    lng = _finite_number(coordinates[0])
    lat = _finite_number(coordinates[1])
    if lng is None or lat is None:
        return None
    return GeoPoint(longitude=lng, latitude=lat)


def _parse_override(raw: dict) -> ZoneOverride:
    is_active = _pick(raw, "isActive", "is_active", default=True)
    name = _pick(raw, "name")
    return ZoneOverride(
        zone_id=str(_pick(raw, "id", "zoneId", "zone_id", default="")).strip(),
        name=str(name) if name else None,
        is_active=is_active is not False,
        min_order_amount=_finite_number(_pick(raw, "minOrderAmount", "min_order_amount")),
        fee_amount=_finite_number(_pick(raw, "feeAmount", "fee_amount")),
    )


def config_from_record(record: dict) -> RestaurantDeliveryConfig:
    """Map a stored restaurant document (camelCase or snake_case) to a typed snapshot."""

    delivery = _pick(record, "delivery", default={})
    if not isinstance(delivery, dict):
        delivery = {}
    grid = _pick(delivery, "gridSettings", "grid_settings", default={})
    if not isinstance(grid, dict):
        grid = {}
    zones = _pick(delivery, "zones", default=[])
    if not isinstance(zones, list):
        zones = []

    overrides: list[ZoneOverride] = []
    for raw in zones:
        if not isinstance(raw, dict):
            logging.warning(f"Skipping malformed zone override for restaurant {_pick(record, 'id', '_id')}: {raw!r}")
            continue
        overrides.append(_parse_override(raw))

    return RestaurantDeliveryConfig(
        restaurant_id=str(_pick(record, "id", "_id", "restaurantId", default="")),
        is_active=bool(_pick(record, "isActive", "is_active", default=False)),
        status=str(_pick(record, "status", default="active")),
        delivery_enabled=bool(_pick(delivery, "enabled", default=False)),
        origin=_parse_origin(record),
        grid=GridSettings(
            cell_size_meters=_as_float(
                _pick(grid, "cellSizeMeters", "cell_size_meters"), settings.default_cell_size_meters
            ),
            radius_meters=_as_float(_pick(grid, "radiusMeters", "radius_meters"), settings.default_radius_meters),
            orientation=str(_pick(grid, "orientation", default="pointy")),
        ),
        defaults=PricingDefaults(
            min_order_amount=max(0.0, _finite_number(_pick(delivery, "minOrderAmount", "min_order_amount")) or 0.0),
            fee_amount=max(0.0, _finite_number(_pick(delivery, "feeAmount", "fee_amount")) or 0.0),
        ),
        overrides=tuple(overrides),
        name=_pick(record, "name"),
        eta_min=_as_int(_pick(delivery, "etaMin", "eta_min")),
        eta_max=_as_int(_pick(delivery, "etaMax", "eta_max")),
    )


def _load_records_from_file(source: Path | None = None) -> list[dict]:
    path = source or settings.restaurants_file
    if not path.exists():
        raise ZoneConfigUnavailableError(
            f"Supabase is not configured and restaurant file '{path}' does not exist."
        )
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise ZoneConfigUnavailableError(f"Cannot read restaurant file '{path}': {exc}") from exc
    if isinstance(payload, dict):
        payload = payload.get("restaurants", [])
    return [row for row in payload if isinstance(row, dict)]


def _record_id(record: dict) -> str:
    return str(_pick(record, "id", "_id", "restaurantId", default=""))


def _load_record_from_database(client: Any, restaurant_id: str) -> Optional[dict]:
    try:
        response = (
            client.table(settings.restaurants_table)
            .select("*")
            .eq("id", restaurant_id)
            .limit(1)
            .execute()
        )
    except Exception as exc:
        logging.error(f"Restaurant lookup failed for {restaurant_id}: {exc}")
        raise ZoneConfigUnavailableError(f"Cannot load restaurant '{restaurant_id}' from database.") from exc
    rows = response.data or []
    return rows[0] if rows else None


def get_restaurant_config(restaurant_id: str) -> Optional[RestaurantDeliveryConfig]:
    """Return a fresh configuration snapshot, or None when the restaurant does not exist."""

    restaurant_id = str(restaurant_id or "").strip()
    if not restaurant_id:
        return None

    client = get_supabase_client()
    if client is not None:
        record = _load_record_from_database(client, restaurant_id)
    else:
        record = next(
            (row for row in _load_records_from_file() if _record_id(row) == restaurant_id),
            None,
        )
    return config_from_record(record) if record else None


def _candidate_records(client: Any) -> Iterable[dict]:
    if client is None:
        return _load_records_from_file()
    try:
        response = client.table(settings.restaurants_table).select("*").eq("is_active", True).execute()
    except Exception as exc:
        logging.error(f"Delivery candidate query failed: {exc}")
        raise ZoneConfigUnavailableError("Cannot load delivery restaurants from database.") from exc
    return response.data or []


def list_delivery_candidates() -> list[RestaurantDeliveryConfig]:
    """Active, delivery-enabled restaurants."""

    configs = [config_from_record(row) for row in _candidate_records(get_supabase_client())]
    return [
        config
        for config in configs
        if config.is_active and config.status == "active" and config.delivery_enabled
    ]
