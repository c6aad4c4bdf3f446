"""Ring distance and service radius evaluation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ...models.domain import AxialCoordinate, ReasonCode


@dataclass(frozen=True, slots=True)
class RingCheck:
    accepted: bool
    reason: Optional[ReasonCode] = None
    ring: Optional[int] = None
    ring_max: Optional[int] = None


def ring_of(cell: AxialCoordinate) -> int:
    x, y, z = cell.to_cube()
    return max(abs(x), abs(y), abs(z))


def ring_ceiling(radius_meters: float, cell_size_meters: float) -> Optional[int]:
    """Largest ring served for ``radius_meters``; None when it cannot be computed."""

    try:
        ratio = float(radius_meters) / float(cell_size_meters)
    except ZeroDivisionError:
        return None
    if not math.isfinite(ratio):
        return None
    k_max = math.floor(ratio)
    if k_max < 0:
        return None
    return k_max


def evaluate_ring(cell: AxialCoordinate, radius_meters: float, cell_size_meters: float) -> RingCheck:
    k = ring_of(cell)
    k_max = ring_ceiling(radius_meters, cell_size_meters)
    if k_max is None:
        return RingCheck(accepted=False, reason=ReasonCode.INVALID_GRID_RADIUS, ring=k)
    if k > k_max:
        return RingCheck(accepted=False, reason=ReasonCode.OUT_OF_RADIUS, ring=k, ring_max=k_max)
    return RingCheck(accepted=True, ring=k, ring_max=k_max)
