"""Pointy-top axial hex grid conversions.

Cell size is the hex circumradius in meters. Formulas follow the usual
axial/cube conventions: q = x, r = z, y = -x - z.
"""

from __future__ import annotations

import math
from typing import Optional

from ...models.domain import AxialCoordinate

SQRT3 = math.sqrt(3.0)


def _valid_size(size: float) -> bool:
    return math.isfinite(size) and size > 0


def pixel_to_axial_fractional(x: float, y: float, size: float) -> Optional[tuple[float, float]]:
    """Convert planar meters to fractional axial (q, r).

    Returns None when ``size`` is not a positive finite number.
    """

    size = float(size)
    if not _valid_size(size):
        return None
    q = (SQRT3 / 3.0 * x - 1.0 / 3.0 * y) / size
    r = (2.0 / 3.0 * y) / size
    return q, r


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def cube_round(x: float, y: float, z: float) -> tuple[int, int, int]:
    rx = _round_half_up(x)
    ry = _round_half_up(y)
    rz = _round_half_up(z)

    dx = abs(rx - x)
    dy = abs(ry - y)
    dz = abs(rz - z)

    # the component furthest from its rounded value absorbs the error
    if dx > dy and dx > dz:
        rx = -ry - rz
    elif dy > dz:
        ry = -rx - rz
    else:
        rz = -rx - ry
    return rx, ry, rz


def axial_round(q: float, r: float) -> AxialCoordinate:
    """Snap a fractional axial position to the cell whose center is nearest."""

    rx, _, rz = cube_round(q, -q - r, r)
    return AxialCoordinate(q=rx, r=rz)


def axial_to_local_meters(cell: AxialCoordinate, size: float) -> tuple[float, float]:
    """Center of ``cell`` in planar meters."""

    x = size * SQRT3 * (cell.q + cell.r / 2.0)
    y = size * 1.5 * cell.r
    return x, y


def hex_corners(cell: AxialCoordinate, size: float) -> list[tuple[float, float]]:
    """Six corners of ``cell`` in planar meters, counter-clockwise from 30 degrees."""

    cx, cy = axial_to_local_meters(cell, size)
    corners: list[tuple[float, float]] = []
    for i in range(6):
        angle = math.radians(60 * i + 30)
        corners.append((cx + size * math.cos(angle), cy + size * math.sin(angle)))
    return corners


def locate_cell(x: float, y: float, size: float) -> Optional[AxialCoordinate]:
    frac = pixel_to_axial_fractional(x, y, size)
    if frac is None:
        return None
    return axial_round(*frac)
