"""Deterministic spiral numbering of hex cells.

Index 1 is the origin cell. Ring k >= 1 starts at (0, -k) and is walked
clockwise on screen, k steps along each of the six directions in
``RING_DIRECTIONS``. Stored zone overrides are keyed by these indices, so the
start cell and the direction order must never change.
"""

from __future__ import annotations

import math
from typing import Iterator

from ...errors import ZoneComputationError
from ...models.domain import AxialCoordinate
from .rings import ring_of

# E, SE, SW, W, NW, NE (screen space, r grows downward)
RING_DIRECTIONS: tuple[tuple[int, int], ...] = (
    (1, 0),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (0, -1),
    (1, -1),
)

ORIGIN = AxialCoordinate(q=0, r=0)


def cells_before_ring(k: int) -> int:
    """Number of cells in rings 0..k-1."""

    if k <= 0:
        return 0
    return 1 + 3 * k * (k - 1)


def cell_count(max_ring: int) -> int:
    """Number of cells in rings 0..max_ring."""

    return 1 + 3 * max_ring * (max_ring + 1)


def ring_cells(k: int) -> Iterator[AxialCoordinate]:
    """Yield the cells of ring ``k`` in walk order."""

    if k == 0:
        yield ORIGIN
        return
    q, r = 0, -k
    for dq, dr in RING_DIRECTIONS:
        for _ in range(k):
            yield AxialCoordinate(q=q, r=r)
            q += dq
            r += dr


def spiral_index(cell: AxialCoordinate) -> int:
    """Return the 1-based spiral index of ``cell``.

    Raises ZoneComputationError if the ring walk does not visit the cell.
    """

    if cell == ORIGIN:
        return 1
    k = ring_of(cell)
    before = cells_before_ring(k)
    for offset, candidate in enumerate(ring_cells(k)):
        if candidate == cell:
            return before + offset + 1
    raise ZoneComputationError(f"cell ({cell.q}, {cell.r}) not visited while walking ring {k}")


def spiral_to_axial(index: int) -> AxialCoordinate:
    """Inverse of :func:`spiral_index`."""

    if index < 1:
        raise ValueError(f"spiral index must be >= 1, got {index}")
    if index == 1:
        return ORIGIN

    # closed-form ring, nudged for isqrt truncation
    k = (3 + math.isqrt(12 * index - 3)) // 6
    while cells_before_ring(k) >= index:
        k -= 1
    while cell_count(k) < index:
        k += 1

    offset = index - cells_before_ring(k) - 1
    side, step = divmod(offset, k)
    q, r = 0, -k
    for dq, dr in RING_DIRECTIONS[:side]:
        q += dq * k
        r += dr * k
    dq, dr = RING_DIRECTIONS[side]
    return AxialCoordinate(q=q + dq * step, r=r + dr * step)


def enumerate_cells(max_ring: int) -> Iterator[tuple[int, AxialCoordinate]]:
    """Yield (index, cell) for every cell up to ``max_ring``, in index order."""

    index = 1
    for k in range(max_ring + 1):
        for cell in ring_cells(k):
            yield index, cell
            index += 1
