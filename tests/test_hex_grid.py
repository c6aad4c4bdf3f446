import math
import random

import pytest

from hexzone.models.domain import AxialCoordinate, ReasonCode
from hexzone.services.grid.axial import (
    axial_round,
    cube_round,
    axial_to_local_meters,
    hex_corners,
    locate_cell,
    pixel_to_axial_fractional,
)
from hexzone.services.grid.rings import evaluate_ring, ring_ceiling, ring_of

NEIGHBOURS = ((1, 0), (1, -1), (0, -1), (-1, 0), (-1, 1), (0, 1))


@pytest.mark.parametrize("size", [0, -450, float("nan"), float("inf")])
def test_fractional_rejects_invalid_size(size):
    assert pixel_to_axial_fractional(10.0, 10.0, size) is None
    assert locate_cell(10.0, 10.0, size) is None


def test_cell_center_round_trips():
    for q in range(-4, 5):
        for r in range(-4, 5):
            cell = AxialCoordinate(q=q, r=r)
            x, y = axial_to_local_meters(cell, 450.0)
            fq, fr = pixel_to_axial_fractional(x, y, 450.0)
            assert fq == pytest.approx(q, abs=1e-9)
            assert fr == pytest.approx(r, abs=1e-9)
            assert locate_cell(x, y, 450.0) == cell


def test_rounding_keeps_cube_invariant():
    rng = random.Random(7)
    for _ in range(2000):
        q = rng.uniform(-20, 20)
        r = rng.uniform(-20, 20)
        x, y, z = axial_round(q, r).to_cube()
        assert x + y + z == 0


def test_rounding_fixes_naive_error_near_edges():
    # independently rounding q and r would give (0, 0)
    assert axial_round(0.45, 0.4) == AxialCoordinate(q=1, r=0)


def test_rounding_picks_nearest_center():
    size = 100.0
    rng = random.Random(11)
    for _ in range(1000):
        x = rng.uniform(-2000, 2000)
        y = rng.uniform(-2000, 2000)
        cell = locate_cell(x, y, size)
        cx, cy = axial_to_local_meters(cell, size)
        best = math.hypot(x - cx, y - cy)
        for dq, dr in NEIGHBOURS:
            nx, ny = axial_to_local_meters(AxialCoordinate(q=cell.q + dq, r=cell.r + dr), size)
            assert best <= math.hypot(x - nx, y - ny) + 1e-9


def test_east_offset_of_500m_lands_in_first_ring():
    cell = locate_cell(500.0, 0.0, 450.0)
    assert cell == AxialCoordinate(q=1, r=0)
    assert ring_of(cell) == 1


def test_hex_corners_lie_on_circumradius():
    cell = AxialCoordinate(q=2, r=-1)
    cx, cy = axial_to_local_meters(cell, 450.0)
    corners = hex_corners(cell, 450.0)

    assert len(corners) == 6
    for x, y in corners:
        assert math.hypot(x - cx, y - cy) == pytest.approx(450.0)


@pytest.mark.parametrize(
    "q, r, expected",
    [(0, 0, 0), (1, 0, 1), (0, -1, 1), (2, -1, 2), (-3, 3, 3), (-3, -3, 6), (7, 0, 7)],
)
def test_ring_of(q, r, expected):
    assert ring_of(AxialCoordinate(q=q, r=r)) == expected


def test_ring_ceiling():
    assert ring_ceiling(3000, 450) == 6
    assert ring_ceiling(449, 450) == 0
    assert ring_ceiling(0, 450) == 0
    assert ring_ceiling(-1, 450) is None
    assert ring_ceiling(float("nan"), 450) is None
    assert ring_ceiling(float("inf"), 450) is None


def test_ring_at_ceiling_is_accepted():
    check = evaluate_ring(AxialCoordinate(q=6, r=0), 3000, 450)
    assert check.accepted
    assert (check.ring, check.ring_max) == (6, 6)


def test_ring_past_ceiling_is_rejected():
    check = evaluate_ring(AxialCoordinate(q=7, r=0), 3000, 450)
    assert not check.accepted
    assert check.reason == ReasonCode.OUT_OF_RADIUS
    assert (check.ring, check.ring_max) == (7, 6)


def test_invalid_radius_is_reported():
    check = evaluate_ring(AxialCoordinate(q=0, r=0), -10, 450)
    assert not check.accepted
    assert check.reason == ReasonCode.INVALID_GRID_RADIUS


def test_rounding_ties_reset_the_later_component():
    # dx == dy: y absorbs the error
    assert cube_round(0.5, -0.5, 0.0) == (1, -1, 0)
    # dx == dz: z absorbs the error
    assert cube_round(0.5, 0.0, -0.5) == (1, 0, -1)
    # dy == dz: z absorbs the error
    assert cube_round(0.0, 0.5, -0.5) == (0, 1, -1)
