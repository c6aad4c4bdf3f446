import pytest

from hexzone.errors import ZoneComputationError
from hexzone.models.domain import AxialCoordinate
from hexzone.services.grid import spiral
from hexzone.services.grid.rings import ring_of
from hexzone.services.grid.spiral import (
    cell_count,
    cells_before_ring,
    enumerate_cells,
    ring_cells,
    spiral_index,
    spiral_to_axial,
)


def test_origin_is_index_one():
    assert spiral_index(AxialCoordinate(q=0, r=0)) == 1
    assert spiral_to_axial(1) == AxialCoordinate(q=0, r=0)


def test_ring_start_counts():
    assert [cells_before_ring(k) for k in range(5)] == [0, 1, 7, 19, 37]
    assert [cell_count(k) for k in range(4)] == [1, 7, 19, 37]


def test_first_ring_order_is_fixed():
    expected = [(0, -1), (1, -1), (1, 0), (0, 1), (-1, 1), (-1, 0)]
    assert [(cell.q, cell.r) for cell in ring_cells(1)] == expected
    assert [spiral_index(AxialCoordinate(q=q, r=r)) for q, r in expected] == [2, 3, 4, 5, 6, 7]


def test_ring_walk_starts_at_top_cell():
    for k in range(1, 6):
        first = next(ring_cells(k))
        assert first == AxialCoordinate(q=0, r=-k)
        assert spiral_index(first) == cells_before_ring(k) + 1


def test_ring_walk_stays_on_ring():
    for k in range(1, 8):
        cells = list(ring_cells(k))
        assert len(cells) == 6 * k
        assert len(set(cells)) == 6 * k
        assert all(ring_of(cell) == k for cell in cells)


@pytest.mark.parametrize("max_ring", [0, 1, 3, 6])
def test_enumeration_is_a_bijection(max_ring):
    enumerated = list(enumerate_cells(max_ring))
    expected_count = 1 + 3 * max_ring * (max_ring + 1)

    assert len(enumerated) == expected_count
    assert [index for index, _ in enumerated] == list(range(1, expected_count + 1))

    every_cell = {
        AxialCoordinate(q=q, r=r)
        for q in range(-max_ring, max_ring + 1)
        for r in range(-max_ring, max_ring + 1)
        if ring_of(AxialCoordinate(q=q, r=r)) <= max_ring
    }
    assert {cell for _, cell in enumerated} == every_cell

    for index, cell in enumerated:
        assert spiral_index(cell) == index
        assert spiral_to_axial(index) == cell


def test_indices_are_stable_across_calls():
    cell = AxialCoordinate(q=-2, r=5)
    assert spiral_index(cell) == spiral_index(AxialCoordinate(q=-2, r=5))
    assert spiral_to_axial(spiral_index(cell)) == cell


def test_spiral_to_axial_rejects_non_positive_index():
    with pytest.raises(ValueError):
        spiral_to_axial(0)


def test_missing_cell_raises_computation_error(monkeypatch):
    monkeypatch.setattr(spiral, "ring_cells", lambda k: iter(()))

    with pytest.raises(ZoneComputationError):
        spiral_index(AxialCoordinate(q=1, r=0))


def test_inverse_handles_far_rings():
    k = 10**8
    assert spiral_to_axial(cells_before_ring(k) + 1) == AxialCoordinate(q=0, r=-k)
    assert spiral_to_axial(cell_count(k)) == AxialCoordinate(q=-1, r=-(k - 1))
    assert spiral_to_axial(cell_count(k) + 1) == AxialCoordinate(q=0, r=-(k + 1))


def test_inverse_ring_boundaries():
    for k in range(1, 60):
        first = cells_before_ring(k) + 1
        last = cell_count(k)
        assert ring_of(spiral_to_axial(first)) == k
        assert ring_of(spiral_to_axial(last)) == k
