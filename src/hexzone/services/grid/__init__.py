"""Hex grid math: axial mapping, ring evaluation and spiral indexing."""

from .axial import axial_round, axial_to_local_meters, hex_corners, locate_cell, pixel_to_axial_fractional
from .rings import RingCheck, evaluate_ring, ring_ceiling, ring_of
from .spiral import cell_count, enumerate_cells, spiral_index, spiral_to_axial

__all__ = [
    "axial_round",
    "axial_to_local_meters",
    "hex_corners",
    "locate_cell",
    "pixel_to_axial_fractional",
    "RingCheck",
    "evaluate_ring",
    "ring_ceiling",
    "ring_of",
    "cell_count",
    "enumerate_cells",
    "spiral_index",
    "spiral_to_axial",
]
