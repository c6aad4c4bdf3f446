"""Canonical zone identity.

Two id schemes exist in stored restaurant configuration: spiral ids
(``hex-<n>``, written by the operator panel) and raw axial keys
(``axial:<q>,<r>`` or ``<q>:<r>``). Both name a single cell, so a ``ZoneId``
is the cell itself; it renders as ``zone-<n>`` and any of the stored forms
parse back to the same value.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from ...models.domain import AxialCoordinate
from ..grid.spiral import spiral_index, spiral_to_axial

CANONICAL_PREFIX = "zone-"

# at most 18 digits per number; longer ids parse to None
_SPIRAL_RE = re.compile(r"^(?:zone|hex)-(\d{1,18})$", re.IGNORECASE)
_AXIAL_RE = re.compile(r"^(?:axial:)?(-?\d{1,18})\s*[,:]\s*(-?\d{1,18})$", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class ZoneId:
    cell: AxialCoordinate

    @classmethod
    def for_cell(cls, q: int, r: int) -> "ZoneId":
        return cls(AxialCoordinate(q=q, r=r))

    @classmethod
    def from_index(cls, index: int) -> "ZoneId":
        return cls(spiral_to_axial(index))

    @classmethod
    def parse(cls, value: object) -> Optional["ZoneId"]:
        """Parse any stored zone id form; None when it is not recognised."""

        text = str(value or "").strip()
        if not text:
            return None
        spiral = _SPIRAL_RE.match(text)
        if spiral:
            index = int(spiral.group(1))
            if index < 1:
                return None
            return cls.from_index(index)
        axial = _AXIAL_RE.match(text)
        if axial:
            return cls.for_cell(int(axial.group(1)), int(axial.group(2)))
        return None

    @property
    def index(self) -> int:
        return spiral_index(self.cell)

    @property
    def axial_key(self) -> str:
        return f"axial:{self.cell.q},{self.cell.r}"

    def __str__(self) -> str:
        return f"{CANONICAL_PREFIX}{self.index}"
