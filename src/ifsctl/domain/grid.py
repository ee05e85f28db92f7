"""Occupancy grid indexer — continuous position <-> integer cell index.

Cells are cubes of edge ``step``.  The grid is shifted by ``offset`` so the
unit parent volume (edge 1, centred at the origin) is tiled by whole cells:
``offset = step / 2`` when ``round(1 / step)`` is even, ``0`` otherwise.
That keeps halves, thirds and quarters aligned with the parent.

Rounding is half-up (``floor(x + 0.5)``) for both the offset parity test and
``to_index``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

GridCellIndex = tuple[int, int, int]


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class OccupancyGrid:
    """Uniform cubic grid of cell size ``step`` shifted by ``offset``."""

    step: float
    offset: float

    @classmethod
    def for_step(cls, step: float) -> OccupancyGrid:
        """Build the grid aligned to the unit parent volume.

        Raises:
            ValueError: if *step* is not a finite positive number.
        """
        if isinstance(step, bool) or not isinstance(step, (int, float)):
            msg = f"Grid step must be a number, got {step!r}"
            raise ValueError(msg)
        if not math.isfinite(step) or step <= 0:
            msg = f"Grid step must be finite and > 0, got {step}"
            raise ValueError(msg)

        step = float(step)
        cells_per_unit = round_half_up(1.0 / step)
        offset = step / 2 if cells_per_unit % 2 == 0 else 0.0
        return cls(step=step, offset=offset)

    def to_index(self, value: float) -> int:
        return round_half_up((value - self.offset) / self.step)

    def to_pos(self, index: int) -> float:
        return index * self.step + self.offset

    def cell_of(self, position: tuple[float, float, float]) -> GridCellIndex:
        x, y, z = position
        return (self.to_index(x), self.to_index(y), self.to_index(z))

    def center_of(self, cell: GridCellIndex) -> tuple[float, float, float]:
        i, j, k = cell
        return (self.to_pos(i), self.to_pos(j), self.to_pos(k))

    @property
    def search_radius(self) -> int:
        """Index half-width of a window that covers the unit parent volume."""
        return math.ceil(1.0 / self.step)
