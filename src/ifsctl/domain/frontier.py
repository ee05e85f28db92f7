"""Spatial frontier engine — occupied cells and their addable neighbours.

Occupied cells are the grid cells of every placed rule plus every cell inside
the unit parent volume.  The frontier is the set of empty cells that share a
face (6-connectivity) with an occupied cell.

The result is rebuilt from scratch on every call.  Iteration follows
insertion order (rules, then the parent scan, then neighbours) so identical
inputs always produce identical output.

INVARIANT: ``frontier ∩ occupied = ∅`` and every frontier cell touches at
least one occupied cell.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from ifsctl.domain.grid import GridCellIndex, OccupancyGrid
from ifsctl.domain.models import TransformRule

PARENT_HALF_EXTENT = 0.5
DEFAULT_TOLERANCE = 0.001

NEIGHBOR_OFFSETS: tuple[GridCellIndex, ...] = (
    (1, 0, 0),
    (-1, 0, 0),
    (0, 1, 0),
    (0, -1, 0),
    (0, 0, 1),
    (0, 0, -1),
)


@dataclass(frozen=True)
class FrontierCell:
    """One empty cell adjacent to occupied space."""

    index: GridCellIndex
    position: tuple[float, float, float]

    @property
    def key(self) -> str:
        return ",".join(str(i) for i in self.index)


@dataclass(frozen=True)
class FrontierResult:
    grid: OccupancyGrid
    rule_cells: list[GridCellIndex] = field(default_factory=list)
    occupied: frozenset[GridCellIndex] = frozenset()
    parent_cells: frozenset[GridCellIndex] = frozenset()
    frontier: list[FrontierCell] = field(default_factory=list)

    def frontier_indices(self) -> set[GridCellIndex]:
        return {cell.index for cell in self.frontier}

    def find(self, index: GridCellIndex) -> FrontierCell | None:
        for cell in self.frontier:
            if cell.index == index:
                return cell
        return None


def parent_volume_cells(
    grid: OccupancyGrid,
    *,
    tolerance: float = DEFAULT_TOLERANCE,
) -> list[GridCellIndex]:
    """Cells whose centre lies strictly inside the unit parent volume."""
    limit = PARENT_HALF_EXTENT - tolerance
    radius = grid.search_radius
    span = range(-radius, radius + 1)
    inside = [i for i in span if abs(grid.to_pos(i)) < limit]
    return [(x, y, z) for x in inside for y in inside for z in inside]


def compute_frontier(
    rules: Sequence[TransformRule],
    step: float,
    *,
    tolerance: float = DEFAULT_TOLERANCE,
) -> FrontierResult:
    """Compute occupied cells and the frontier for *rules* on a grid of *step*.

    Raises:
        ValueError: if *step* or *tolerance* is invalid, or a rule position is
            not finite.
    """
    grid = OccupancyGrid.for_step(step)
    if not math.isfinite(tolerance) or not 0 <= tolerance < PARENT_HALF_EXTENT:
        msg = f"Tolerance must be within [0, 0.5), got {tolerance}"
        raise ValueError(msg)

    occupied: dict[GridCellIndex, None] = {}
    rule_cells: list[GridCellIndex] = []
    for rule in rules:
        if not all(math.isfinite(v) for v in rule.position):
            msg = f"Rule position must be finite: {rule.position!r}"
            raise ValueError(msg)
        cell = grid.cell_of(rule.position)
        rule_cells.append(cell)
        occupied[cell] = None

    parent = parent_volume_cells(grid, tolerance=tolerance)
    for cell in parent:
        occupied[cell] = None

    frontier: dict[GridCellIndex, FrontierCell] = {}
    for ox, oy, oz in occupied:
        for dx, dy, dz in NEIGHBOR_OFFSETS:
            neighbor = (ox + dx, oy + dy, oz + dz)
            if neighbor in occupied or neighbor in frontier:
                continue
            frontier[neighbor] = FrontierCell(index=neighbor, position=grid.center_of(neighbor))

    return FrontierResult(
        grid=grid,
        rule_cells=rule_cells,
        occupied=frozenset(occupied),
        parent_cells=frozenset(parent),
        frontier=list(frontier.values()),
    )
