"""Adjacency exclusion pass for the non-consecutive variant."""

from __future__ import annotations

from .base_pass import BasePass, PassStats
from ..core.grid import Grid
from ..core.regions import GRID_SIZE


def clipped_range(start: int, stop: int, low: int, high: int) -> range:
    """range(start, stop) clipped to [low, high)."""
    return range(max(start, low), min(stop, high))


class AdjacencyExclusion(BasePass):
    """
    Non-consecutive rule on orthogonal neighbours.

    For every solved cell with digit v, the digits v-1, v and v+1 are cleared
    from the cells directly above, below, left and right of it. This works on
    the literal 9x9 topology and ignores the region list.
    """

    name = "Adjacency Exclusion"

    def _apply(self, grid: Grid, stats: PassStats) -> None:
        solved = grid.solved_array
        for i in range(GRID_SIZE):
            for j in range(GRID_SIZE):
                value = int(solved[i, j])
                if not value:
                    continue

                for digit in clipped_range(value - 1, value + 2, 1, GRID_SIZE + 1):
                    for ii in clipped_range(i - 1, i + 2, 0, GRID_SIZE):
                        if grid.eliminate(ii, j, digit):
                            stats.eliminations += 1
                    for jj in clipped_range(j - 1, j + 2, 0, GRID_SIZE):
                        if grid.eliminate(i, jj, digit):
                            stats.eliminations += 1
