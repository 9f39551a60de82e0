"""Local reduction pass: naked singles, unit elimination and hidden singles."""

from __future__ import annotations

from .base_pass import BasePass, PassStats
from ..core.errors import ContradictionError
from ..core.grid import DIGITS, Grid
from ..core.regions import Region


class LocalReduction(BasePass):
    """
    Region-local deductions, applied in region order.

    For every region, then every coordinate in it:

    1. An unsolved cell with a single candidate is promoted to that digit.
    2. A solved cell loses all its candidate flags.
    3. A solved cell's digit is cleared from every cell of the region,
       whatever the region's size.

    Once every region has been swept, each full region is searched for
    hidden singles: a digit not yet placed in the region that only one cell
    still allows is forced into that cell.
    """

    name = "Local Reduction"

    def _apply(self, grid: Grid, stats: PassStats) -> None:
        for region in grid.regions:
            for x, y in region.cells:
                self._reduce_cell(grid, region, x, y, stats)

        for region in grid.regions:
            if region.is_full:
                self._promote_hidden_singles(grid, region, stats)

    def _reduce_cell(self, grid: Grid, region: Region, x: int, y: int, stats: PassStats) -> None:
        if not grid.is_solved(x, y):
            digit = grid.single_candidate(x, y)
            if digit is not None:
                if grid.region_has_value(region, digit):
                    raise ContradictionError(region.id, (x, y), digit)
                grid.mark_solved(x, y, digit)
                stats.promotions += 1

        value = grid.solved(x, y)
        if value is None:
            return

        stats.eliminations += grid.clear_candidates(x, y)
        for other_x, other_y in region.cells:
            if grid.eliminate(other_x, other_y, value):
                stats.eliminations += 1

    def _promote_hidden_singles(self, grid: Grid, region: Region, stats: PassStats) -> None:
        for digit in DIGITS:
            if grid.region_has_value(region, digit):
                continue

            holders = grid.cells_with_candidate(region, digit)
            if len(holders) == 1:
                x, y = holders[0]
                # Forced even if the cell still has other candidates.
                stats.eliminations += grid.clear_candidates(x, y)
                grid.mark_solved(x, y, digit)
                stats.promotions += 1
