"""Pointing-set pass: pointing pairs/triples and box-line reduction."""

from __future__ import annotations
from typing import List

from .base_pass import BasePass, PassStats
from ..core.grid import DIGITS, Grid
from ..core.regions import Coord, Region


class PointingSets(BasePass):
    """
    Eliminate a digit outside the overlap of two full regions.

    If every cell of full region C that can still hold digit d also belongs
    to another full region C', then d must go in C ∩ C', and no other cell
    of C' may hold it.

    Overlapping regions are looked up from the first cell holding d only,
    so an overlap that does not contain that cell is never considered.
    """

    name = "Pointing Sets"

    def _apply(self, grid: Grid, stats: PassStats) -> None:
        for region in grid.regions:
            if not region.is_full:
                continue
            for digit in DIGITS:
                if grid.region_has_value(region, digit):
                    continue

                positions = grid.cells_with_candidate(region, digit)
                if not positions:
                    continue

                self._eliminate_outside(grid, region, digit, positions, stats)

    def _eliminate_outside(
        self,
        grid: Grid,
        region: Region,
        digit: int,
        positions: List[Coord],
        stats: PassStats
    ) -> None:
        anchor_x, anchor_y = positions[0]
        inside = set(positions)

        for overlap in grid.regions_containing(anchor_x, anchor_y):
            if overlap.id == region.id or not overlap.is_full:
                continue
            if grid.region_has_value(overlap, digit):
                continue

            if all(_contains(grid, pos, overlap) for pos in positions[1:]):
                for x, y in overlap.cells:
                    if (x, y) not in inside and grid.eliminate(x, y, digit):
                        stats.eliminations += 1


def _contains(grid: Grid, pos: Coord, region: Region) -> bool:
    return any(r.id == region.id for r in grid.regions_containing(*pos))
