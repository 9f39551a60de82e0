"""Tests for the pointing-set pass."""

import pytest

from sudoku_stepper.core.grid import Grid
from sudoku_stepper.core.regions import build_regions, standard_regions
from sudoku_stepper.engine.pointing_sets import PointingSets

BOX_0 = [(x, y) for y in range(3) for x in range(3)]


def confine_to(grid, digit, keep, cells):
    """Clear digit from every cell in cells except those in keep."""
    for x, y in cells:
        if (x, y) not in keep:
            grid.eliminate(x, y, digit)


class TestPointingPairs:
    """A digit confined to one row of a box is cleared from the rest of the row."""

    def test_pointing_pair_clears_row(self):
        grid = Grid()
        keep = {(0, 0), (1, 0)}
        confine_to(grid, 1, keep, BOX_0)

        stats = PointingSets().apply(grid)

        for x in range(3, 9):
            assert not grid.has_candidate(x, 0, 1)
        # The confined cells keep the digit
        for x, y in keep:
            assert grid.has_candidate(x, y, 1)
        # Nothing outside row 0 is touched
        assert grid.has_candidate(3, 1, 1)
        assert stats.eliminations == 6
        assert stats.promotions == 0

    def test_cells_inside_set_keep_digit(self):
        """Only cells of the overlap region outside the set lose the digit."""
        grid = Grid()
        keep = {(0, 0), (1, 0), (2, 0)}
        confine_to(grid, 4, keep, BOX_0)

        PointingSets().apply(grid)

        for x, y in keep:
            assert grid.has_candidate(x, y, 4)
        assert [x for x in range(9) if grid.has_candidate(x, 0, 4)] == [0, 1, 2]

    def test_skips_overlap_with_digit_solved(self):
        """An overlap region that already holds the digit is left alone."""
        grid = Grid()
        grid.set_cell(8, 0, 1)
        confine_to(grid, 1, {(0, 0), (1, 0)}, BOX_0)

        PointingSets().apply(grid)

        for x in range(3, 8):
            assert grid.has_candidate(x, 0, 1)


class TestBoxLineReduction:
    """A digit confined to one box within a row is cleared from the rest of the box."""

    def test_row_confined_to_box(self):
        grid = Grid()
        row_0 = [(x, 0) for x in range(9)]
        confine_to(grid, 2, {(0, 0), (1, 0), (2, 0)}, row_0)

        stats = PointingSets().apply(grid)

        for x, y in BOX_0:
            assert grid.has_candidate(x, y, 2) == (y == 0)
        assert stats.eliminations == 6


class TestOverlapSearch:
    """Which regions the pass considers."""

    def test_ignores_small_regions(self):
        """Only full regions are overlap candidates."""
        raw = [list(r.cells) for r in standard_regions()] + [[(0, 0), (1, 0), (5, 5)]]
        grid = Grid(build_regions(raw))
        confine_to(grid, 3, {(0, 0), (1, 0)}, BOX_0)

        PointingSets().apply(grid)

        assert grid.has_candidate(5, 5, 3)

    def test_no_change_on_empty_grid(self):
        grid = Grid()
        stats = PointingSets().apply(grid)
        assert not stats.changed

    def test_extra_full_region_overlap(self):
        """
        Variant regions of nine cells overlap like rows, columns and boxes.

        Column 0 holds digit 5 only at (0, 1) and (0, 2), both inside the
        extra region, so the extra region's other cells lose 5.
        """
        extra = [(0, 1), (0, 2), (1, 1), (1, 2), (2, 1), (2, 2), (3, 1), (3, 2), (4, 1)]
        raw = [list(r.cells) for r in standard_regions()] + [extra]
        grid = Grid(build_regions(raw))
        column_0 = [(0, y) for y in range(9)]
        confine_to(grid, 5, {(0, 1), (0, 2)}, column_0)

        PointingSets().apply(grid)

        assert not grid.has_candidate(3, 1, 5)
        assert not grid.has_candidate(4, 1, 5)
        assert grid.has_candidate(0, 1, 5)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
