"""Tests for the local reduction pass."""

import pytest

from sudoku_stepper.core.errors import ContradictionError
from sudoku_stepper.core.grid import Grid
from sudoku_stepper.core.regions import build_regions
from sudoku_stepper.core.validator import candidate_invariant_violations
from sudoku_stepper.engine.local_reduction import LocalReduction


class TestNakedSingles:
    """Unit elimination followed by naked-single promotion."""

    def test_last_cell_of_full_region(self):
        """Eight cells solved to 1-8 force the ninth to 9 in one round."""
        grid = Grid()
        for x in range(8):
            grid.set_cell(x, 0, x + 1)
        assert grid.candidates(8, 0) == frozenset(range(1, 10))

        stats = LocalReduction().apply(grid)

        assert grid.solved(8, 0) == 9
        assert grid.candidates(8, 0) == frozenset()
        assert stats.promotions >= 1

    def test_promotion_clears_digit_from_region(self):
        grid = Grid()
        for digit in range(1, 9):
            grid.eliminate(4, 4, digit)

        LocalReduction().apply(grid)

        assert grid.solved(4, 4) == 9
        # Row, column and box of (4, 4) lose 9
        assert not grid.has_candidate(0, 4, 9)
        assert not grid.has_candidate(4, 0, 9)
        assert not grid.has_candidate(3, 3, 9)
        assert grid.has_candidate(0, 0, 9)

    def test_small_region_only_eliminates(self):
        """Regions of other sizes take part in unit elimination only."""
        grid = Grid(build_regions([[(0, 0), (1, 0)]]))
        grid.set_cell(0, 0, 3)

        LocalReduction().apply(grid)

        assert not grid.has_candidate(1, 0, 3)
        assert grid.has_candidate(2, 0, 3)

    def test_contradiction_is_raised(self, contradiction_grid):
        """Promoting a digit already solved in the region is fatal."""
        with pytest.raises(ContradictionError) as excinfo:
            LocalReduction().apply(contradiction_grid)

        error = excinfo.value
        assert error.region_id == 0
        assert error.coord == (0, 0)
        assert error.digit == 5
        assert contradiction_grid.solved(0, 0) is None


class TestHiddenSingles:
    """Hidden-single promotion in full regions."""

    def test_only_place_in_row(self):
        """A digit only one cell of a row allows is forced there."""
        grid = Grid()
        for x in range(9):
            if x != 4:
                grid.eliminate(x, 0, 1)

        stats = LocalReduction().apply(grid)

        assert grid.solved(4, 0) == 1
        assert grid.candidates(4, 0) == frozenset()
        assert stats.promotions == 1

    def test_not_applied_to_small_regions(self):
        grid = Grid(build_regions([[(0, 0), (1, 0), (2, 0)]]))
        grid.eliminate(0, 0, 1)
        grid.eliminate(1, 0, 1)

        stats = LocalReduction().apply(grid)

        assert grid.solved(2, 0) is None
        assert stats.promotions == 0

    def test_skips_digits_already_placed(self):
        grid = Grid()
        grid.set_cell(0, 0, 1)
        stats = LocalReduction().apply(grid)
        # Only the clue's eliminations happen, nothing is promoted
        assert stats.promotions == 0
        assert grid.count_solved() == 1


class TestCandidateInvariant:
    """Solved cells end every pass without candidates."""

    def test_clears_candidates_of_solved_cells(self):
        grid = Grid()
        grid.mark_solved(2, 2, 7)
        assert candidate_invariant_violations(grid) == [(2, 2)]

        LocalReduction().apply(grid)

        assert candidate_invariant_violations(grid) == []

    def test_no_change_on_untouched_grid(self):
        grid = Grid()
        stats = LocalReduction().apply(grid)
        assert not stats.changed
        assert grid.count_candidates() == 81 * 9


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
