"""Grid model: per-cell candidate flags, solved digits and the region list."""

from __future__ import annotations
import numpy as np
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from .errors import InvalidInputError
from .regions import BOX_SIZE, GRID_SIZE, Coord, Region, build_inverse_index, standard_regions

DIGITS = range(1, GRID_SIZE + 1)


@dataclass(frozen=True)
class Cell:
    """Read-only view of one grid position."""
    candidates: FrozenSet[int]
    solved: Optional[int]

    @property
    def is_solved(self) -> bool:
        return self.solved is not None


class Grid:
    """
    The 9x9 puzzle state plus the constraint regions that apply to it.

    Cells are addressed as (x, y) with x the column and y the row. Candidate
    flags are stored in a boolean array indexed [x, y, digit - 1]; solved
    digits in an int8 array indexed [x, y] where 0 means unsolved.

    A solved cell never becomes unsolved again. The only way back to an empty
    puzzle is to build a fresh Grid.
    """

    def __init__(self, regions: Optional[Sequence[Region]] = None):
        """
        Create an empty grid: every cell unsolved with all nine candidates.

        Args:
            regions: Constraint regions in the order passes visit them.
                     Defaults to the 27 standard rows, columns and boxes.
        """
        self.regions: List[Region] = list(regions) if regions is not None else standard_regions()
        self._candidates = np.ones((GRID_SIZE, GRID_SIZE, GRID_SIZE), dtype=bool)
        self._solved = np.zeros((GRID_SIZE, GRID_SIZE), dtype=np.int8)
        self._inverse_index: Optional[Dict[Coord, List[Region]]] = None

    @classmethod
    def from_string(cls, s: str, regions: Optional[Sequence[Region]] = None) -> Grid:
        """
        Create a grid from an 81-character puzzle string.

        Args:
            s: Row-major puzzle, '0' or '.' for empty cells, 1-9 for clues.
            regions: Constraint regions (default: standard).
        """
        s = s.strip()
        if len(s) != GRID_SIZE * GRID_SIZE:
            raise InvalidInputError(
                f"String length must be {GRID_SIZE * GRID_SIZE}, got {len(s)}"
            )

        grid = cls(regions)
        for idx, c in enumerate(s):
            y, x = divmod(idx, GRID_SIZE)
            if c in "0.":
                continue
            if c not in "123456789":
                raise InvalidInputError(f"Invalid character {c!r} at position {idx}")
            grid.set_cell(x, y, int(c))
        return grid

    def copy(self) -> Grid:
        """Create a deep copy of the cell state. Regions are shared (immutable)."""
        new_grid = Grid(self.regions)
        new_grid._candidates = self._candidates.copy()
        new_grid._solved = self._solved.copy()
        new_grid._inverse_index = self._inverse_index
        return new_grid

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def cell(self, x: int, y: int) -> Cell:
        """Get a read-only view of the cell at (x, y)."""
        return Cell(candidates=self.candidates(x, y), solved=self.solved(x, y))

    def solved(self, x: int, y: int) -> Optional[int]:
        """Solved digit at (x, y), or None."""
        value = int(self._solved[x, y])
        return value if value else None

    def is_solved(self, x: int, y: int) -> bool:
        return self._solved[x, y] != 0

    def candidates(self, x: int, y: int) -> FrozenSet[int]:
        """Digits still possible at (x, y). Empty once the cell is solved."""
        return frozenset(int(i) + 1 for i in np.flatnonzero(self._candidates[x, y]))

    def has_candidate(self, x: int, y: int, digit: int) -> bool:
        return bool(self._candidates[x, y, digit - 1])

    def candidate_count(self, x: int, y: int) -> int:
        return int(np.count_nonzero(self._candidates[x, y]))

    def single_candidate(self, x: int, y: int) -> Optional[int]:
        """The only remaining candidate at (x, y), or None if there are 0 or 2+."""
        flags = np.flatnonzero(self._candidates[x, y])
        if len(flags) == 1:
            return int(flags[0]) + 1
        return None

    @property
    def solved_array(self) -> np.ndarray:
        """Read-only [x, y] view of solved digits (0 = unsolved)."""
        view = self._solved.view()
        view.flags.writeable = False
        return view

    @property
    def candidate_array(self) -> np.ndarray:
        """Read-only [x, y, digit - 1] view of candidate flags."""
        view = self._candidates.view()
        view.flags.writeable = False
        return view

    def region_has_value(self, region: Region, digit: int) -> bool:
        """Check whether some cell of the region is solved to digit."""
        return any(self._solved[x, y] == digit for x, y in region.cells)

    def cells_with_candidate(self, region: Region, digit: int) -> List[Coord]:
        """Cells of the region, in region order, that still carry digit."""
        return [(x, y) for x, y in region.cells if self._candidates[x, y, digit - 1]]

    def regions_containing(self, x: int, y: int) -> List[Region]:
        """
        Regions that contain (x, y), in region order.

        The inverse index is built on first use and kept for the lifetime of
        the grid, since the region list never changes.
        """
        if self._inverse_index is None:
            self._inverse_index = build_inverse_index(self.regions)
        return self._inverse_index.get((x, y), [])

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set_cell(self, x: int, y: int, digit: int) -> None:
        """
        Manual override: solve (x, y) to digit and clear its candidates.

        The digit is not checked against the regions; the caller is trusted.

        Raises:
            InvalidInputError: If the coordinate or digit is out of range.
        """
        if not (0 <= x < GRID_SIZE and 0 <= y < GRID_SIZE):
            raise InvalidInputError(f"Coordinate ({x}, {y}) is off the grid")
        if not 1 <= digit <= GRID_SIZE:
            raise InvalidInputError(f"Digit must be 1-{GRID_SIZE}, got {digit}")
        self._candidates[x, y, :] = False
        self._solved[x, y] = digit

    # The three methods below are the engine's mutation surface. They skip
    # range checks; passes only ever hand them coordinates taken from regions.

    def mark_solved(self, x: int, y: int, digit: int) -> None:
        """Set the solved digit without touching candidate flags."""
        self._solved[x, y] = digit

    def clear_candidates(self, x: int, y: int) -> int:
        """Clear every candidate at (x, y). Returns how many flags were cleared."""
        cleared = int(np.count_nonzero(self._candidates[x, y]))
        self._candidates[x, y, :] = False
        return cleared

    def eliminate(self, x: int, y: int, digit: int) -> bool:
        """Clear one candidate flag. Returns True if it was set."""
        if self._candidates[x, y, digit - 1]:
            self._candidates[x, y, digit - 1] = False
            return True
        return False

    # ------------------------------------------------------------------
    # Summaries
    # ------------------------------------------------------------------

    def snapshot(self) -> Tuple[np.ndarray, np.ndarray]:
        """Copies of (candidates, solved) for before/after comparisons."""
        return self._candidates.copy(), self._solved.copy()

    def count_solved(self) -> int:
        return int(np.count_nonzero(self._solved))

    def count_candidates(self) -> int:
        """Total number of candidate flags still set across the grid."""
        return int(np.count_nonzero(self._candidates))

    def is_complete(self) -> bool:
        return self.count_solved() == GRID_SIZE * GRID_SIZE

    def to_string(self) -> str:
        """Row-major 81-character string, '0' for unsolved cells."""
        return ''.join(
            str(int(self._solved[x, y]))
            for y in range(GRID_SIZE)
            for x in range(GRID_SIZE)
        )

    def __str__(self) -> str:
        """Pretty-print the solved digits."""
        lines = []
        horizontal_sep = '+' + (('-' * (BOX_SIZE * 2 + 1)) + '+') * BOX_SIZE

        for y in range(GRID_SIZE):
            if y % BOX_SIZE == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for x in range(GRID_SIZE):
                val = self._solved[x, y]
                row_str += f' {val}' if val else ' .'
                if (x + 1) % BOX_SIZE == 0:
                    row_str += ' |'
            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return (
            f"Grid(regions={len(self.regions)}, solved={self.count_solved()}, "
            f"candidates={self.count_candidates()})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return False
        return (
            np.array_equal(self._solved, other._solved)
            and np.array_equal(self._candidates, other._candidates)
        )

    __hash__ = None
