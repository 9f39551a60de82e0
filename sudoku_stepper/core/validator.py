"""Validation utilities for grid state."""

from __future__ import annotations
from collections import defaultdict
from typing import TYPE_CHECKING, List, Tuple

from .regions import GRID_SIZE, Coord

if TYPE_CHECKING:
    from .grid import Grid


def candidate_invariant_violations(grid: Grid) -> List[Coord]:
    """
    Find solved cells that still carry candidate flags.

    Args:
        grid: The grid to inspect.

    Returns:
        Coordinates of offending cells (empty when the invariant holds).
    """
    violations = []
    for x in range(GRID_SIZE):
        for y in range(GRID_SIZE):
            if grid.is_solved(x, y) and grid.candidate_count(x, y) > 0:
                violations.append((x, y))
    return violations


def region_conflicts(grid: Grid, full_only: bool = True) -> List[Tuple[int, int, List[Coord]]]:
    """
    Find digits solved more than once inside a region.

    Args:
        grid: The grid to inspect.
        full_only: Only check regions of nine cells.

    Returns:
        List of (region_id, digit, coordinates) for each duplicate.
    """
    conflicts = []
    for region in grid.regions:
        if full_only and not region.is_full:
            continue
        seen = defaultdict(list)
        for x, y in region.cells:
            value = grid.solved(x, y)
            if value is not None:
                seen[value].append((x, y))
        for digit, coords in sorted(seen.items()):
            if len(coords) > 1:
                conflicts.append((region.id, digit, coords))
    return conflicts


def is_valid_grid(grid: Grid) -> bool:
    """Check that no full region holds the same solved digit twice."""
    return not region_conflicts(grid)


def is_solved_grid(grid: Grid) -> bool:
    """Check if every cell is solved and no region conflicts exist."""
    return grid.is_complete() and is_valid_grid(grid)


def matches_clues(puzzle: Grid, solution: Grid) -> bool:
    """
    Check that a solution keeps every solved cell of the puzzle.

    Args:
        puzzle: The starting grid.
        solution: The grid after propagation.

    Returns:
        True if every digit solved in puzzle has the same value in solution.
    """
    for x in range(GRID_SIZE):
        for y in range(GRID_SIZE):
            value = puzzle.solved(x, y)
            if value is not None and solution.solved(x, y) != value:
                return False
    return True
