"""Core module for the grid model, constraint regions and validation."""

from .errors import StepperError, InvalidInputError, ContradictionError
from .regions import Region, standard_regions, diagonal_cells, build_regions, load_regions
from .grid import Grid, Cell
from .validator import is_valid_grid, is_solved_grid, region_conflicts, candidate_invariant_violations

__all__ = [
    "StepperError",
    "InvalidInputError",
    "ContradictionError",
    "Region",
    "standard_regions",
    "diagonal_cells",
    "build_regions",
    "load_regions",
    "Grid",
    "Cell",
    "is_valid_grid",
    "is_solved_grid",
    "region_conflicts",
    "candidate_invariant_violations",
]
