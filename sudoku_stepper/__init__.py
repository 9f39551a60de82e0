"""Constraint-propagation stepper for 9x9 Sudoku and Sudoku variants."""

from .core import Grid, Region, standard_regions, ContradictionError, InvalidInputError
from .engine import PropagationEngine, Status

__version__ = "1.0.0"

__all__ = [
    "Grid",
    "Region",
    "standard_regions",
    "ContradictionError",
    "InvalidInputError",
    "PropagationEngine",
    "Status",
]
