"""Exception types raised by the grid model and the propagation engine."""

from __future__ import annotations
from typing import Optional, Tuple


class StepperError(Exception):
    """Base class for all sudoku-stepper errors."""


class InvalidInputError(StepperError, ValueError):
    """Raised for out-of-range digits or coordinates and malformed input files."""


class ContradictionError(StepperError):
    """
    A deduction would place a digit already solved elsewhere in a region.

    The engine that raised it is halted and will not propagate further.
    """

    def __init__(
        self,
        region_id: int,
        coord: Tuple[int, int],
        digit: int,
        message: Optional[str] = None
    ):
        self.region_id = region_id
        self.coord = coord
        self.digit = digit
        if message is None:
            message = (
                f"digit {digit} at {coord} is already solved in region {region_id}"
            )
        super().__init__(message)
