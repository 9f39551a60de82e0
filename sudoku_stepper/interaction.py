"""Pointer and keyboard handling for selecting and overriding cells."""

from __future__ import annotations
import logging
from typing import List, Set

from .core.grid import Grid
from .core.regions import GRID_SIZE, Coord

logger = logging.getLogger(__name__)


class Selection:
    """
    Tracks the hovered cell and the current selection.

    Pressing the pointer starts a new selection at the hovered cell, dragging
    adds every cell passed over, and releasing reports the selection (useful
    for authoring extra regions). A digit key writes that digit into the
    selected cell when exactly one cell is selected.
    """

    def __init__(self, grid: Grid, cell_size: float = 50.0):
        """
        Args:
            grid: The grid that digit keys write into.
            cell_size: Size of one cell in pointer units.
        """
        self.grid = grid
        self.cell_size = cell_size
        self.hovered: Coord = (0, 0)
        self.selected: Set[Coord] = set()
        self.is_pointer_down = False

    def pointer_move(self, px: float, py: float) -> None:
        """Update the hovered cell. Positions off the grid are ignored."""
        x = int(px // self.cell_size)
        y = int(py // self.cell_size)
        if not (0 <= x < GRID_SIZE and 0 <= y < GRID_SIZE):
            return

        self.hovered = (x, y)
        if self.is_pointer_down:
            self.selected.add(self.hovered)

    def pointer_down(self) -> None:
        self.selected.clear()
        self.selected.add(self.hovered)
        self.is_pointer_down = True

    def pointer_up(self) -> List[Coord]:
        """Finish dragging and return the selection, sorted."""
        self.is_pointer_down = False
        cells = sorted(self.selected)
        logger.info("Selected cells: %s", cells)
        return cells

    def key(self, key: str) -> bool:
        """
        Handle a released key.

        Returns:
            True if a digit was written into the grid.
        """
        if len(self.selected) != 1 or key is None:
            return False
        if len(key) != 1 or key not in "123456789":
            return False

        x, y = next(iter(self.selected))
        self.grid.set_cell(x, y, int(key))
        logger.info("Cell (%d, %d) set to %s", x, y, key)
        return True
