"""Constraint regions and the suppliers that build them."""

from __future__ import annotations
import json
import os
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

from .errors import InvalidInputError

GRID_SIZE = 9
BOX_SIZE = 3

Coord = Tuple[int, int]


@dataclass(frozen=True)
class Region:
    """
    An identified, ordered collection of grid coordinates.

    A region only references coordinates; the cells themselves live in the
    grid. Regions of exactly nine coordinates are "full" and take part in
    hidden-single and pointing-set deduction.
    """
    id: int
    cells: Tuple[Coord, ...]

    @property
    def is_full(self) -> bool:
        return len(self.cells) == GRID_SIZE

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self):
        return iter(self.cells)

    def __contains__(self, coord: object) -> bool:
        return coord in self.cells


def row_cells() -> List[List[Coord]]:
    """Raw cells of the nine rows, left to right."""
    return [[(x, y) for x in range(GRID_SIZE)] for y in range(GRID_SIZE)]


def column_cells() -> List[List[Coord]]:
    """Raw cells of the nine columns, top to bottom."""
    return [[(x, y) for y in range(GRID_SIZE)] for x in range(GRID_SIZE)]


def box_cells() -> List[List[Coord]]:
    """Raw cells of the nine 3x3 boxes, reading order."""
    boxes = []
    for box_y in range(0, GRID_SIZE, BOX_SIZE):
        for box_x in range(0, GRID_SIZE, BOX_SIZE):
            cells = []
            for dy in range(BOX_SIZE):
                for dx in range(BOX_SIZE):
                    cells.append((box_x + dx, box_y + dy))
            boxes.append(cells)
    return boxes


def diagonal_cells() -> List[List[Coord]]:
    """Raw cells of the two main diagonals (X-Sudoku)."""
    return [
        [(i, i) for i in range(GRID_SIZE)],
        [(GRID_SIZE - 1 - i, i) for i in range(GRID_SIZE)],
    ]


def build_regions(raw: Iterable[Sequence[Sequence[int]]]) -> List[Region]:
    """
    Turn raw coordinate lists into regions, numbered in supply order.

    Args:
        raw: Ordered sequence of regions, each an ordered sequence of (x, y).

    Returns:
        List of Region objects with ids 0..n-1.

    Raises:
        InvalidInputError: If a coordinate is malformed or off the grid.
    """
    regions = []
    for region_id, cells in enumerate(raw):
        coords = []
        for cell in cells:
            if not isinstance(cell, (list, tuple)) or len(cell) != 2:
                raise InvalidInputError(
                    f"Region {region_id}: expected (x, y) pair, got {cell!r}"
                )
            try:
                x, y = int(cell[0]), int(cell[1])
            except (TypeError, ValueError) as e:
                raise InvalidInputError(
                    f"Region {region_id}: coordinate {cell!r} is not a pair of integers"
                ) from e
            if not (0 <= x < GRID_SIZE and 0 <= y < GRID_SIZE):
                raise InvalidInputError(
                    f"Region {region_id}: coordinate ({x}, {y}) is off the grid"
                )
            coords.append((x, y))
        regions.append(Region(id=region_id, cells=tuple(coords)))
    return regions


def standard_regions(diagonals: bool = False) -> List[Region]:
    """Rows, then columns, then boxes; optionally followed by the two diagonals."""
    raw = row_cells() + column_cells() + box_cells()
    if diagonals:
        raw += diagonal_cells()
    return build_regions(raw)


def load_raw_regions(path: str) -> List[List[Coord]]:
    """
    Read extra regions from a JSON file.

    The file holds a list of regions, each a list of [x, y] pairs.
    """
    if not os.path.exists(path):
        raise InvalidInputError(f"Region file not found: {path}")

    try:
        with open(path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidInputError(f"Could not parse region file {path}: {e}") from e

    if not isinstance(data, list) or not all(isinstance(r, list) for r in data):
        raise InvalidInputError(f"Region file {path} must contain a list of regions")
    for region in data:
        for cell in region:
            if not isinstance(cell, list):
                raise InvalidInputError(
                    f"Region file {path}: expected [x, y] pair, got {cell!r}"
                )
    return [[tuple(cell) for cell in region] for region in data]


def load_regions(path: str) -> List[Region]:
    """Build regions from a JSON region file alone."""
    return build_regions(load_raw_regions(path))


def build_inverse_index(regions: Sequence[Region]) -> Dict[Coord, List[Region]]:
    """Map each coordinate to the regions containing it, in region order."""
    index: Dict[Coord, List[Region]] = {}
    for region in regions:
        for coord in region.cells:
            index.setdefault(coord, []).append(region)
    return index
