"""Run configuration: JSON settings file and grid assembly."""

from __future__ import annotations
import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, List, Optional

from .core.errors import InvalidInputError
from .core.grid import Grid
from .core.regions import Region, box_cells, build_regions, column_cells, diagonal_cells, load_raw_regions, row_cells

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "sudoku_stepper.json"

# The reference instance starts from an empty grid with a single clue.
REFERENCE_CLUES = [(3, 6, 2)]


@dataclass
class StepperConfig:
    """Settings shared by the CLI, render loop and batch runner."""
    delay_ms: int = 400
    max_rounds: int = 500
    adjacency: bool = True
    diagonals: bool = False
    regions_file: Optional[str] = None
    cell_size: float = 50.0
    stop_when_stable: bool = True

    # [x, y, digit] overrides applied after the puzzle; None means the reference clue
    initial: Optional[List[List[int]]] = None

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def updated(self, **overrides: Any) -> StepperConfig:
        """Copy with every non-None override applied."""
        values = self.to_dict()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return StepperConfig(**values)


def load_config(path: Optional[str] = None) -> StepperConfig:
    """
    Load settings from a JSON file.

    Args:
        path: Settings file. If None, DEFAULT_CONFIG_FILE is used when it
              exists and defaults otherwise.

    Returns:
        The loaded configuration.

    Raises:
        InvalidInputError: If an explicit file is missing, unreadable or has
            unknown keys.
    """
    if path is None:
        if not os.path.exists(DEFAULT_CONFIG_FILE):
            return StepperConfig()
        path = DEFAULT_CONFIG_FILE
    elif not os.path.exists(path):
        raise InvalidInputError(f"Config file not found: {path}")

    try:
        with open(path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidInputError(f"Could not parse config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise InvalidInputError(f"Config file {path} must contain a JSON object")

    known = {f.name for f in fields(StepperConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise InvalidInputError(f"Unknown config keys in {path}: {', '.join(unknown)}")

    logger.info("Loaded settings from %s", path)
    return StepperConfig(**data)


def build_regions_for(config: StepperConfig) -> List[Region]:
    """Standard rows, columns and boxes, then diagonals, then file regions."""
    raw = row_cells() + column_cells() + box_cells()
    if config.diagonals:
        raw += diagonal_cells()
    if config.regions_file:
        raw += load_raw_regions(config.regions_file)
    return build_regions(raw)


def build_grid(config: StepperConfig, puzzle: Optional[str] = None) -> Grid:
    """
    Assemble the starting grid for a run.

    Args:
        config: Run settings (regions and initial overrides).
        puzzle: Optional 81-character puzzle string.
    """
    regions = build_regions_for(config)
    grid = Grid.from_string(puzzle, regions) if puzzle else Grid(regions)

    initial = config.initial
    if initial is None:
        initial = [] if puzzle else REFERENCE_CLUES
    elif not isinstance(initial, list):
        raise InvalidInputError(f"Initial overrides must be a list, got {initial!r}")
    for entry in initial:
        if not isinstance(entry, (list, tuple)) or len(entry) != 3:
            raise InvalidInputError(f"Initial override must be [x, y, digit], got {entry!r}")
        try:
            x, y, digit = (int(v) for v in entry)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Initial override must hold integers, got {entry!r}") from e
        grid.set_cell(x, y, digit)
    return grid


def reference_grid() -> Grid:
    """The reference instance: empty standard grid with the single clue (3, 6) = 2."""
    return build_grid(StepperConfig())
