"""Run propagation over many puzzles and collect per-puzzle outcomes."""

from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from tqdm import tqdm

from ..config import StepperConfig, build_grid
from ..core.errors import InvalidInputError
from ..engine.engine import PropagationEngine

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Outcome of propagating one puzzle."""
    puzzle_id: int
    puzzle: str
    status: str
    rounds: int
    solved_cells: int
    remaining_candidates: int
    time_seconds: float
    final: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "puzzle": self.puzzle,
            "status": self.status,
            "rounds": self.rounds,
            "solved_cells": self.solved_cells,
            "remaining_candidates": self.remaining_candidates,
            "time_seconds": self.time_seconds,
            "final": self.final,
            **self.extra
        }


def load_puzzles(path: str) -> List[str]:
    """
    Read puzzle strings from a file.

    JSON files hold a list of strings or of objects with a "puzzle" key,
    e.g. [{"difficulty": "easy", "puzzle": "530070000..."}].
    Anything else is read as text: one puzzle per line, blank lines and
    lines starting with '#' skipped.
    """
    if not os.path.exists(path):
        raise InvalidInputError(f"Puzzle file not found: {path}")

    if path.endswith(".json"):
        try:
            with open(path, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidInputError(f"Could not parse puzzle file {path}: {e}") from e

        if not isinstance(data, list):
            raise InvalidInputError(f"Puzzle file {path} must contain a list")

        puzzles = []
        for entry in data:
            if isinstance(entry, dict):
                if "puzzle" not in entry:
                    raise InvalidInputError(f"Puzzle entry without 'puzzle' key in {path}")
                puzzles.append(str(entry["puzzle"]))
            else:
                puzzles.append(str(entry))
        return puzzles

    puzzles = []
    with open(path, "r") as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#"):
                puzzles.append(line)
    return puzzles


class BatchRunner:
    """
    Propagate a list of puzzles one after the other.

    Each puzzle gets its own grid and engine; a bad puzzle string is
    recorded as an "error" result and the batch carries on.
    """

    def __init__(self, puzzles: List[str], config: Optional[StepperConfig] = None):
        """
        Args:
            puzzles: 81-character puzzle strings.
            config: Region and round settings (default: StepperConfig()).
        """
        self.puzzles = list(puzzles)
        self.config = config or StepperConfig()
        self.results: List[BatchResult] = []

    def run(self, show_progress: bool = True) -> List[BatchResult]:
        """
        Run every puzzle to stable.

        Returns:
            List of BatchResult objects, in puzzle order.
        """
        self.results = []
        for puzzle_id, puzzle in enumerate(tqdm(self.puzzles, desc="Propagating", disable=not show_progress)):
            self.results.append(self._run_single(puzzle_id, puzzle))
        return self.results

    def _run_single(self, puzzle_id: int, puzzle: str) -> BatchResult:
        try:
            grid = build_grid(self.config, puzzle)
        except InvalidInputError as e:
            logger.warning("Puzzle %d skipped: %s", puzzle_id, e)
            return BatchResult(
                puzzle_id=puzzle_id,
                puzzle=puzzle,
                status="error",
                rounds=0,
                solved_cells=0,
                remaining_candidates=0,
                time_seconds=0.0,
                extra={"error": str(e)}
            )

        engine = PropagationEngine(grid, adjacency=self.config.adjacency)
        stats = engine.run(max_rounds=self.config.max_rounds)

        return BatchResult(
            puzzle_id=puzzle_id,
            puzzle=puzzle,
            status=stats.status.value,
            rounds=stats.rounds,
            solved_cells=grid.count_solved(),
            remaining_candidates=grid.count_candidates(),
            time_seconds=stats.time_seconds,
            final=grid.to_string(),
            extra=dict(stats.extra)
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from batch results."""
        summary: Dict[str, Any] = {
            "total_puzzles": len(self.results),
            "adjacency": self.config.adjacency,
            "diagonals": self.config.diagonals,
            "by_status": {},
        }
        if not self.results:
            return summary

        for result in self.results:
            summary["by_status"][result.status] = summary["by_status"].get(result.status, 0) + 1

        ran = [r for r in self.results if r.status != "error"]
        solved = [r for r in ran if r.status == "solved"]
        summary["solve_rate"] = len(solved) / len(self.results) * 100
        if ran:
            summary["avg_rounds"] = sum(r.rounds for r in ran) / len(ran)
            summary["avg_time_seconds"] = sum(r.time_seconds for r in ran) / len(ran)
            summary["avg_solved_cells"] = sum(r.solved_cells for r in ran) / len(ran)
        return summary

    def save_results(self, output_dir: str) -> List[str]:
        """Save raw results and the summary as JSON; returns the file paths."""
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "batch_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        summary_file = os.path.join(output_dir, "batch_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        logger.info("Batch results saved to %s", output_dir)
        return [results_file, summary_file]
