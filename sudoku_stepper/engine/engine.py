"""Round driver that applies the deduction passes to a shared grid."""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .adjacency import AdjacencyExclusion
from .base_pass import BasePass, PassStats
from .local_reduction import LocalReduction
from .pointing_sets import PointingSets
from ..core.errors import ContradictionError
from ..core.grid import Grid
from ..core.validator import is_valid_grid

logger = logging.getLogger(__name__)


class Status(Enum):
    """How a run ended."""
    SOLVED = "solved"
    STALLED = "stalled"
    CONTRADICTION = "contradiction"
    MAX_ROUNDS = "max_rounds"


def default_passes(adjacency: bool = True) -> List[BasePass]:
    """Passes in render-loop order: local reduction, adjacency, pointing sets."""
    passes: List[BasePass] = [LocalReduction()]
    if adjacency:
        passes.append(AdjacencyExclusion())
    passes.append(PointingSets())
    return passes


@dataclass
class RoundReport:
    """Outcome of one round (every pass applied once)."""
    round: int
    passes: List[PassStats] = field(default_factory=list)

    @property
    def promotions(self) -> int:
        return sum(p.promotions for p in self.passes)

    @property
    def eliminations(self) -> int:
        return sum(p.eliminations for p in self.passes)

    @property
    def changed(self) -> bool:
        return any(p.changed for p in self.passes)


@dataclass
class EngineStats:
    """Statistics from a run-to-stable."""
    status: Status = Status.STALLED
    rounds: int = 0
    time_seconds: float = 0.0
    promotions: int = 0
    eliminations: int = 0

    # (solved cells, remaining candidate flags), starting with the initial state
    history: List[Tuple[int, int]] = field(default_factory=list)
    per_pass: Dict[str, Dict[str, int]] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def solved(self) -> bool:
        return self.status is Status.SOLVED

    def record(self, report: RoundReport) -> None:
        self.rounds += 1
        self.promotions += report.promotions
        self.eliminations += report.eliminations
        for p in report.passes:
            totals = self.per_pass.setdefault(p.name, {"promotions": 0, "eliminations": 0})
            totals["promotions"] += p.promotions
            totals["eliminations"] += p.eliminations

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "status": self.status.value,
            "solved": self.solved,
            "rounds": self.rounds,
            "time_seconds": self.time_seconds,
            "promotions": self.promotions,
            "eliminations": self.eliminations,
            "per_pass": self.per_pass,
            **self.extra
        }


class PropagationEngine:
    """
    Applies the deduction passes to one grid, one round at a time.

    The engine owns no state besides a round counter and the contradiction
    that halted it, if any. The grid is shared with whoever else reads or
    edits it (render loop, interaction); callers must not run passes and
    edits at the same time.
    """

    def __init__(
        self,
        grid: Grid,
        adjacency: bool = True,
        passes: Optional[Sequence[BasePass]] = None
    ):
        """
        Initialize the engine.

        Args:
            grid: The grid to propagate on.
            adjacency: Include the non-consecutive adjacency pass.
            passes: Explicit pass list, overriding adjacency.
        """
        self.grid = grid
        self.passes: List[BasePass] = list(passes) if passes is not None else default_passes(adjacency)
        self.round = 0
        self.contradiction: Optional[ContradictionError] = None

    @property
    def halted(self) -> bool:
        return self.contradiction is not None

    def step(self) -> RoundReport:
        """
        Run one round: every pass once, in order.

        Raises:
            ContradictionError: If a pass hits a contradiction now or did in
                an earlier round. A halted engine never propagates again.
        """
        if self.contradiction is not None:
            raise self.contradiction

        self.round += 1
        report = RoundReport(round=self.round)
        for deduction in self.passes:
            try:
                report.passes.append(deduction.apply(self.grid))
            except ContradictionError as e:
                self.contradiction = e
                logger.warning("Round %d: %s halted on contradiction: %s", self.round, deduction.name, e)
                raise

        logger.debug(
            "Round %d: %d promotions, %d eliminations, %d cells solved",
            self.round, report.promotions, report.eliminations, self.grid.count_solved()
        )
        return report

    def run(self, max_rounds: int = 500) -> EngineStats:
        """
        Step until a round changes nothing, or a contradiction, or max_rounds.

        Args:
            max_rounds: Upper bound on rounds for this call.

        Returns:
            EngineStats describing how the run ended.
        """
        stats = EngineStats()
        stats.history.append((self.grid.count_solved(), self.grid.count_candidates()))
        start_time = time.perf_counter()

        try:
            while True:
                if stats.rounds >= max_rounds:
                    stats.status = Status.MAX_ROUNDS
                    break

                report = self.step()
                stats.record(report)
                stats.history.append((self.grid.count_solved(), self.grid.count_candidates()))

                if not report.changed:
                    stats.status = Status.SOLVED if self.grid.is_complete() else Status.STALLED
                    break
        except ContradictionError as e:
            stats.status = Status.CONTRADICTION
            stats.extra["error"] = str(e)

        stats.time_seconds = time.perf_counter() - start_time
        stats.extra["valid"] = is_valid_grid(self.grid)
        logger.info(
            "Propagation %s after %d rounds (%d/81 cells solved)",
            stats.status.value, stats.rounds, self.grid.count_solved()
        )
        return stats
