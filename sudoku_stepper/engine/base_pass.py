"""Base deduction pass interface and per-pass statistics."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict
import time

from ..core.grid import Grid


@dataclass
class PassStats:
    """Statistics from one application of a pass."""
    name: str = ""
    promotions: int = 0
    eliminations: int = 0
    time_seconds: float = 0.0

    @property
    def changed(self) -> bool:
        return self.promotions > 0 or self.eliminations > 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "name": self.name,
            "promotions": self.promotions,
            "eliminations": self.eliminations,
            "time_seconds": self.time_seconds,
        }


class BasePass(ABC):
    """Abstract base class for deduction passes."""

    name: str = "BasePass"

    def apply(self, grid: Grid) -> PassStats:
        """
        Run the pass once over the grid, mutating it in place.

        Args:
            grid: The shared grid model.

        Returns:
            Counts of promotions and cleared candidate flags.

        Raises:
            ContradictionError: If the pass finds an inconsistent deduction.
        """
        stats = PassStats(name=self.name)
        start_time = time.perf_counter()
        self._apply(grid, stats)
        stats.time_seconds = time.perf_counter() - start_time
        return stats

    @abstractmethod
    def _apply(self, grid: Grid, stats: PassStats) -> None:
        """
        Internal method to be implemented by subclasses.

        Args:
            grid: The grid to mutate.
            stats: Counters to update for every promotion and elimination.
        """
        pass
