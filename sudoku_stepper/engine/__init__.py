"""Propagation engine: the deduction passes and the round driver."""

from .base_pass import BasePass, PassStats
from .local_reduction import LocalReduction
from .pointing_sets import PointingSets
from .adjacency import AdjacencyExclusion
from .engine import PropagationEngine, RoundReport, EngineStats, Status, default_passes

__all__ = [
    "BasePass",
    "PassStats",
    "LocalReduction",
    "PointingSets",
    "AdjacencyExclusion",
    "PropagationEngine",
    "RoundReport",
    "EngineStats",
    "Status",
    "default_passes",
]
