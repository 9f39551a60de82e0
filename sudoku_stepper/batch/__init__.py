"""Batch module for propagating many puzzles."""

from .runner import BatchRunner, BatchResult, load_puzzles

__all__ = ["BatchRunner", "BatchResult", "load_puzzles"]
