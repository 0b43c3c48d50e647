"""Flood-fill traversal engine: recursive and iterative fills with timing."""

from floodbench.traversal.engine import (
    NEIGHBOR_OFFSETS,
    fill_iterative,
    fill_recursive,
    run_fill,
)
from floodbench.traversal.types import AlgorithmKind, Outcome, RunResult

__all__ = [
    "AlgorithmKind",
    "NEIGHBOR_OFFSETS",
    "Outcome",
    "RunResult",
    "fill_iterative",
    "fill_recursive",
    "run_fill",
]
