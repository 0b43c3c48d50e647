"""Algorithm kinds, run outcomes, and the pending run result."""

from dataclasses import dataclass
from enum import Enum

from floodbench.grid.types import CellState


class AlgorithmKind(str, Enum):
    """Flood-fill strategy.

    RECURSIVE: Depth-first, one interpreter stack frame per visited cell.
    ITERATIVE: Breadth-first with an explicit FIFO queue.
    """

    RECURSIVE = "Recursive"
    ITERATIVE = "Iterative"

    @property
    def marker(self) -> CellState:
        """Cell code written into every cell this algorithm visits."""
        if self is AlgorithmKind.RECURSIVE:
            return CellState.FILLED_RECURSIVE
        return CellState.FILLED_ITERATIVE


class Outcome(str, Enum):
    """How a run ended.

    SUCCESS: Traversal reached a terminal state.
    CRASH: The recursive fill exhausted the call stack.
    """

    SUCCESS = "Success"
    CRASH = "Crash"


@dataclass(frozen=True, slots=True)
class RunResult:
    """Timed outcome of one fill run, not yet committed to a ledger."""

    run_id: int  # unique, increasing within the process
    kind: AlgorithmKind
    elapsed_ms: float
    outcome: Outcome
    grid_label: str  # e.g. "25x25"
    cells_filled: int  # cells marked before completion or crash
