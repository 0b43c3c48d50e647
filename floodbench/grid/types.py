"""Cell-state codes and small helpers shared by grid producers and consumers."""

from enum import IntEnum

import numpy as np

# Storage dtype for every grid; four codes fit comfortably.
GRID_DTYPE = np.int8


class CellState(IntEnum):
    """Integer code stored in each grid cell.

    EMPTY: Traversable and not yet visited.
    WALL: Obstacle, never traversable.
    FILLED_RECURSIVE: Visited by the depth-first (recursive) fill.
    FILLED_ITERATIVE: Visited by the breadth-first (iterative) fill.
    """

    EMPTY = 0
    WALL = 1
    FILLED_RECURSIVE = 2
    FILLED_ITERATIVE = 3


def grid_label(grid: np.ndarray) -> str:
    """Dimension label used in trial records, e.g. ``"25x25"``."""
    rows, cols = grid.shape
    return f"{rows}x{cols}"
