"""Randomized occupancy grid generation.

Each cell except the origin is independently a wall with probability
``density``; the origin is always left traversable so both fills have a
valid starting cell.
"""

import logging

import numpy as np

from floodbench.config.experiment import GridConfig
from floodbench.grid.types import GRID_DTYPE, CellState

log = logging.getLogger(__name__)


def generate_grid(
    rows: int,
    cols: int,
    density: float,
    rng: np.random.Generator | None = None,
) -> np.ndarray:
    """Generate a fresh random occupancy grid.

    Args:
        rows: Number of rows (> 0).
        cols: Number of columns (> 0).
        density: Wall probability per cell in [0, 1].
        rng: numpy random Generator. A fresh unseeded one when None.

    Returns:
        int8 array of shape (rows, cols) holding EMPTY/WALL codes,
        with grid[0, 0] == EMPTY.

    Raises:
        ValueError: If a dimension is not positive or density is out of range.
    """
    if rows <= 0 or cols <= 0:
        raise ValueError(
            f"Grid dimensions must be positive, got {rows}x{cols}"
        )
    if not 0.0 <= density <= 1.0:
        raise ValueError(f"density must be in [0, 1], got {density}")

    if rng is None:
        rng = np.random.default_rng()

    walls = rng.random((rows, cols)) < density
    walls[0, 0] = False

    grid = np.full((rows, cols), CellState.EMPTY, dtype=GRID_DTYPE)
    grid[walls] = CellState.WALL

    log.debug(
        "Generated %dx%d grid (density=%.2f, walls=%d)",
        rows,
        cols,
        density,
        int(walls.sum()),
    )
    return grid


def generate_from_config(
    grid_config: GridConfig, rng: np.random.Generator | None = None
) -> np.ndarray:
    """Generate a grid from a GridConfig."""
    return generate_grid(
        grid_config.rows, grid_config.cols, grid_config.density, rng
    )
