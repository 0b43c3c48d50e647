"""Occupancy grid generation, cell codes, and grid validation."""

from floodbench.grid.generator import generate_from_config, generate_grid
from floodbench.grid.types import GRID_DTYPE, CellState, grid_label
from floodbench.grid.validation import (
    MalformedGridError,
    check_grid,
    reachable_region,
    verify_fill,
)

__all__ = [
    "CellState",
    "GRID_DTYPE",
    "MalformedGridError",
    "check_grid",
    "generate_from_config",
    "generate_grid",
    "grid_label",
    "reachable_region",
    "verify_fill",
]
