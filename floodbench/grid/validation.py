"""Grid shape checks and reachable-region analysis.

The traversal engine calls check_grid() before touching a grid so a
tampered or mis-sized grid fails fast instead of being traversed out of
bounds. reachable_region() labels 4-connected components independently of
either fill, which lets callers cross-check what a fill actually marked.
"""

import logging

import numpy as np
from scipy import ndimage

from floodbench.grid.types import CellState

log = logging.getLogger(__name__)

# 4-connectivity: axis-aligned neighbours only.
_FOUR_CONNECTED = ndimage.generate_binary_structure(2, 1)

_VALID_CODES = np.array([int(s) for s in CellState])


class MalformedGridError(ValueError):
    """Raised when a grid does not match the configured dimensions or codes."""


def check_grid(
    grid: np.ndarray, expected_shape: tuple[int, int] | None = None
) -> None:
    """Fail fast on a grid that cannot be traversed safely.

    Args:
        grid: Candidate grid.
        expected_shape: Configured (rows, cols); skipped when None.

    Raises:
        MalformedGridError: If the grid is not a non-empty 2-D integer
            array, its shape differs from expected_shape, or it holds
            codes outside CellState.
    """
    if not isinstance(grid, np.ndarray):
        raise MalformedGridError(
            f"Grid must be a numpy array, got {type(grid).__name__}"
        )
    if grid.ndim != 2:
        raise MalformedGridError(f"Grid must be 2-D, got {grid.ndim}-D")
    if grid.shape[0] == 0 or grid.shape[1] == 0:
        raise MalformedGridError(f"Grid is empty: shape {grid.shape}")
    if not np.issubdtype(grid.dtype, np.integer):
        raise MalformedGridError(
            f"Grid must hold integer cell codes, got dtype {grid.dtype}"
        )
    if expected_shape is not None and tuple(grid.shape) != tuple(expected_shape):
        raise MalformedGridError(
            f"Grid shape {grid.shape[0]}x{grid.shape[1]} does not match "
            f"configured {expected_shape[0]}x{expected_shape[1]}"
        )
    unknown = np.setdiff1d(np.unique(grid), _VALID_CODES)
    if unknown.size:
        raise MalformedGridError(
            f"Grid contains unknown cell codes: {unknown.tolist()}"
        )


def reachable_region(grid: np.ndarray) -> np.ndarray:
    """Boolean mask of EMPTY cells 4-connected to the origin.

    Returns an all-False mask when the origin itself is not EMPTY.
    """
    empty = grid == CellState.EMPTY
    if not empty[0, 0]:
        return np.zeros(grid.shape, dtype=bool)
    labels, _ = ndimage.label(empty, structure=_FOUR_CONNECTED)
    return labels == labels[0, 0]


def verify_fill(
    baseline: np.ndarray, filled: np.ndarray, marker: int
) -> list[str]:
    """Check that a completed fill marked exactly the reachable region.

    Args:
        baseline: Grid before the fill.
        filled: The same grid after the fill.
        marker: Fill code the algorithm writes.

    Returns:
        List of error strings (empty = fill matches the reachable region).
    """
    errors: list[str] = []

    if baseline.shape != filled.shape:
        return [f"Shape changed from {baseline.shape} to {filled.shape}"]

    expected = reachable_region(baseline)
    marked = (filled == marker) & (baseline != marker)

    missed = int((expected & ~marked).sum())
    if missed:
        errors.append(f"{missed} reachable cells were not filled")

    extra = int((marked & ~expected).sum())
    if extra:
        errors.append(f"{extra} unreachable cells were filled")

    walls_before = baseline == CellState.WALL
    if not np.array_equal(walls_before, filled == CellState.WALL):
        errors.append("Wall layout changed during the fill")

    return errors
