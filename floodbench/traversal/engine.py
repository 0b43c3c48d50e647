"""Flood-fill traversal engine with timing, crash capture, and pacing.

Implements the two competing strategies over a grid that the caller owns:

1. fill_recursive(): genuine call-stack recursion, so deep regions exhaust
   the interpreter's recursion limit and surface as a Crash outcome.
2. fill_iterative(): breadth-first over a collections.deque, bounded only
   by the number of frontier cells.

run_fill() validates the grid, times the fill with a monotonic
high-resolution clock, and converts stack exhaustion into result data.
It does not serialize calls; the session controller gates overlapping runs.
"""

import itertools
import logging
import time
from collections import deque
from collections.abc import Callable

import numpy as np

from floodbench.grid.types import CellState, grid_label
from floodbench.grid.validation import check_grid
from floodbench.traversal.types import AlgorithmKind, Outcome, RunResult

log = logging.getLogger(__name__)

# Neighbour order: down, up, right, left.
NEIGHBOR_OFFSETS = ((1, 0), (-1, 0), (0, 1), (0, -1))

ProgressCallback = Callable[[np.ndarray], None]

_run_ids = itertools.count(1)


def fill_recursive(
    grid: np.ndarray, on_step: Callable[[], None] | None = None
) -> int:
    """Depth-first flood fill from the origin using recursion.

    Marks each EMPTY cell FILLED_RECURSIVE before recursing into its
    neighbours, so no cell is visited twice. Raises RecursionError when
    the deepest path exceeds the interpreter's recursion limit; the cells
    marked up to that point stay marked.

    Args:
        grid: Grid mutated in place.
        on_step: Called after each cell is marked.

    Returns:
        Number of cells marked.
    """
    rows, cols = grid.shape
    marker = CellState.FILLED_RECURSIVE
    filled = 0

    def visit(r: int, c: int) -> None:
        nonlocal filled
        if r < 0 or r >= rows or c < 0 or c >= cols:
            return
        if grid[r, c] != CellState.EMPTY:
            return
        grid[r, c] = marker
        filled += 1
        if on_step is not None:
            on_step()
        for dr, dc in NEIGHBOR_OFFSETS:
            visit(r + dr, c + dc)

    visit(0, 0)
    return filled


def fill_iterative(
    grid: np.ndarray, on_step: Callable[[], None] | None = None
) -> int:
    """Breadth-first flood fill from the origin using a FIFO queue.

    The origin is enqueued only if it is EMPTY. Cells are marked
    FILLED_ITERATIVE before they are enqueued so none is enqueued twice.

    Args:
        grid: Grid mutated in place.
        on_step: Called after each cell is marked.

    Returns:
        Number of cells marked.
    """
    rows, cols = grid.shape
    marker = CellState.FILLED_ITERATIVE

    if grid[0, 0] != CellState.EMPTY:
        return 0

    grid[0, 0] = marker
    filled = 1
    if on_step is not None:
        on_step()
    queue = deque([(0, 0)])

    while queue:
        r, c = queue.popleft()
        for dr, dc in NEIGHBOR_OFFSETS:
            nr, nc = r + dr, c + dc
            if 0 <= nr < rows and 0 <= nc < cols and grid[nr, nc] == CellState.EMPTY:
                grid[nr, nc] = marker
                filled += 1
                queue.append((nr, nc))
                if on_step is not None:
                    on_step()

    return filled


_FILLS = {
    AlgorithmKind.RECURSIVE: fill_recursive,
    AlgorithmKind.ITERATIVE: fill_iterative,
}


def _make_pacer(
    grid: np.ndarray,
    on_progress: ProgressCallback | None,
    step_delay_ms: int,
) -> Callable[[], None] | None:
    """Build the per-cell hook: snapshot to on_progress, then sleep.

    Returns None when pacing is off so unpaced runs never yield.
    """
    if step_delay_ms <= 0:
        return None
    delay_s = step_delay_ms / 1000.0

    def step() -> None:
        if on_progress is not None:
            on_progress(grid.copy())
        time.sleep(delay_s)

    return step


def run_fill(
    kind: AlgorithmKind | str,
    grid: np.ndarray,
    on_progress: ProgressCallback | None = None,
    step_delay_ms: int = 0,
    expected_shape: tuple[int, int] | None = None,
) -> RunResult:
    """Run one flood fill over ``grid`` in place and time it.

    Args:
        kind: Which algorithm to run (enum or its string value).
        grid: Private working copy; mutated in place.
        on_progress: Receives a grid snapshot after each marked cell when
            step_delay_ms > 0. Never called for unpaced runs.
        step_delay_ms: Pause after each marked cell; 0 disables pacing.
        expected_shape: Configured (rows, cols) the grid must match.

    Returns:
        RunResult with elapsed wall-clock milliseconds and the outcome.
        Stack exhaustion yields Outcome.CRASH instead of an exception.

    Raises:
        MalformedGridError: If the grid fails validation.
        ValueError: If step_delay_ms is negative or kind is unknown.
    """
    kind = AlgorithmKind(kind)
    if step_delay_ms < 0:
        raise ValueError(f"step_delay_ms must be >= 0, got {step_delay_ms}")
    check_grid(grid, expected_shape)

    fill = _FILLS[kind]
    on_step = _make_pacer(grid, on_progress, step_delay_ms)
    marked_before = int(np.count_nonzero(grid == kind.marker))
    outcome = Outcome.SUCCESS

    t0 = time.perf_counter()
    try:
        fill(grid, on_step)
    except RecursionError:
        outcome = Outcome.CRASH
    elapsed_ms = (time.perf_counter() - t0) * 1000.0
    # Counted from the grid so a crashed run still reports its partial fill.
    cells_filled = int(np.count_nonzero(grid == kind.marker)) - marked_before

    result = RunResult(
        run_id=next(_run_ids),
        kind=kind,
        elapsed_ms=elapsed_ms,
        outcome=outcome,
        grid_label=grid_label(grid),
        cells_filled=int(cells_filled),
    )

    if outcome is Outcome.CRASH:
        log.warning(
            "%s fill on %s exhausted the call stack after %d cells (%.2f ms)",
            kind.value,
            result.grid_label,
            result.cells_filled,
            elapsed_ms,
        )
    else:
        log.info(
            "%s fill on %s: %d cells in %.2f ms",
            kind.value,
            result.grid_label,
            result.cells_filled,
            elapsed_ms,
        )
    return result
