"""Grid snapshot plot: one coloured square per cell state."""

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Patch

from floodbench.grid.types import CellState
from floodbench.visualization.style import CELL_CMAP

_LEGEND_LABELS = {
    CellState.EMPTY: "Empty",
    CellState.WALL: "Wall",
    CellState.FILLED_RECURSIVE: "Recursive fill",
    CellState.FILLED_ITERATIVE: "Iterative fill",
}


def plot_grid(grid: np.ndarray, title: str = "Grid") -> plt.Figure:
    """Render a grid with the shared cell-state colour map."""
    rows, cols = np.shape(grid)
    size = min(8.0, max(3.0, cols / 5))
    fig, ax = plt.subplots(figsize=(size, size * rows / cols))

    ax.imshow(
        np.asarray(grid), cmap=CELL_CMAP, vmin=0, vmax=len(CellState) - 1,
        interpolation="nearest",
    )
    ax.set_xticks([])
    ax.set_yticks([])
    ax.grid(False)
    ax.set_title(title)

    present = set(np.unique(grid).tolist())
    handles = [
        Patch(color=CELL_CMAP(int(state)), label=label)
        for state, label in _LEGEND_LABELS.items()
        if int(state) in present
    ]
    ax.legend(handles=handles, loc="upper left", bbox_to_anchor=(1.01, 1), fontsize=8)

    fig.tight_layout()
    return fig
