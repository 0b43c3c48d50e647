"""Static figure generation for flood-fill sessions.

Provides render_all() to generate all figures for a single session,
with individual plot modules for each visualization type.
"""

from floodbench.visualization.comparison import plot_paired_series
from floodbench.visualization.grid import plot_grid
from floodbench.visualization.render import load_result_data, render_all
from floodbench.visualization.style import apply_style, save_figure

__all__ = [
    "apply_style",
    "load_result_data",
    "plot_grid",
    "plot_paired_series",
    "render_all",
    "save_figure",
]
