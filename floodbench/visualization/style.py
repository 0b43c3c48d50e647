"""Shared look for session figures.

seaborn whitegrid with the colorblind palette, one colour per algorithm, and
a categorical colour map indexed by cell-state code. save_figure() writes
every figure as PNG and SVG.
"""

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for headless rendering

import matplotlib.pyplot as plt
import seaborn as sns
from matplotlib.colors import ListedColormap
from pathlib import Path

PALETTE = sns.color_palette("colorblind", n_colors=8)
RECURSIVE_COLOR = PALETTE[4]
ITERATIVE_COLOR = PALETTE[2]
CRASH_COLOR = PALETTE[3]
EMPTY_COLOR = (0.97, 0.97, 0.97)
WALL_COLOR = (0.15, 0.15, 0.15)

# Indexed by CellState code: EMPTY, WALL, FILLED_RECURSIVE, FILLED_ITERATIVE
CELL_CMAP = ListedColormap(
    [EMPTY_COLOR, WALL_COLOR, RECURSIVE_COLOR, ITERATIVE_COLOR],
    name="cell_state",
)

FIGURE_FORMATS = ("png", "svg")


def apply_style() -> None:
    """Set the seaborn theme and rcParams used by every plot. Idempotent."""
    sns.set_theme(style="whitegrid", palette=PALETTE, font_scale=0.9)
    plt.rcParams.update({
        "figure.dpi": 120,
        "savefig.dpi": 300,
        "savefig.bbox": "tight",
        "image.interpolation": "nearest",
        "legend.frameon": True,
        "legend.fontsize": 8,
        "svg.fonttype": "none",
    })


def save_figure(fig: plt.Figure, output_dir: Path, name: str) -> tuple[Path, Path]:
    """Write ``name.png`` and ``name.svg`` into output_dir and close the figure.

    Returns:
        Tuple of (png_path, svg_path).
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    paths = []
    for ext in FIGURE_FORMATS:
        path = output_dir / f"{name}.{ext}"
        fig.savefig(path)
        paths.append(path)
    plt.close(fig)
    return paths[0], paths[1]
