"""Trial comparison chart: elapsed time per trial number for both fills."""

import matplotlib.pyplot as plt
import numpy as np

from floodbench.visualization.style import (
    CRASH_COLOR,
    ITERATIVE_COLOR,
    RECURSIVE_COLOR,
)


def _plot_one(ax, values, color, label, marker, crashed_trials=()) -> None:
    """Plot one series, spanning gaps and marking crashed_trials with an X."""
    points = [(i + 1, v) for i, v in enumerate(values) if v is not None]
    if not points:
        return
    x = np.array([p[0] for p in points])
    y = np.array([p[1] for p in points], dtype=float)
    ax.plot(x, y, color=color, linewidth=1.5, marker=marker, markersize=6, label=label)
    ax.fill_between(x, y, color=color, alpha=0.15)

    crashed = np.isin(x, list(crashed_trials))
    if crashed.any():
        ax.scatter(
            x[crashed], y[crashed], color=CRASH_COLOR, marker="X",
            s=70, zorder=3, label=f"{label} crash",
        )


def plot_paired_series(
    recursive: list[float | None],
    iterative: list[float | None],
    averages: dict[str, float] | None = None,
    crashes: dict[str, list[int]] | None = None,
) -> plt.Figure:
    """Line chart of elapsed ms per trial for both algorithms.

    Args:
        recursive: Per-trial values (None = no trial, 0.0 = crash).
        iterative: Same for the iterative fill.
        averages: Optional {"Recursive": ms, "Iterative": ms} reference
            lines; zero averages are not drawn.
        crashes: Optional {"Recursive": [trial numbers], ...} drawn with
            a crash marker.

    Returns:
        The matplotlib Figure.
    """
    fig, ax = plt.subplots(figsize=(8, 4))

    crashes = crashes or {}
    _plot_one(ax, recursive, RECURSIVE_COLOR, "Recursive (DFS)", "o",
              crashes.get("Recursive", ()))
    _plot_one(ax, iterative, ITERATIVE_COLOR, "Iterative (BFS)", "s",
              crashes.get("Iterative", ()))

    for name, color in (("Recursive", RECURSIVE_COLOR), ("Iterative", ITERATIVE_COLOR)):
        avg = (averages or {}).get(name, 0.0)
        if avg > 0:
            ax.axhline(avg, color=color, linestyle="--", alpha=0.6,
                       label=f"{name} avg ({avg:.2f} ms)")

    n = max(len(recursive), len(iterative))
    ax.set_xticks(range(1, n + 1))
    ax.set_xticklabels([f"Test {i}" for i in range(1, n + 1)])
    ax.set_ylim(bottom=0)
    ax.set_xlabel("Trial")
    ax.set_ylabel("Elapsed time (ms)")
    ax.set_title("Flood fill execution time per trial")
    if n:
        ax.legend(fontsize=8)

    fig.tight_layout()
    return fig
