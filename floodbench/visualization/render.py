"""Orchestrator: render all figures for a single session.

Reads result.json, calls all plot functions, saves to
results/{session_id}/figures/ as PNG + SVG.
"""

import json
import logging
from pathlib import Path
from typing import Any

import numpy as np

from floodbench.visualization.style import apply_style, save_figure

log = logging.getLogger(__name__)


def load_result_data(result_dir: str | Path) -> dict[str, Any]:
    """Load result.json from a session directory.

    Returns:
        Dict with keys:
        - result: The parsed result.json dict
        - baseline: Baseline grid as an int8 array
        - series: metrics.paired_series (or empty dict)
    """
    result_dir = Path(result_dir)
    with open(result_dir / "result.json") as f:
        result = json.load(f)

    return {
        "result": result,
        "baseline": np.array(result.get("baseline", []), dtype=np.int8),
        "series": result.get("metrics", {}).get("paired_series", {}),
    }


def _crashed_trials(trials: list[dict[str, Any]]) -> dict[str, list[int]]:
    """Trial numbers of Crash records, keyed by algorithm name."""
    crashes: dict[str, list[int]] = {}
    for t in trials:
        if t.get("outcome") == "Crash":
            crashes.setdefault(t["kind"], []).append(t["trial_number"])
    return crashes


def render_all(result_dir: str | Path) -> list[Path]:
    """Generate all figures for a single session.

    Each plot type is wrapped in try/except so one failure doesn't block
    the others.

    Returns:
        List of paths to generated figure files.
    """
    apply_style()

    result_dir = Path(result_dir)
    data = load_result_data(result_dir)
    figures_dir = result_dir / "figures"
    generated_files: list[Path] = []

    scalars = data["result"].get("metrics", {}).get("scalars", {})
    series = data["series"]

    if series.get("labels"):
        try:
            from floodbench.visualization.comparison import plot_paired_series

            fig = plot_paired_series(
                series["recursive"],
                series["iterative"],
                averages={
                    "Recursive": scalars.get("recursive_avg_ms", 0.0),
                    "Iterative": scalars.get("iterative_avg_ms", 0.0),
                },
                crashes=_crashed_trials(data["result"].get("trials", [])),
            )
            generated_files.extend(save_figure(fig, figures_dir, "trial_comparison"))
            log.info("Generated: trial_comparison")
        except Exception as e:
            log.warning("Failed to generate trial_comparison: %s", e)

    if data["baseline"].ndim == 2 and data["baseline"].size:
        try:
            from floodbench.visualization.grid import plot_grid

            fig = plot_grid(data["baseline"], title="Baseline grid")
            generated_files.extend(save_figure(fig, figures_dir, "baseline_grid"))
            log.info("Generated: baseline_grid")
        except Exception as e:
            log.warning("Failed to generate baseline_grid: %s", e)

    log.info("Rendered %d figure files to %s", len(generated_files), figures_dir)
    return generated_files
