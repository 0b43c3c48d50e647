"""Single-session HTML report generator.

Produces a self-contained HTML file with base64-embedded figures, the
configuration table, per-algorithm averages, the trial table in sorted
view, and a copy-pasteable reproduction command.
"""

import base64
import json
import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from floodbench.visualization.render import load_result_data

log = logging.getLogger(__name__)

# Template directory relative to this file
_TEMPLATE_DIR = Path(__file__).parent / "templates"

_MIME_TYPES = {".png": "image/png", ".svg": "image/svg+xml"}


def figure_data_uri(fig_path: Path | str) -> str:
    """Inline a figure file as a ``data:`` URI; empty string if unusable."""
    fig_path = Path(fig_path)
    mime = _MIME_TYPES.get(fig_path.suffix.lower())
    if mime is None or not fig_path.exists():
        return ""
    encoded = base64.b64encode(fig_path.read_bytes()).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def _build_config_rows(config: dict[str, Any]) -> list[dict[str, Any]]:
    grid = config.get("grid", {})
    run = config.get("run", {})
    trials = config.get("trials", {})
    return [
        {"name": "Grid size", "value": f"{grid.get('rows', 'N/A')} x {grid.get('cols', 'N/A')}"},
        {"name": "Density", "value": f"{100 * grid.get('density', 0.0):.0f}%"},
        {"name": "Step delay", "value": f"{run.get('step_delay_ms', 0)} ms"},
        {"name": "Settle delay", "value": f"{run.get('settle_delay_ms', 0)} ms"},
        {"name": "Rounds", "value": trials.get("n_trials", "N/A")},
        {"name": "Algorithms", "value": ", ".join(trials.get("algorithms", []))},
        {"name": "Seed", "value": config.get("seed", "N/A")},
    ]


def _build_trial_rows(trials: list[dict[str, Any]]) -> list[dict[str, Any]]:
    rows = []
    for t in trials:
        crashed = t.get("outcome") == "Crash"
        rows.append({
            "trial_number": t.get("trial_number"),
            "kind": t.get("kind"),
            "time": "CRASH" if crashed else f"{t.get('elapsed_ms', 0.0):.1f}ms",
            "cells_filled": t.get("cells_filled"),
            "crashed": crashed,
        })
    return rows


def _reproduction_command(result: dict[str, Any]) -> dict[str, str]:
    """Config JSON plus the command that replays the session plan."""
    config_json = json.dumps(result.get("config", {}), indent=2, sort_keys=True)
    return {
        "config_json": config_json,
        "command": "python run_session.py --config config.json",
    }


def generate_session_report(
    result_dir: str | Path,
    output_path: str | Path | None = None,
) -> Path:
    """Generate a single-session HTML report.

    Args:
        result_dir: Path to results/{session_id}/ directory.
        output_path: Where to write the HTML. Defaults to {result_dir}/report.html.

    Returns:
        Path to the generated HTML report file.
    """
    result_dir = Path(result_dir)
    data = load_result_data(result_dir)
    result = data["result"]
    scalars = result.get("metrics", {}).get("scalars", {})

    figures_dir = result_dir / "figures"
    comparison_figure = figure_data_uri(figures_dir / "trial_comparison.png")
    grid_figure = figure_data_uri(figures_dir / "baseline_grid.png")

    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATE_DIR)),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    template = env.get_template("session_report.html")

    html = template.render(
        session_id=result.get("session_id", "Unknown"),
        timestamp=result.get("timestamp", ""),
        description=result.get("description", ""),
        config_rows=_build_config_rows(result.get("config", {})),
        scalars=scalars,
        avg_recursive=f"{scalars.get('recursive_avg_ms', 0.0):.2f}",
        avg_iterative=f"{scalars.get('iterative_avg_ms', 0.0):.2f}",
        trial_rows=_build_trial_rows(result.get("trials", [])),
        comparison_figure=comparison_figure or None,
        grid_figure=grid_figure or None,
        reproduction=_reproduction_command(result),
    )

    if output_path is None:
        output_path = result_dir / "report.html"
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html, encoding="utf-8")

    log.info("Report written to %s", output_path)
    return output_path
