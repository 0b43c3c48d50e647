"""Result schema validation and writing.

Uses a Python validation function (not jsonschema) to check required fields,
trial record consistency, and series lengths before writing result.json.
"""

import json
import logging
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np

from floodbench.config.experiment import ALGORITHM_NAMES, ExperimentConfig
from floodbench.config.hashing import full_config_hash, grid_config_hash
from floodbench.grid.types import CellState
from floodbench.grid.validation import reachable_region
from floodbench.results.session_id import generate_session_id
from floodbench.session.ledger import TrialLedger

log = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0"

REQUIRED_TOP_FIELDS = {
    "schema_version",
    "session_id",
    "timestamp",
    "description",
    "tags",
    "config",
    "baseline",
    "trials",
    "metrics",
}

REQUIRED_TRIAL_FIELDS = {
    "run_id",
    "kind",
    "elapsed_ms",
    "outcome",
    "grid_label",
    "cells_filled",
    "trial_number",
}

_OUTCOMES = {"Success", "Crash"}


def _validate_trials(trials: list[Any]) -> list[str]:
    errors: list[str] = []
    numbers: dict[str, list[int]] = {name: [] for name in ALGORITHM_NAMES}

    for i, trial in enumerate(trials):
        if not isinstance(trial, dict):
            errors.append(f"trials[{i}] must be a dict")
            continue
        missing = REQUIRED_TRIAL_FIELDS - set(trial.keys())
        if missing:
            errors.append(f"trials[{i}] missing fields: {sorted(missing)}")
            continue
        if trial["kind"] not in numbers:
            errors.append(f"trials[{i}] has unknown kind {trial['kind']!r}")
            continue
        if trial["outcome"] not in _OUTCOMES:
            errors.append(
                f"trials[{i}] has unknown outcome {trial['outcome']!r}"
            )
        elapsed = trial["elapsed_ms"]
        if not isinstance(elapsed, (int, float)) or elapsed < 0:
            errors.append(f"trials[{i}] elapsed_ms must be a number >= 0")
        numbers[trial["kind"]].append(trial["trial_number"])

    # Trial numbers run 1..n per algorithm with no gaps or repeats
    for kind, nums in numbers.items():
        if sorted(nums) != list(range(1, len(nums) + 1)):
            errors.append(
                f"{kind} trial numbers are not sequential from 1: {sorted(nums)}"
            )

    return errors


def validate_result(result: dict[str, Any]) -> list[str]:
    """Validate a result dict against the project schema.

    Returns a list of error strings. An empty list means the result is valid.

    Checks:
    - All required top-level fields are present
    - schema_version is a string, tags a list, config a dict
    - timestamp parses as ISO 8601
    - baseline is a rectangular list of rows
    - each trial has the record fields, a known kind and outcome
    - trial numbers are sequential per algorithm
    - metrics.scalars is present and paired series lengths agree
    """
    errors: list[str] = []

    missing = REQUIRED_TOP_FIELDS - set(result.keys())
    if missing:
        errors.append(f"Missing required top-level fields: {sorted(missing)}")

    if "schema_version" in result and not isinstance(result["schema_version"], str):
        errors.append("schema_version must be a string")

    if "tags" in result and not isinstance(result["tags"], list):
        errors.append("tags must be a list")

    if "config" in result and not isinstance(result["config"], dict):
        errors.append("config must be a dict")

    if "timestamp" in result:
        ts = result["timestamp"]
        if not isinstance(ts, str):
            errors.append("timestamp must be a string")
        else:
            try:
                datetime.fromisoformat(ts)
            except ValueError:
                errors.append("timestamp must be in ISO 8601 format")

    if "baseline" in result:
        baseline = result["baseline"]
        if not isinstance(baseline, list) or not baseline:
            errors.append("baseline must be a non-empty list of rows")
        elif len({len(row) for row in baseline}) != 1:
            errors.append("baseline rows must all have the same length")

    if "trials" in result:
        if not isinstance(result["trials"], list):
            errors.append("trials must be a list")
        else:
            errors.extend(_validate_trials(result["trials"]))

    if "metrics" in result:
        metrics = result["metrics"]
        if not isinstance(metrics, dict):
            errors.append("metrics must be a dict")
        else:
            if "scalars" not in metrics:
                errors.append("metrics.scalars is required")
            series = metrics.get("paired_series")
            if series is not None:
                lengths = {
                    len(series.get(key, []))
                    for key in ("labels", "recursive", "iterative")
                }
                if len(lengths) != 1:
                    errors.append(
                        "metrics.paired_series arrays must have equal length"
                    )

    return errors


def build_result(
    config: ExperimentConfig,
    baseline: np.ndarray,
    ledger: TrialLedger,
    session_id: str | None = None,
) -> dict[str, Any]:
    """Assemble the result dict for one session.

    Args:
        config: The experiment configuration.
        baseline: The session's baseline grid.
        ledger: Ledger holding the committed trials.
        session_id: Reuse an existing ID; generated when None.

    Returns:
        Result dict (not yet validated).
    """
    series = ledger.paired_series()
    scalars = ledger.summary()
    scalars["reachable_cells"] = int(reachable_region(baseline).sum())
    scalars["wall_cells"] = int((baseline == CellState.WALL).sum())

    return {
        "schema_version": SCHEMA_VERSION,
        "session_id": session_id or generate_session_id(config),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "description": config.description,
        "tags": list(config.tags),
        "config": asdict(config),
        "baseline": baseline.tolist(),
        "trials": [r.to_dict() for r in ledger.sorted_view()],
        "metrics": {
            "scalars": scalars,
            "paired_series": {
                "labels": series.labels,
                "recursive": series.recursive,
                "iterative": series.iterative,
            },
        },
        "metadata": {
            "config_hash": full_config_hash(config),
            "grid_config_hash": grid_config_hash(config),
        },
    }


def write_result(
    config: ExperimentConfig,
    baseline: np.ndarray,
    ledger: TrialLedger,
    results_dir: str | Path = "results",
    session_id: str | None = None,
) -> Path:
    """Write results/{session_id}/result.json for a finished session.

    Returns:
        Path to the session output directory.

    Raises:
        ValueError: If the assembled result fails validation.
    """
    result = build_result(config, baseline, ledger, session_id=session_id)

    # Validate before writing
    errors = validate_result(result)
    if errors:
        raise ValueError(
            "Result validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        )

    out_dir = Path(results_dir) / result["session_id"]
    out_dir.mkdir(parents=True, exist_ok=True)
    result_path = out_dir / "result.json"
    with open(result_path, "w") as f:
        json.dump(result, f, indent=2)

    log.info("Result written to %s", result_path)
    return out_dir


def load_result(result_path: str | Path) -> dict[str, Any]:
    """Load and validate a result.json file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the loaded result fails validation.
    """
    path = Path(result_path)
    with open(path) as f:
        result = json.load(f)

    errors = validate_result(result)
    if errors:
        raise ValueError(
            f"Result validation failed for {path}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )

    return result
