"""Integration tests for the end-to-end session runner.

Runs the full chain from config loading through report generation using
tiny grids for fast execution.
"""

import json
import subprocess
import sys
from pathlib import Path

from floodbench.config import ExperimentConfig, GridConfig, TrialConfig
from floodbench.config.serialization import config_to_json
from floodbench.results import validate_result
from run_session import run_session

REPO_ROOT = Path(__file__).resolve().parents[1]

TINY_CONFIG = ExperimentConfig(
    grid=GridConfig(rows=6, cols=6, density=0.2),
    trials=TrialConfig(n_trials=2),
    seed=42,
    description="E2E session test",
    tags=("test", "e2e"),
)

# 200x200 open grid: deep enough to exhaust the default recursion limit.
CRASH_CONFIG = ExperimentConfig(
    grid=GridConfig(rows=200, cols=200, density=0.0),
    trials=TrialConfig(n_trials=1),
    seed=1,
)


def _write_config(tmp_path: Path, config: ExperimentConfig = TINY_CONFIG) -> Path:
    config_path = tmp_path / "config.json"
    config_path.write_text(config_to_json(config))
    return config_path


def _run_cli(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "run_session.py", *args],
        capture_output=True,
        text=True,
        timeout=60,
        cwd=REPO_ROOT,
    )


class TestDryRun:
    """Tests for --dry-run mode."""

    def test_dry_run_exits_cleanly(self, tmp_path: Path) -> None:
        config_path = _write_config(tmp_path)
        result = _run_cli("--config", str(config_path), "--dry-run")
        assert result.returncode == 0
        assert "Session plan" in result.stdout
        assert "dry-run" in result.stdout.lower()
        assert "g6x6_d0.20_s42_" in result.stdout
        assert "result.json" in result.stdout

    def test_dry_run_no_report(self, tmp_path: Path) -> None:
        config_path = _write_config(tmp_path)
        result = _run_cli("--config", str(config_path), "--dry-run", "--no-report")
        assert result.returncode == 0
        assert "report.html" not in result.stdout

    def test_missing_config_fails(self, tmp_path: Path) -> None:
        result = _run_cli("--config", str(tmp_path / "absent.json"), "--dry-run")
        assert result.returncode == 1
        assert "not found" in result.stderr

    def test_invalid_config_fails(self, tmp_path: Path) -> None:
        config_path = tmp_path / "bad.json"
        config_path.write_text(json.dumps({"grid": {"rows": -1}}))
        result = _run_cli("--config", str(config_path), "--dry-run")
        assert result.returncode == 1
        assert "invalid config" in result.stderr


class TestRunSession:
    """Full in-process session runs."""

    def test_tiny_session_writes_all_outputs(self, tmp_path: Path) -> None:
        out_dir = run_session(TINY_CONFIG, results_dir=str(tmp_path), session_id="tiny")

        assert out_dir == tmp_path / "tiny"
        result = json.loads((out_dir / "result.json").read_text())
        assert validate_result(result) == []
        assert len(result["trials"]) == 4
        assert [t["outcome"] for t in result["trials"]] == ["Success"] * 4
        assert result["metrics"]["scalars"]["recursive_count"] == 2
        assert result["description"] == "E2E session test"
        assert (out_dir / "figures" / "trial_comparison.png").exists()
        assert (out_dir / "figures" / "baseline_grid.svg").exists()
        assert (out_dir / "report.html").exists()

    def test_both_algorithms_fill_same_cell_count(self, tmp_path: Path) -> None:
        out_dir = run_session(TINY_CONFIG, results_dir=str(tmp_path), report=False)
        result = json.loads((out_dir / "result.json").read_text())
        reachable = result["metrics"]["scalars"]["reachable_cells"]
        assert {t["cells_filled"] for t in result["trials"]} == {reachable}
        assert not (out_dir / "report.html").exists()

    def test_deep_grid_records_recursive_crash(self, tmp_path: Path) -> None:
        out_dir = run_session(CRASH_CONFIG, results_dir=str(tmp_path), report=False)
        result = json.loads((out_dir / "result.json").read_text())
        outcomes = {t["kind"]: t["outcome"] for t in result["trials"]}
        assert outcomes == {"Recursive": "Crash", "Iterative": "Success"}
        scalars = result["metrics"]["scalars"]
        assert scalars["recursive_avg_ms"] == 0.0
        assert scalars["iterative_avg_ms"] > 0.0
        assert result["metrics"]["paired_series"]["recursive"] == [0.0]
