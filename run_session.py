#!/usr/bin/env python3
"""Entry point for running flood-fill benchmark sessions.

Chains all stages into a single executable command:
grid generation -> session start -> trials -> result export ->
visualization -> reporting.

Usage:
    python run_session.py
    python run_session.py --config config.json
    python run_session.py --config config.json --dry-run
    python run_session.py --config config.json --verbose
"""

import argparse
import logging
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

import numpy as np

from floodbench.config import (
    ANCHOR_CONFIG,
    ExperimentConfig,
    config_from_json,
    full_config_hash,
    grid_config_hash,
)
from floodbench.grid import CellState
from floodbench.results import generate_session_id

log = logging.getLogger(__name__)


@contextmanager
def stage_timer(name: str) -> Generator[None, None, None]:
    """Context manager that prints stage banners with elapsed time."""
    print(f"\n=== {name} ===")
    log.info("Starting: %s", name)
    t0 = time.monotonic()
    yield
    elapsed = time.monotonic() - t0
    print(f"... done in {elapsed:.1f}s")
    log.info("Completed: %s in %.1fs", name, elapsed)


def run_session(
    config: ExperimentConfig,
    results_dir: str = "results",
    report: bool = True,
    session_id: str | None = None,
) -> Path:
    """Execute one full benchmark session.

    Args:
        config: Session configuration.
        results_dir: Base directory for results output.
        report: Render figures and the HTML report after writing results.
        session_id: Output directory name; generated from the config when None.

    Returns:
        Path to the output directory.
    """
    # Lazy imports to keep --dry-run fast
    from floodbench.reporting import generate_session_report
    from floodbench.results import write_result
    from floodbench.session import SessionController
    from floodbench.traversal import Outcome
    from floodbench.visualization import render_all

    session_start = time.monotonic()

    # ── Stage 1: Grid Generation ───────────────────────────────────
    with stage_timer("Grid Generation"):
        controller = SessionController(
            grid_config=config.grid,
            run_config=config.run,
            rng=np.random.default_rng(config.seed),
        )
        log.info(
            "Grid: %s, density=%.2f, walls=%d",
            config.grid.label,
            config.grid.density,
            int((controller.grid == CellState.WALL).sum()),
        )

    # ── Stage 2: Session Start ─────────────────────────────────────
    with stage_timer("Session Start"):
        session = controller.start_session()

    # ── Stage 3: Trials ────────────────────────────────────────────
    with stage_timer("Trials"):
        for _ in range(config.trials.n_trials):
            for name in config.trials.algorithms:
                result = controller.run(name)
                record = controller.commit()
                status = (
                    "CRASH"
                    if record.outcome is Outcome.CRASH
                    else f"{record.elapsed_ms:.2f} ms"
                )
                print(
                    f"  {record.kind.value:<9} #{record.trial_number:<3} "
                    f"{status:>12}  ({result.cells_filled} cells)"
                )
        ledger = controller.ledger
        controller.end_session()

    # ── Stage 4: Result Export ─────────────────────────────────────
    with stage_timer("Result Export"):
        output_dir = write_result(
            config, session.baseline, ledger,
            results_dir=results_dir, session_id=session_id,
        )

    figures: list[Path] = []
    report_path = None
    if report:
        # ── Stage 5: Visualization ─────────────────────────────────
        with stage_timer("Visualization"):
            figures = render_all(output_dir)

        # ── Stage 6: Reporting ─────────────────────────────────────
        with stage_timer("Reporting"):
            report_path = generate_session_report(output_dir)

    # ── Final Summary ──────────────────────────────────────────────
    summary = ledger.summary()
    total_elapsed = time.monotonic() - session_start
    print(f"\n{'=' * 60}")
    print(f"Session complete in {total_elapsed:.1f}s")
    print(f"  Session:       {output_dir.name}")
    print(f"  Avg Recursive: {summary['recursive_avg_ms']:.2f} ms "
          f"({summary['recursive_crashes']} crashes)")
    print(f"  Avg Iterative: {summary['iterative_avg_ms']:.2f} ms "
          f"({summary['iterative_crashes']} crashes)")
    print(f"  Result:        {output_dir / 'result.json'}")
    if report_path is not None:
        print(f"  Figures:       {len(figures)} files")
        print(f"  Report:        {report_path}")
    print(f"{'=' * 60}")

    return output_dir


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Compare recursive and iterative flood fill on a random grid"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to session config JSON file (defaults to the anchor config)",
    )
    parser.add_argument(
        "--results-dir",
        type=str,
        default="results",
        help="Base directory for session output",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the session plan without running it",
    )
    parser.add_argument(
        "--no-report",
        action="store_true",
        help="Skip figures and the HTML report",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable DEBUG-level logging",
    )
    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.config is None:
        config = ANCHOR_CONFIG
    else:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        try:
            config = config_from_json(config_path.read_text())
        except Exception as e:
            print(f"Error: invalid config {config_path}: {e}", file=sys.stderr)
            sys.exit(1)

    session_id = generate_session_id(config)
    print(f"Session ID:  {session_id}")
    print(f"Config hash: {full_config_hash(config)}")
    print(f"Grid hash:   {grid_config_hash(config)}")
    print()
    print(f"Grid:   {config.grid.label}, density={config.grid.density}")
    print(f"Run:    step_delay_ms={config.run.step_delay_ms}, "
          f"settle_delay_ms={config.run.settle_delay_ms}")
    print(f"Trials: {config.trials.n_trials} rounds of "
          f"{', '.join(config.trials.algorithms)}")
    print(f"Seed:   {config.seed}")

    if args.dry_run:
        print(f"\nSession plan for {session_id}:")
        print(f"  1. Generate {config.grid.label} grid (seed {config.seed})")
        print(f"  2. Freeze baseline and start session")
        print(f"  3. Run {config.trials.n_trials * len(config.trials.algorithms)} "
              f"trials and commit each")
        print(f"  4. Write result.json")
        if not args.no_report:
            print(f"  5. Render figures (PNG + SVG)")
            print(f"  6. Write report.html")
        print(f"\n[dry-run] Config loaded successfully. Exiting.")
        return

    try:
        run_session(
            config,
            results_dir=args.results_dir,
            report=not args.no_report,
            session_id=session_id,
        )
    except Exception:
        log.exception("Session failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
