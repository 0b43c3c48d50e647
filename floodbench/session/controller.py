"""Session controller: gates configuration edits against an active session.

In SETUP the grid parameters are editable and every change regenerates the
preview grid. start_session() freezes a copy of the preview as the baseline
shared by every trial; each run() clones that baseline into a private
working grid, so no two runs ever alias the same mutable grid.
"""

import logging
import threading
import time
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum

import numpy as np

from floodbench.config.experiment import GridConfig, RunConfig
from floodbench.grid.generator import generate_from_config
from floodbench.grid.validation import verify_fill
from floodbench.session.ledger import (
    InvalidTransitionError,
    TrialLedger,
    TrialRecord,
)
from floodbench.traversal.engine import ProgressCallback, run_fill
from floodbench.traversal.types import AlgorithmKind, Outcome, RunResult

log = logging.getLogger(__name__)


class SessionState(str, Enum):
    SETUP = "setup"
    ACTIVE = "active"


@dataclass
class Session:
    """A frozen baseline grid shared by all trials until the session ends."""

    baseline: np.ndarray
    grid_config: GridConfig
    started_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    active: bool = True


class SessionController:
    """State machine owning the preview grid, the session, and the ledger.

    Args:
        grid_config: Initial grid parameters.
        run_config: Pacing applied to every run.
        rng: numpy Generator used for preview generation.
    """

    def __init__(
        self,
        grid_config: GridConfig | None = None,
        run_config: RunConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.grid_config = grid_config or GridConfig()
        self.run_config = run_config or RunConfig()
        self._rng = rng if rng is not None else np.random.default_rng()
        self.ledger = TrialLedger()
        self.session: Session | None = None
        self.pending: RunResult | None = None
        self.is_running = False
        self._commit_lock = threading.Lock()
        self.grid = generate_from_config(self.grid_config, self._rng)

    @property
    def state(self) -> SessionState:
        if self.session is not None and self.session.active:
            return SessionState.ACTIVE
        return SessionState.SETUP

    def _require(self, state: SessionState, action: str) -> None:
        if self.state is not state:
            raise InvalidTransitionError(
                f"Cannot {action} in {self.state.value} state"
            )

    # ── Setup ─────────────────────────────────────────────────────────

    def configure(
        self,
        rows: int | None = None,
        cols: int | None = None,
        density: float | None = None,
    ) -> np.ndarray:
        """Change grid parameters and regenerate the preview.

        Raises:
            InvalidTransitionError: While a session is active.
            ValueError: If the new parameters are invalid.
        """
        self._require(SessionState.SETUP, "change grid parameters")
        changes = {
            k: v
            for k, v in (("rows", rows), ("cols", cols), ("density", density))
            if v is not None
        }
        self.grid_config = replace(self.grid_config, **changes)
        return self.regenerate()

    def regenerate(self) -> np.ndarray:
        """Re-roll the preview grid with the current parameters."""
        self._require(SessionState.SETUP, "regenerate the grid")
        self.grid = generate_from_config(self.grid_config, self._rng)
        return self.grid

    # ── Session lifecycle ─────────────────────────────────────────────

    def start_session(self) -> Session:
        """Freeze the preview as the baseline and start with an empty ledger."""
        self._require(SessionState.SETUP, "start a session")
        self.session = Session(
            baseline=self.grid.copy(), grid_config=self.grid_config
        )
        self.ledger.reset()
        self.pending = None
        log.info(
            "Session started on %s grid (density=%.2f)",
            self.grid_config.label,
            self.grid_config.density,
        )
        return self.session

    def end_session(self) -> np.ndarray:
        """Leave the session and restore the displayed grid to the baseline.

        The ledger is kept for inspection until the next start_session().
        """
        self._require(SessionState.ACTIVE, "end a session")
        if self.is_running:
            raise InvalidTransitionError("Cannot end a session during a run")
        self.pending = None
        self.session.active = False
        self.grid = self.session.baseline.copy()
        log.info("Session ended with %d committed trials", len(self.ledger))
        return self.grid

    # ── Runs ──────────────────────────────────────────────────────────

    def run(
        self,
        kind: AlgorithmKind | str,
        on_progress: ProgressCallback | None = None,
    ) -> RunResult:
        """Run one algorithm on a fresh copy of the baseline.

        The displayed grid becomes the working copy, so it shows the fill
        once the run returns.

        Raises:
            InvalidTransitionError: Outside a session or while another run
                is in progress.
        """
        kind = AlgorithmKind(kind)
        self._require(SessionState.ACTIVE, "run an algorithm")
        if self.is_running:
            raise InvalidTransitionError("A run is already in progress")

        self.is_running = True
        try:
            self.pending = None
            baseline = self.session.baseline
            self.grid = baseline.copy()

            if self.run_config.settle_delay_ms > 0:
                time.sleep(self.run_config.settle_delay_ms / 1000.0)

            result = run_fill(
                kind,
                self.grid,
                on_progress=on_progress,
                step_delay_ms=self.run_config.step_delay_ms,
                expected_shape=(self.grid_config.rows, self.grid_config.cols),
            )

            if result.outcome is Outcome.SUCCESS:
                errors = verify_fill(baseline, self.grid, kind.marker)
                for error in errors:
                    log.error("%s fill check failed: %s", kind.value, error)

            self.pending = result
        finally:
            self.is_running = False
        return result

    def commit(self) -> TrialRecord:
        """Commit the pending result and reset the displayed grid.

        The pending result is taken and cleared under a lock, so two racing
        commits promote it at most once; the loser sees no pending result.
        """
        self._require(SessionState.ACTIVE, "commit a result")
        with self._commit_lock:
            result, self.pending = self.pending, None
        record = self.ledger.commit(result)
        self.grid = self.session.baseline.copy()
        return record

    def discard(self) -> None:
        """Drop the pending result without recording it."""
        with self._commit_lock:
            result, self.pending = self.pending, None
        if result is None:
            raise InvalidTransitionError("No pending result to discard")
        log.debug("Discarded pending %s result", result.kind.value)
