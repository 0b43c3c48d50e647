"""Trial ledger: ordered trial records and the aggregates derived from them.

Committing a pending RunResult promotes it to an immutable TrialRecord with
a per-algorithm trial number. Averages only count successful runs; crashed
runs stay in the sequence and in the counts.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any

from floodbench.traversal.types import AlgorithmKind, Outcome, RunResult

log = logging.getLogger(__name__)


class InvalidTransitionError(RuntimeError):
    """Raised when a session or ledger operation is called in the wrong state."""


@dataclass(frozen=True, slots=True)
class TrialRecord:
    """One committed run. Never mutated after creation."""

    run_id: int
    kind: AlgorithmKind
    elapsed_ms: float
    outcome: Outcome
    grid_label: str
    cells_filled: int
    trial_number: int  # 1-based, sequential per algorithm kind

    def to_dict(self) -> dict[str, Any]:
        """Plain-JSON form used by the result writer."""
        return {
            "run_id": self.run_id,
            "kind": self.kind.value,
            "elapsed_ms": self.elapsed_ms,
            "outcome": self.outcome.value,
            "grid_label": self.grid_label,
            "cells_filled": self.cells_filled,
            "trial_number": self.trial_number,
        }


@dataclass(frozen=True)
class PairedSeries:
    """Per-trial-number values for both algorithms, aligned for charting.

    A None slot means no record of that kind carries that trial number;
    a crashed record reports 0.0.
    """

    labels: list[str]
    recursive: list[float | None]
    iterative: list[float | None]


class TrialLedger:
    """Ordered collection of TrialRecords for one session."""

    def __init__(self) -> None:
        self._records: list[TrialRecord] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> tuple[TrialRecord, ...]:
        """Records in commit order."""
        return tuple(self._records)

    def count(self, kind: AlgorithmKind | str) -> int:
        kind = AlgorithmKind(kind)
        return sum(1 for r in self._records if r.kind is kind)

    def commit(self, result: RunResult | None) -> TrialRecord:
        """Promote a pending result to a numbered TrialRecord.

        Trial number assignment and append happen under one lock, so two
        concurrent commits of the same kind never receive the same number
        and a run is never recorded twice.

        Raises:
            InvalidTransitionError: If there is no pending result, or the
                result's run_id is already recorded.
        """
        if result is None:
            raise InvalidTransitionError("No pending result to commit")

        with self._lock:
            if any(r.run_id == result.run_id for r in self._records):
                raise InvalidTransitionError(
                    f"Run {result.run_id} is already committed"
                )
            trial_number = self.count(result.kind) + 1
            record = TrialRecord(
                run_id=result.run_id,
                kind=result.kind,
                elapsed_ms=result.elapsed_ms,
                outcome=result.outcome,
                grid_label=result.grid_label,
                cells_filled=result.cells_filled,
                trial_number=trial_number,
            )
            self._records.append(record)

        log.info(
            "Committed %s #%d (%s, %.2f ms)",
            record.kind.value,
            record.trial_number,
            record.outcome.value,
            record.elapsed_ms,
        )
        return record

    def reset(self) -> None:
        with self._lock:
            self._records.clear()

    def average(self, kind: AlgorithmKind | str) -> float:
        """Mean elapsed_ms over successful records of ``kind``; 0.0 if none."""
        kind = AlgorithmKind(kind)
        times = [
            r.elapsed_ms
            for r in self._records
            if r.kind is kind and r.outcome is Outcome.SUCCESS
        ]
        if not times:
            return 0.0
        return sum(times) / len(times)

    def _series_for(
        self, kind: AlgorithmKind, length: int
    ) -> list[float | None]:
        by_number = {
            r.trial_number: r for r in self._records if r.kind is kind
        }
        values: list[float | None] = []
        for n in range(1, length + 1):
            record = by_number.get(n)
            if record is None:
                values.append(None)
            elif record.outcome is Outcome.CRASH:
                values.append(0.0)
            else:
                values.append(record.elapsed_ms)
        return values

    def paired_series(self) -> PairedSeries:
        """Both algorithms' values indexed by trial number 1..max count."""
        length = max(
            self.count(AlgorithmKind.RECURSIVE),
            self.count(AlgorithmKind.ITERATIVE),
        )
        return PairedSeries(
            labels=[f"Test {n}" for n in range(1, length + 1)],
            recursive=self._series_for(AlgorithmKind.RECURSIVE, length),
            iterative=self._series_for(AlgorithmKind.ITERATIVE, length),
        )

    def sorted_view(self) -> list[TrialRecord]:
        """Records by trial number; Recursive before Iterative on ties."""
        order = {AlgorithmKind.RECURSIVE: 0, AlgorithmKind.ITERATIVE: 1}
        return sorted(
            self._records, key=lambda r: (r.trial_number, order[r.kind])
        )

    def summary(self) -> dict[str, Any]:
        """Scalar aggregates keyed for the result file and report."""
        scalars: dict[str, Any] = {"n_trials": len(self._records)}
        for kind in AlgorithmKind:
            key = kind.value.lower()
            scalars[f"{key}_count"] = self.count(kind)
            scalars[f"{key}_crashes"] = sum(
                1
                for r in self._records
                if r.kind is kind and r.outcome is Outcome.CRASH
            )
            scalars[f"{key}_avg_ms"] = self.average(kind)
        return scalars
