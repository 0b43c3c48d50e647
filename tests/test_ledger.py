"""Tests for the trial ledger and its aggregates."""

import threading

import pytest

from floodbench.session import InvalidTransitionError, TrialLedger
from floodbench.traversal import AlgorithmKind, Outcome, RunResult

_ids = iter(range(1, 10_000))


def _result(kind, elapsed_ms=10.0, outcome=Outcome.SUCCESS, cells=25):
    return RunResult(
        run_id=next(_ids),
        kind=AlgorithmKind(kind),
        elapsed_ms=elapsed_ms,
        outcome=outcome,
        grid_label="5x5",
        cells_filled=cells,
    )


class TestCommit:
    """Trial numbering on commit."""

    def test_numbers_per_kind(self):
        ledger = TrialLedger()
        a = ledger.commit(_result("Recursive"))
        b = ledger.commit(_result("Recursive"))
        c = ledger.commit(_result("Iterative"))
        assert (a.trial_number, b.trial_number, c.trial_number) == (1, 2, 1)
        assert len(ledger) == 3

    def test_record_copies_result_fields(self):
        ledger = TrialLedger()
        result = _result("Iterative", elapsed_ms=4.5, cells=12)
        record = ledger.commit(result)
        assert record.run_id == result.run_id
        assert record.kind is AlgorithmKind.ITERATIVE
        assert record.elapsed_ms == 4.5
        assert record.cells_filled == 12
        assert record.grid_label == "5x5"

    def test_commit_without_pending_raises(self):
        ledger = TrialLedger()
        with pytest.raises(InvalidTransitionError):
            ledger.commit(None)
        assert len(ledger) == 0

    def test_same_run_committed_twice_rejected(self):
        ledger = TrialLedger()
        result = _result("Recursive")
        ledger.commit(result)
        with pytest.raises(InvalidTransitionError, match="already committed"):
            ledger.commit(result)
        assert len(ledger) == 1
        assert ledger.count("Recursive") == 1

    def test_reset_restarts_numbering(self):
        ledger = TrialLedger()
        ledger.commit(_result("Recursive"))
        ledger.reset()
        assert len(ledger) == 0
        assert ledger.commit(_result("Recursive")).trial_number == 1

    def test_concurrent_commits_get_unique_numbers(self):
        ledger = TrialLedger()
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            for _ in range(25):
                ledger.commit(_result("Iterative"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        numbers = sorted(r.trial_number for r in ledger.records)
        assert numbers == list(range(1, 201))

    def test_record_to_dict(self):
        ledger = TrialLedger()
        d = ledger.commit(_result("Recursive", outcome=Outcome.CRASH)).to_dict()
        assert d["kind"] == "Recursive"
        assert d["outcome"] == "Crash"
        assert d["trial_number"] == 1


class TestAggregates:
    """Averages, paired series, sorted view, summary."""

    def test_average_empty(self):
        ledger = TrialLedger()
        assert ledger.average(AlgorithmKind.RECURSIVE) == 0.0
        assert ledger.average(AlgorithmKind.ITERATIVE) == 0.0

    def test_average_excludes_crashes(self):
        ledger = TrialLedger()
        ledger.commit(_result("Recursive", 10.0))
        ledger.commit(_result("Recursive", 20.0))
        ledger.commit(_result("Recursive", 99.0, Outcome.CRASH))
        assert ledger.average("Recursive") == pytest.approx(15.0)

    def test_average_all_crashed(self):
        ledger = TrialLedger()
        ledger.commit(_result("Recursive", 3.0, Outcome.CRASH))
        assert ledger.average("Recursive") == 0.0

    def test_paired_series_gap_and_crash(self):
        ledger = TrialLedger()
        ledger.commit(_result("Recursive", 5.0))
        ledger.commit(_result("Iterative", 3.0))
        ledger.commit(_result("Recursive", 7.0, Outcome.CRASH))

        series = ledger.paired_series()
        assert series.labels == ["Test 1", "Test 2"]
        assert series.recursive == [5.0, 0.0]
        assert series.iterative == [3.0, None]

    def test_paired_series_empty(self):
        series = TrialLedger().paired_series()
        assert series.labels == []
        assert series.recursive == []
        assert series.iterative == []

    def test_sorted_view_tie_order(self):
        ledger = TrialLedger()
        ledger.commit(_result("Iterative"))
        ledger.commit(_result("Iterative"))
        ledger.commit(_result("Recursive"))
        view = [(r.trial_number, r.kind.value) for r in ledger.sorted_view()]
        assert view == [(1, "Recursive"), (1, "Iterative"), (2, "Iterative")]

    def test_records_in_commit_order(self):
        ledger = TrialLedger()
        ledger.commit(_result("Iterative"))
        ledger.commit(_result("Recursive"))
        kinds = [r.kind.value for r in ledger.records]
        assert kinds == ["Iterative", "Recursive"]

    def test_summary(self):
        ledger = TrialLedger()
        ledger.commit(_result("Recursive", 4.0))
        ledger.commit(_result("Recursive", 1.0, Outcome.CRASH))
        ledger.commit(_result("Iterative", 2.0))
        summary = ledger.summary()
        assert summary["n_trials"] == 3
        assert summary["recursive_count"] == 2
        assert summary["recursive_crashes"] == 1
        assert summary["recursive_avg_ms"] == pytest.approx(4.0)
        assert summary["iterative_count"] == 1
        assert summary["iterative_crashes"] == 0
        assert summary["iterative_avg_ms"] == pytest.approx(2.0)
