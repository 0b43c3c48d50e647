"""Session lifecycle and trial bookkeeping."""

from floodbench.session.controller import Session, SessionController, SessionState
from floodbench.session.ledger import (
    InvalidTransitionError,
    PairedSeries,
    TrialLedger,
    TrialRecord,
)

__all__ = [
    "InvalidTransitionError",
    "PairedSeries",
    "Session",
    "SessionController",
    "SessionState",
    "TrialLedger",
    "TrialRecord",
]
