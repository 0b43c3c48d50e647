"""Session result schema validation, writing, and session ID generation."""

from floodbench.results.schema import (
    build_result,
    load_result,
    validate_result,
    write_result,
)
from floodbench.results.session_id import generate_session_id

__all__ = [
    "build_result",
    "validate_result",
    "write_result",
    "load_result",
    "generate_session_id",
]
