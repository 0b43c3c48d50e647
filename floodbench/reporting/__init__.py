"""Self-contained HTML report generation for flood-fill sessions."""

from floodbench.reporting.single import figure_data_uri, generate_session_report

__all__ = [
    "figure_data_uri",
    "generate_session_report",
]
