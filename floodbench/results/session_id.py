"""Session ID generation with scannable parameter slug format."""

from datetime import datetime, timezone

from floodbench.config.experiment import ExperimentConfig


def generate_session_id(config: ExperimentConfig) -> str:
    """Generate a scannable session ID from config parameters.

    Format: g{rows}x{cols}_d{density}_s{seed}_{YYYYMMDD}_{HHMMSS}
    Example: g25x25_d0.20_s42_20261019_143012
    """
    ts = datetime.now(timezone.utc)
    return (
        f"g{config.grid.rows}x{config.grid.cols}"
        f"_d{config.grid.density:.2f}"
        f"_s{config.seed}"
        f"_{ts.strftime('%Y%m%d_%H%M%S')}"
    )
