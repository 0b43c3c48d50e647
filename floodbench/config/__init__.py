"""Session configuration system with frozen, hashable, serializable dataclasses."""

from floodbench.config.experiment import (
    ALGORITHM_NAMES,
    ExperimentConfig,
    GridConfig,
    RunConfig,
    TrialConfig,
)
from floodbench.config.defaults import ANCHOR_CONFIG
from floodbench.config.hashing import config_hash, grid_config_hash, full_config_hash
from floodbench.config.serialization import (
    config_from_dict,
    config_from_json,
    config_to_dict,
    config_to_json,
)

__all__ = [
    "ALGORITHM_NAMES",
    "ExperimentConfig",
    "GridConfig",
    "RunConfig",
    "TrialConfig",
    "ANCHOR_CONFIG",
    "config_hash",
    "grid_config_hash",
    "full_config_hash",
    "config_to_json",
    "config_from_json",
    "config_to_dict",
    "config_from_dict",
]
