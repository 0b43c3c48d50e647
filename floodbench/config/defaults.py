"""Anchor configuration: the default parameters for a session."""

from floodbench.config.experiment import ExperimentConfig

# All-default values: 25x25 grid, no walls, unpaced runs, 5 rounds, seed=42.
ANCHOR_CONFIG = ExperimentConfig()
