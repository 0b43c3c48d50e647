"""Deterministic config hashing using SHA-256 over sorted JSON."""

import hashlib
import json
from dataclasses import asdict
from typing import Any

from floodbench.config.experiment import ExperimentConfig


def config_hash(config: Any, exclude_fields: list[str] | None = None) -> str:
    """Deterministic SHA-256 hash of a config dataclass.

    Args:
        config: Any dataclass instance (or sub-config).
        exclude_fields: Optional top-level field names to leave out.

    Returns:
        First 16 hex characters of the SHA-256 hash.
    """
    d = asdict(config)
    for name in exclude_fields or []:
        d.pop(name, None)
    serialized = json.dumps(
        d,
        sort_keys=True,
        ensure_ascii=True,
        separators=(",", ":"),
    )
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()[:16]


def grid_config_hash(config: ExperimentConfig) -> str:
    """Hash identifying the baseline grid a config produces.

    Covers the grid parameters and the seed only, so two configs that differ
    in pacing, trial plan or description share a grid hash.
    """
    payload = {"grid": asdict(config.grid), "seed": config.seed}
    serialized = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()[:16]


def full_config_hash(config: ExperimentConfig) -> str:
    """Hash of the whole config, seed and pacing included."""
    return config_hash(config)
