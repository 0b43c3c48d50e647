"""Tests for the session configuration system."""

import json

import pytest
from dacite import UnexpectedDataError
from dataclasses import FrozenInstanceError, replace

from floodbench.config import (
    ALGORITHM_NAMES,
    ANCHOR_CONFIG,
    ExperimentConfig,
    GridConfig,
    RunConfig,
    TrialConfig,
    config_from_dict,
    config_from_json,
    config_hash,
    config_to_dict,
    config_to_json,
    full_config_hash,
    grid_config_hash,
)


class TestAnchorConfigDefaults:
    """ANCHOR_CONFIG has the default session values."""

    def test_anchor_config_defaults(self):
        assert ANCHOR_CONFIG.grid.rows == 25
        assert ANCHOR_CONFIG.grid.cols == 25
        assert ANCHOR_CONFIG.grid.density == 0.0
        assert ANCHOR_CONFIG.run.step_delay_ms == 0
        assert ANCHOR_CONFIG.run.settle_delay_ms == 0
        assert ANCHOR_CONFIG.trials.n_trials == 5
        assert ANCHOR_CONFIG.trials.algorithms == ALGORITHM_NAMES
        assert ANCHOR_CONFIG.seed == 42

    def test_grid_label(self):
        assert GridConfig(rows=10, cols=30).label == "10x30"


class TestConfigImmutability:
    """Frozen dataclasses prevent mutation."""

    def test_config_frozen(self):
        with pytest.raises(FrozenInstanceError):
            ANCHOR_CONFIG.seed = 99  # type: ignore[misc]

    def test_grid_config_frozen(self):
        with pytest.raises(FrozenInstanceError):
            ANCHOR_CONFIG.grid.rows = 50  # type: ignore[misc]


class TestConfigValidation:
    """Invalid parameters are rejected at construction."""

    @pytest.mark.parametrize("rows,cols", [(0, 10), (10, 0), (-3, 5)])
    def test_non_positive_dimensions(self, rows, cols):
        with pytest.raises(ValueError):
            GridConfig(rows=rows, cols=cols)

    @pytest.mark.parametrize("density", [-0.1, 1.5])
    def test_density_out_of_range(self, density):
        with pytest.raises(ValueError, match="density"):
            GridConfig(density=density)

    def test_density_bounds_accepted(self):
        assert GridConfig(density=0.0).density == 0.0
        assert GridConfig(density=1.0).density == 1.0

    def test_negative_delays(self):
        with pytest.raises(ValueError, match="step_delay_ms"):
            RunConfig(step_delay_ms=-1)
        with pytest.raises(ValueError, match="settle_delay_ms"):
            RunConfig(settle_delay_ms=-5)

    def test_zero_trials(self):
        with pytest.raises(ValueError, match="n_trials"):
            ExperimentConfig(trials=TrialConfig(n_trials=0))

    def test_empty_algorithms(self):
        with pytest.raises(ValueError, match="at least one"):
            ExperimentConfig(trials=TrialConfig(algorithms=()))

    def test_unknown_algorithm(self):
        with pytest.raises(ValueError, match="Unknown algorithms"):
            ExperimentConfig(trials=TrialConfig(algorithms=("Recursive", "AStar")))


class TestConfigRoundTrip:
    """JSON serialization round-trip preserves identity."""

    def test_json_round_trip(self):
        config = ExperimentConfig(
            grid=GridConfig(rows=40, cols=12, density=0.3),
            run=RunConfig(step_delay_ms=5, settle_delay_ms=200),
            trials=TrialConfig(n_trials=3, algorithms=("Iterative",)),
            seed=7,
            description="narrow corridor",
            tags=("a", "b"),
        )
        restored = config_from_json(config_to_json(config))
        assert restored == config
        assert isinstance(restored.tags, tuple)
        assert isinstance(restored.trials.algorithms, tuple)

    def test_dict_round_trip(self):
        assert config_from_dict(config_to_dict(ANCHOR_CONFIG)) == ANCHOR_CONFIG

    def test_json_sorted_keys(self):
        parsed = json.loads(config_to_json(ANCHOR_CONFIG))
        assert list(parsed.keys()) == sorted(parsed.keys())

    def test_missing_sections_use_defaults(self):
        config = config_from_json('{"seed": 3}')
        assert config.seed == 3
        assert config.grid == GridConfig()
        assert config.run == RunConfig()

    def test_integer_density_accepted(self):
        config = config_from_json('{"grid": {"rows": 8, "cols": 8, "density": 0}}')
        assert config.grid.density == 0.0

    def test_unknown_key_rejected(self):
        with pytest.raises(UnexpectedDataError):
            config_from_json('{"grid": {"rows": 8, "walls": 3}}')

    def test_invalid_values_rejected_on_load(self):
        with pytest.raises(ValueError):
            config_from_json('{"grid": {"rows": 8, "cols": 8, "density": 2.0}}')


class TestConfigHashing:
    """Hashes are deterministic and scoped."""

    def test_hash_is_deterministic(self):
        assert full_config_hash(ANCHOR_CONFIG) == full_config_hash(ExperimentConfig())
        assert len(full_config_hash(ANCHOR_CONFIG)) == 16

    def test_hash_changes_with_seed(self):
        other = replace(ANCHOR_CONFIG, seed=43)
        assert full_config_hash(other) != full_config_hash(ANCHOR_CONFIG)
        assert grid_config_hash(other) != grid_config_hash(ANCHOR_CONFIG)

    def test_grid_hash_ignores_pacing_and_trials(self):
        other = replace(
            ANCHOR_CONFIG,
            run=RunConfig(step_delay_ms=10),
            trials=TrialConfig(n_trials=2),
            description="slow",
        )
        assert grid_config_hash(other) == grid_config_hash(ANCHOR_CONFIG)
        assert full_config_hash(other) != full_config_hash(ANCHOR_CONFIG)

    def test_exclude_fields(self):
        a = replace(ANCHOR_CONFIG, description="one")
        b = replace(ANCHOR_CONFIG, description="two")
        assert config_hash(a) != config_hash(b)
        assert config_hash(a, exclude_fields=["description"]) == config_hash(
            b, exclude_fields=["description"]
        )
