"""Session configuration dataclasses, all frozen and slotted."""

from dataclasses import dataclass, field

# Algorithm names as they appear in config files and trial records.
ALGORITHM_NAMES = ("Recursive", "Iterative")


@dataclass(frozen=True, slots=True)
class GridConfig:
    """Occupancy grid generation parameters.

    Validated on construction so a session controller can build one per
    parameter change and reject bad values before regenerating the preview.
    """

    rows: int = 25
    cols: int = 25
    density: float = 0.0  # wall probability per cell, origin excluded

    def __post_init__(self) -> None:
        if self.rows <= 0:
            raise ValueError(f"rows must be > 0, got {self.rows}")
        if self.cols <= 0:
            raise ValueError(f"cols must be > 0, got {self.cols}")
        if not 0.0 <= self.density <= 1.0:
            raise ValueError(
                f"density must be in [0, 1], got {self.density}"
            )

    @property
    def label(self) -> str:
        return f"{self.rows}x{self.cols}"


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Per-run pacing parameters."""

    step_delay_ms: int = 0  # animation pause after each marked cell
    settle_delay_ms: int = 0  # untimed pause before a run starts

    def __post_init__(self) -> None:
        if self.step_delay_ms < 0:
            raise ValueError(
                f"step_delay_ms must be >= 0, got {self.step_delay_ms}"
            )
        if self.settle_delay_ms < 0:
            raise ValueError(
                f"settle_delay_ms must be >= 0, got {self.settle_delay_ms}"
            )


@dataclass(frozen=True, slots=True)
class TrialConfig:
    """Batch trial plan used by the command-line runner."""

    n_trials: int = 5  # rounds; each round runs every listed algorithm once
    algorithms: tuple[str, ...] = ALGORITHM_NAMES


@dataclass(frozen=True, slots=True)
class ExperimentConfig:
    """Top-level configuration composing all sub-configs.

    All fields are frozen and typed. Cross-parameter validation runs
    in __post_init__ to reject invalid configurations early.
    """

    grid: GridConfig = field(default_factory=GridConfig)
    run: RunConfig = field(default_factory=RunConfig)
    trials: TrialConfig = field(default_factory=TrialConfig)
    seed: int = 42
    description: str = ""
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.trials.n_trials < 1:
            raise ValueError(
                f"n_trials must be >= 1, got {self.trials.n_trials}"
            )
        if not self.trials.algorithms:
            raise ValueError("algorithms must name at least one algorithm")
        unknown = [
            a for a in self.trials.algorithms if a not in ALGORITHM_NAMES
        ]
        if unknown:
            raise ValueError(
                f"Unknown algorithms {unknown}; "
                f"expected a subset of {list(ALGORITHM_NAMES)}"
            )
