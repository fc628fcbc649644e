"""Run parameters and their defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigurationError
from .grid import check_dimensions
from .patterns import PATTERNS
from .strategies import Implementation

DEFAULT_DENSITY = 0.5
DEFAULT_OUTPUT_DIR = "."

BENCHMARK_SIZES = [16, 32, 64, 128]
BENCHMARK_GENERATIONS = 10
BENCHMARK_SEED = 42
BENCHMARK_CSV = "benchmark_results.csv"


@dataclass
class SimulationConfig:
    width: int
    height: int
    iterations: int
    implementation: Implementation
    seed_path: Path | None = None
    pattern: str | None = None
    density: float = DEFAULT_DENSITY
    random_seed: int | None = None
    workers: int | None = None
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    write_output: bool = True

    def __post_init__(self):
        self.implementation = Implementation.from_name(self.implementation)
        if self.seed_path is not None:
            self.seed_path = Path(self.seed_path)
        self.output_dir = Path(self.output_dir)
        self.validate()

    def validate(self) -> None:
        """Raise ConfigurationError for any unusable parameter."""
        check_dimensions(self.width, self.height)
        if isinstance(self.iterations, bool) or not isinstance(self.iterations, int) \
                or self.iterations < 0:
            raise ConfigurationError(
                f"iterations must be a non-negative integer, got {self.iterations!r}"
            )
        if not 0.0 <= self.density <= 1.0:
            raise ConfigurationError(f"density must be within [0, 1], got {self.density}")
        if self.workers is not None and self.workers < 1:
            raise ConfigurationError(f"workers must be at least 1, got {self.workers}")
        if self.seed_path is not None and self.pattern is not None:
            raise ConfigurationError("a seed file and a pattern cannot be combined")
        if self.pattern is not None and self.pattern not in PATTERNS:
            raise ConfigurationError(
                f"Unknown pattern {self.pattern!r}. Choose from: {', '.join(sorted(PATTERNS))}"
            )
