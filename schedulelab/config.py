from __future__ import annotations

from dataclasses import dataclass

DEFAULT_ITERATIONS = 2000
DEFAULT_WORKERS = 1

# Named duration percentiles reported in the summary.
PERCENTILES = (0.5, 0.9, 0.95, 0.99)
RESOURCE_PEAK_PERCENTILE = 0.9

TOP_CRITICAL_PATHS = 10

# Optimistic / median / pessimistic runs for schedule exports.
REPRESENTATIVE_PERCENTILES = {"optimistic": 0.05, "median": 0.5, "pessimistic": 0.95}


@dataclass(frozen=True)
class SimulationSettings:
    iterations: int = DEFAULT_ITERATIONS
    seed: int | None = None
    workers: int = DEFAULT_WORKERS

    def __post_init__(self) -> None:
        if self.iterations < 1:
            raise ValueError(f"iterations must be >= 1 (got {self.iterations})")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1 (got {self.workers})")
