from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class TaskTiming:
    start: float
    duration: float
    finish: float


@dataclass(frozen=True)
class RunResult:
    run_id: int
    total_duration: float
    task_durations: Mapping[str, float]
    task_start_times: Mapping[str, float]
    peak_resources: Mapping[str, float]  # every declared resource type, 0 if unused
    critical_path: tuple[str, ...] = ()

    def finish_time(self, task_id: str) -> float:
        return self.task_start_times[task_id] + self.task_durations[task_id]


@dataclass(frozen=True)
class ResourceStats:
    mean_peak: float
    p90_peak: float
    max_peak: float


@dataclass(frozen=True)
class CriticalPathCount:
    tasks: tuple[str, ...]
    count: int


@dataclass(frozen=True)
class SummaryStatistics:
    runs: int
    mean: float
    median: float
    std_dev: float
    min: float
    max: float
    p50: float
    p90: float
    p95: float
    p99: float
    resource_stats: dict[str, ResourceStats]
    top_critical_paths: tuple[CriticalPathCount, ...] = ()
