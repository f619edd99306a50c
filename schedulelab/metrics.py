from __future__ import annotations

import math
from collections import Counter
from collections.abc import Sequence
from typing import Any

import numpy as np

from schedulelab.config import (
    PERCENTILES,
    RESOURCE_PEAK_PERCENTILE,
    TOP_CRITICAL_PATHS,
)
from schedulelab.model import Project
from schedulelab.types import (
    CriticalPathCount,
    ResourceStats,
    RunResult,
    SummaryStatistics,
)


def _index_for(n: int, p: float) -> int:
    # Sorted-index truncation, clamped so p=1.0 maps to the maximum.
    return min(max(int(math.floor(n * p)), 0), n - 1)


def percentile_sorted(values_sorted: Sequence[float], p: float) -> float:
    """Element at index floor(n*p) of an ascending sequence (NaN if empty)."""
    n = len(values_sorted)
    if n == 0:
        return math.nan
    return float(values_sorted[_index_for(n, p)])


def _resource_stats(peaks: np.ndarray) -> ResourceStats:
    if peaks.size == 0:
        return ResourceStats(mean_peak=math.nan, p90_peak=math.nan, max_peak=math.nan)
    peaks = np.sort(peaks)
    return ResourceStats(
        mean_peak=float(peaks.sum() / peaks.size),
        p90_peak=percentile_sorted(peaks, RESOURCE_PEAK_PERCENTILE),
        max_peak=float(peaks[-1]),
    )


def _top_critical_paths(runs: Sequence[RunResult]) -> tuple[CriticalPathCount, ...]:
    counts = Counter(r.critical_path for r in runs if r.critical_path)
    ranked = sorted(counts, key=lambda p: (-counts[p], p))[:TOP_CRITICAL_PATHS]
    return tuple(CriticalPathCount(tasks=p, count=counts[p]) for p in ranked)


def aggregate_runs(
    *, project: Project, runs: Sequence[RunResult]
) -> SummaryStatistics:
    durations = np.sort(np.asarray([r.total_duration for r in runs], dtype=float))
    n = int(durations.size)

    if n:
        mean = float(durations.sum() / n)
        # Population standard deviation (divide by n).
        std_dev = float(math.sqrt(float(((durations - mean) ** 2).sum()) / n))
        lo, hi = float(durations[0]), float(durations[-1])
    else:
        mean = std_dev = lo = hi = math.nan

    median = percentile_sorted(durations, 0.5)
    named = {p: percentile_sorted(durations, p) for p in PERCENTILES}

    resource_stats = {
        rtype: _resource_stats(
            np.asarray([r.peak_resources.get(rtype, 0.0) for r in runs], dtype=float)
        )
        for rtype in project.resource_types()
    }

    return SummaryStatistics(
        runs=n,
        mean=mean,
        median=median,
        std_dev=std_dev,
        min=lo,
        max=hi,
        p50=named[0.5],
        p90=named[0.9],
        p95=named[0.95],
        p99=named[0.99],
        resource_stats=resource_stats,
        top_critical_paths=_top_critical_paths(runs),
    )


def representative_run(runs: Sequence[RunResult], p: float) -> RunResult | None:
    """Run sitting at index floor(n*p) once runs are ordered by duration."""
    if not runs:
        return None
    ordered = sorted(runs, key=lambda r: (r.total_duration, r.run_id))
    return ordered[_index_for(len(ordered), p)]


def summary_to_dict(stats: SummaryStatistics) -> dict[str, Any]:
    return {
        "runs": stats.runs,
        "duration": {
            "mean": stats.mean,
            "median": stats.median,
            "std_dev": stats.std_dev,
            "min": stats.min,
            "max": stats.max,
            "p50": stats.p50,
            "p90": stats.p90,
            "p95": stats.p95,
            "p99": stats.p99,
        },
        "resources": {
            rtype: {
                "mean_peak": rs.mean_peak,
                "p90_peak": rs.p90_peak,
                "max_peak": rs.max_peak,
            }
            for rtype, rs in stats.resource_stats.items()
        },
        "critical_path": {
            "top_paths": [
                {"tasks": ">".join(cp.tasks), "count": cp.count}
                for cp in stats.top_critical_paths
            ]
        },
    }
