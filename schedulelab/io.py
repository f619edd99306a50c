from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any

from schedulelab.metrics import summary_to_dict
from schedulelab.model import Project
from schedulelab.types import RunResult, SummaryStatistics


def read_project_json(path: Path) -> Project:
    raw = json.loads(path.read_text(encoding="utf-8"))
    return Project.from_json(raw)


def write_summary_json(
    path: Path, stats: SummaryStatistics, *, extra: dict[str, Any] | None = None
) -> None:
    summary = summary_to_dict(stats)
    if extra:
        summary.update(extra)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(summary, indent=2, sort_keys=True), encoding="utf-8")


def write_runs_csv(path: Path, runs: list[RunResult], *, project: Project) -> None:
    resource_types = project.resource_types()
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(
            ["run_id", "total_duration", "critical_path"]
            + [f"peak_{rt}" for rt in resource_types]
        )
        for r in runs:
            w.writerow(
                [r.run_id, r.total_duration, ">".join(r.critical_path)]
                + [r.peak_resources.get(rt, 0.0) for rt in resource_types]
            )


def write_schedule_csv(path: Path, run: RunResult, *, project: Project) -> None:
    """One row per task for a single run, ordered by start time."""
    rows = sorted(
        project.tasks, key=lambda t: (run.task_start_times[t.id], t.id)
    )
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(
            [
                "run_id",
                "task_id",
                "name",
                "start",
                "duration",
                "finish",
                "resource_type",
                "resource_count",
            ]
        )
        for t in rows:
            w.writerow(
                [
                    run.run_id,
                    t.id,
                    t.name,
                    run.task_start_times[t.id],
                    run.task_durations[t.id],
                    run.finish_time(t.id),
                    t.resource_type or "",
                    "" if t.resource_count is None else t.resource_count,
                ]
            )
