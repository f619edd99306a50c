from __future__ import annotations

from dataclasses import dataclass

from schedulelab.model import TaskDef
from schedulelab.types import TaskTiming


@dataclass(frozen=True)
class Schedule:
    timings: dict[str, TaskTiming]
    total_duration: float

    def start_times(self) -> dict[str, float]:
        return {k: v.start for k, v in self.timings.items()}


def forward_pass(
    *,
    tasks: dict[str, TaskDef],
    order: list[str],
    durations: dict[str, float],
) -> Schedule:
    """Earliest start/finish for every task, processed in topological order."""

    finish: dict[str, float] = {}
    timings: dict[str, TaskTiming] = {}
    total = 0.0

    for task_id in order:
        start = 0.0
        for dep in tasks[task_id].dependencies:
            if dep not in finish:
                raise AssertionError(
                    f"dependency '{dep}' of '{task_id}' has no finish time; "
                    "order is not topological"
                )
            start = max(start, finish[dep])

        duration = durations[task_id]
        end = start + duration
        finish[task_id] = end
        timings[task_id] = TaskTiming(start=start, duration=duration, finish=end)
        if end > total:
            total = end

    return Schedule(timings=timings, total_duration=total)


def critical_path(
    *, tasks: dict[str, TaskDef], order: list[str], schedule: Schedule
) -> tuple[str, ...]:
    """Back-chain from the latest-finishing task through binding dependencies.

    Ties on the final task go to the earliest in topological order; ties on a
    binding dependency go to the first listed.
    """

    if not order:
        return ()

    timings = schedule.timings
    cur: str | None = None
    for task_id in order:
        if cur is None or timings[task_id].finish > timings[cur].finish:
            cur = task_id

    path: list[str] = []
    while cur is not None:
        path.append(cur)
        start = timings[cur].start
        nxt: str | None = None
        for dep in tasks[cur].dependencies:
            if timings[dep].finish == start:
                nxt = dep
                break
        cur = nxt

    path.reverse()
    return tuple(path)
