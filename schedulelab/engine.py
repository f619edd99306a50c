from __future__ import annotations

# One Monte Carlo run: sample, forward pass, resource sweep.

from dataclasses import dataclass
from types import MappingProxyType

from schedulelab.model import Project, TaskDef
from schedulelab.resources import peak_usage
from schedulelab.sampling import UniformSource, sample_triangular
from schedulelab.schedule import critical_path, forward_pass
from schedulelab.types import RunResult


@dataclass(frozen=True)
class BatchContext:
    """Read-only inputs shared by every run of a batch."""

    project: Project
    order: tuple[str, ...]
    tasks_by_id: dict[str, TaskDef]
    resource_types: tuple[str, ...]

    @staticmethod
    def build(project: Project, order: list[str]) -> "BatchContext":
        return BatchContext(
            project=project,
            order=tuple(order),
            tasks_by_id=project.task_by_id(),
            resource_types=project.resource_types(),
        )


def sample_durations(project: Project, rng: UniformSource) -> dict[str, float]:
    # Input order keeps the draw sequence stable for a given generator.
    return {
        t.id: sample_triangular(rng, t.optimistic, t.most_likely, t.pessimistic)
        for t in project.tasks
    }


def simulate_one(
    *, context: BatchContext, run_id: int, rng: UniformSource
) -> RunResult:
    durations = sample_durations(context.project, rng)
    order = list(context.order)
    schedule = forward_pass(
        tasks=context.tasks_by_id, order=order, durations=durations
    )
    peaks = peak_usage(
        tasks=context.project.tasks,
        timings=schedule.timings,
        resource_types=context.resource_types,
    )
    path = critical_path(tasks=context.tasks_by_id, order=order, schedule=schedule)

    return RunResult(
        run_id=run_id,
        total_duration=float(schedule.total_duration),
        task_durations=MappingProxyType(durations),
        task_start_times=MappingProxyType(schedule.start_times()),
        peak_resources=MappingProxyType(peaks),
        critical_path=path,
    )
