from __future__ import annotations

import math

from schedulelab.model import Project, TaskDef


class ProjectValidationError(ValueError):
    pass


class DuplicateTaskIdError(ProjectValidationError):
    def __init__(self, task_id: str) -> None:
        super().__init__(f"duplicate task id '{task_id}'")
        self.task_id = task_id


class InvalidEstimateError(ProjectValidationError):
    def __init__(self, task_id: str, reason: str) -> None:
        super().__init__(f"task '{task_id}' {reason}")
        self.task_id = task_id


class UnknownDependencyError(ProjectValidationError):
    def __init__(self, task_id: str, dependency: str) -> None:
        super().__init__(
            f"task '{task_id}' depends on unknown task '{dependency}'"
        )
        self.task_id = task_id
        self.dependency = dependency


class CyclicDependencyError(ProjectValidationError):
    def __init__(self, task_id: str) -> None:
        super().__init__(f"circular dependency detected at task '{task_id}'")
        self.task_id = task_id


_UNVISITED = 0
_IN_PROGRESS = 1
_FINISHED = 2


def _check_estimates(task: TaskDef) -> None:
    o, m, p = task.optimistic, task.most_likely, task.pessimistic
    if not all(math.isfinite(v) for v in (o, m, p)):
        raise InvalidEstimateError(task.id, "has a non-finite duration estimate")
    if min(o, m, p) < 0:
        raise InvalidEstimateError(task.id, "has a negative duration estimate")
    if not (o <= m <= p):
        raise InvalidEstimateError(
            task.id,
            (
                "estimates must satisfy optimistic <= mostLikely <= pessimistic "
                f"(got {o}, {m}, {p})"
            ),
        )
    if task.resource_count is not None and not math.isfinite(task.resource_count):
        raise InvalidEstimateError(
            task.id, f"resourceCount must be finite (got {task.resource_count})"
        )
    if task.resource_count is not None and task.resource_count < 0:
        raise InvalidEstimateError(
            task.id, f"resourceCount must be >= 0 (got {task.resource_count})"
        )


def topological_order(tasks: tuple[TaskDef, ...] | list[TaskDef]) -> list[str]:
    """Order task ids so every task follows all of its dependencies.

    Depth-first with three-state marking. Independent tasks keep their input
    order. Raises UnknownDependencyError before traversal starts, and
    CyclicDependencyError naming the task that was reached while still in
    progress.
    """

    by_id = {t.id: t for t in tasks}
    for t in tasks:
        for dep in t.dependencies:
            if dep not in by_id:
                raise UnknownDependencyError(t.id, dep)

    state = {task_id: _UNVISITED for task_id in by_id}
    order: list[str] = []

    for root in tasks:
        if state[root.id] != _UNVISITED:
            continue
        # Explicit stack of (task_id, next dependency index) so deep chains
        # do not hit the interpreter recursion limit.
        state[root.id] = _IN_PROGRESS
        stack: list[tuple[str, int]] = [(root.id, 0)]
        while stack:
            task_id, dep_idx = stack[-1]
            deps = by_id[task_id].dependencies
            if dep_idx < len(deps):
                stack[-1] = (task_id, dep_idx + 1)
                dep = deps[dep_idx]
                if state[dep] == _IN_PROGRESS:
                    raise CyclicDependencyError(dep)
                if state[dep] == _UNVISITED:
                    state[dep] = _IN_PROGRESS
                    stack.append((dep, 0))
                continue
            stack.pop()
            state[task_id] = _FINISHED
            order.append(task_id)

    return order


def validate_project(project: Project) -> list[str]:
    """Reject structurally invalid projects and return the topological order."""

    if not project.tasks:
        raise ProjectValidationError("project must define at least one task")

    seen: set[str] = set()
    for task in project.tasks:
        if task.id in seen:
            raise DuplicateTaskIdError(task.id)
        seen.add(task.id)

    for task in project.tasks:
        _check_estimates(task)

    return topological_order(project.tasks)
