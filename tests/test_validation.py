from __future__ import annotations

import json
import math

import pytest

from conftest import project_json, task
from schedulelab.model import Project, TaskDef
from schedulelab.validate import (
    CyclicDependencyError,
    DuplicateTaskIdError,
    InvalidEstimateError,
    ProjectValidationError,
    UnknownDependencyError,
    topological_order,
    validate_project,
)


def _project(*tasks: dict) -> Project:
    return Project.from_json(project_json(*tasks))


def test_order_places_every_task_after_its_dependencies() -> None:
    project = _project(
        task("d", 1, deps=["b", "c"]),
        task("b", 1, deps=["a"]),
        task("c", 1, deps=["a"]),
        task("a", 1),
        task("e", 1, deps=["d", "a"]),
    )
    order = validate_project(project)

    assert sorted(order) == ["a", "b", "c", "d", "e"]
    pos = {tid: i for i, tid in enumerate(order)}
    for t in project.tasks:
        for dep in t.dependencies:
            assert pos[dep] < pos[t.id]


def test_independent_tasks_keep_input_order() -> None:
    project = _project(task("c", 1), task("a", 1), task("b", 1))
    assert validate_project(project) == ["c", "a", "b"]


def test_dependencies_are_emitted_before_the_task_that_reached_them() -> None:
    project = _project(task("b", 1, deps=["a"]), task("x", 1), task("a", 1))
    assert validate_project(project) == ["a", "b", "x"]


def test_two_task_cycle_names_the_revisited_task() -> None:
    project = _project(task("a", 1, deps=["b"]), task("b", 1, deps=["a"]))
    with pytest.raises(CyclicDependencyError) as exc_info:
        validate_project(project)
    assert exc_info.value.task_id == "a"
    assert "circular dependency" in str(exc_info.value)


def test_self_dependency_is_a_cycle() -> None:
    project = _project(task("a", 1), task("b", 1, deps=["b"]))
    with pytest.raises(CyclicDependencyError, match="'b'"):
        validate_project(project)


def test_cycle_deep_in_graph_is_detected_deterministically() -> None:
    tasks = (
        task("start", 1),
        task("x", 1, deps=["start", "z"]),
        task("y", 1, deps=["x"]),
        task("z", 1, deps=["y"]),
    )
    for _ in range(3):
        with pytest.raises(CyclicDependencyError) as exc_info:
            validate_project(_project(*tasks))
        assert exc_info.value.task_id == "x"


def test_unknown_dependency_is_reported_before_traversal() -> None:
    # The cycle would be hit first by a traversal; the unknown id wins.
    project = _project(
        task("a", 1, deps=["b"]),
        task("b", 1, deps=["a"]),
        task("c", 1, deps=["ghost"]),
    )
    with pytest.raises(UnknownDependencyError) as exc_info:
        validate_project(project)
    assert exc_info.value.task_id == "c"
    assert exc_info.value.dependency == "ghost"


def test_long_chain_does_not_hit_recursion_limit() -> None:
    n = 5000
    tasks = [TaskDef(id="t0", name="", optimistic=1, most_likely=1, pessimistic=1)]
    for i in range(1, n):
        tasks.append(
            TaskDef(
                id=f"t{i}",
                name="",
                optimistic=1,
                most_likely=1,
                pessimistic=1,
                dependencies=(f"t{i - 1}",),
            )
        )
    tasks.reverse()
    order = topological_order(tasks)
    assert order == [f"t{i}" for i in range(n)]


def test_rejects_duplicate_ids() -> None:
    with pytest.raises(DuplicateTaskIdError, match="'a'"):
        validate_project(_project(task("a", 1), task("a", 2)))


@pytest.mark.parametrize(
    "estimates",
    [(5.0, 3.0, 8.0), (1.0, 9.0, 8.0), (4.0, 4.0, 2.0), (-1.0, 0.0, 1.0)],
)
def test_rejects_invalid_estimate_ordering(estimates: tuple[float, float, float]) -> None:
    with pytest.raises(InvalidEstimateError):
        validate_project(_project(task("a", *estimates)))


@pytest.mark.parametrize(
    "estimates",
    [(1.0, 2.0, math.inf), (-math.inf, 0.0, 1.0), (1.0, math.nan, 3.0)],
)
def test_rejects_non_finite_estimates(estimates: tuple[float, float, float]) -> None:
    with pytest.raises(InvalidEstimateError, match="non-finite"):
        validate_project(_project(task("a", *estimates)))


def test_infinite_estimate_from_json_never_reaches_a_run() -> None:
    from schedulelab.sim import run_simulation

    raw = json.loads(
        '{"projectName": "p", "tasks": [{"id": "a", "name": "A", "optimistic": 1, '
        '"mostLikely": 2, "pessimistic": Infinity, "dependencies": []}]}'
    )
    with pytest.raises(InvalidEstimateError, match="non-finite"):
        run_simulation(Project.from_json(raw), 5, seed=1)


def test_rejects_infinite_resource_count() -> None:
    with pytest.raises(InvalidEstimateError, match="resourceCount must be finite"):
        validate_project(_project(task("a", 1, resource="dev", count=math.inf)))


def test_rejects_negative_resource_count() -> None:
    with pytest.raises(InvalidEstimateError, match="resourceCount"):
        validate_project(_project(task("a", 1, resource="dev", count=-2)))


def test_degenerate_and_boundary_estimates_are_accepted() -> None:
    project = _project(task("a", 2), task("b", 0, 0, 3), task("c", 1, 4, 4))
    assert validate_project(project) == ["a", "b", "c"]


def test_rejects_empty_project() -> None:
    with pytest.raises(ProjectValidationError, match="at least one task"):
        validate_project(_project())


def test_validation_errors_are_value_errors() -> None:
    assert issubclass(CyclicDependencyError, ValueError)
    assert issubclass(UnknownDependencyError, ProjectValidationError)
