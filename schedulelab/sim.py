from __future__ import annotations

# Public simulation entrypoint.
#
# Validation and ordering happen once per batch; structural errors abort
# before any sampling. Execution strategy is picked via the RunExecutor
# abstraction.

import logging

from schedulelab.config import DEFAULT_ITERATIONS, DEFAULT_WORKERS
from schedulelab.engine import BatchContext
from schedulelab.executors import CancelCheck, default_executor
from schedulelab.metrics import aggregate_runs
from schedulelab.model import Project
from schedulelab.sampling import fresh_base_seed
from schedulelab.types import RunResult, SummaryStatistics
from schedulelab.validate import validate_project

logger = logging.getLogger(__name__)


def simulate_many(
    *,
    project: Project,
    order: list[str],
    runs: int,
    seed: int,
    workers: int = DEFAULT_WORKERS,
    should_cancel: CancelCheck | None = None,
) -> list[RunResult]:
    if runs < 1:
        raise ValueError(f"runs must be >= 1 (got {runs})")

    executor = default_executor(workers)
    context = BatchContext.build(project, order)
    results = executor.execute(
        context=context, runs=runs, seed=seed, should_cancel=should_cancel
    )
    if len(results) < runs:
        logger.info("Batch cancelled after %d of %d runs", len(results), runs)
    return results


def run_simulation(
    project: Project,
    iterations: int = DEFAULT_ITERATIONS,
    *,
    seed: int | None = None,
    workers: int = DEFAULT_WORKERS,
    should_cancel: CancelCheck | None = None,
) -> tuple[list[RunResult], SummaryStatistics]:
    """Validate, run ``iterations`` independent runs, and summarise them."""

    order = validate_project(project)

    if seed is None:
        seed = fresh_base_seed()
    logger.info(
        "Simulating '%s': %d tasks, %d runs, seed=%d, workers=%d",
        project.name,
        len(project.tasks),
        iterations,
        seed,
        workers,
    )

    runs = simulate_many(
        project=project,
        order=order,
        runs=iterations,
        seed=seed,
        workers=workers,
        should_cancel=should_cancel,
    )
    stats = aggregate_runs(project=project, runs=runs)
    logger.debug(
        "Batch done: mean=%.3f p90=%.3f max=%.3f", stats.mean, stats.p90, stats.max
    )
    return runs, stats
