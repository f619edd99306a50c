from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Protocol

from schedulelab.engine import BatchContext, simulate_one
from schedulelab.sampling import rng_for_run
from schedulelab.types import RunResult

CancelCheck = Callable[[], bool]


class RunExecutor(Protocol):
    def execute(
        self,
        *,
        context: BatchContext,
        runs: int,
        seed: int,
        should_cancel: CancelCheck | None,
    ) -> list[RunResult]:
        raise NotImplementedError


@dataclass(frozen=True)
class SerialExecutor:
    def execute(
        self,
        *,
        context: BatchContext,
        runs: int,
        seed: int,
        should_cancel: CancelCheck | None,
    ) -> list[RunResult]:
        results: list[RunResult] = []
        for run_id in range(runs):
            if should_cancel is not None and should_cancel():
                break
            results.append(
                simulate_one(
                    context=context, run_id=run_id, rng=rng_for_run(seed, run_id)
                )
            )
        return results


@dataclass(frozen=True)
class ThreadPoolRunExecutor:
    workers: int

    def execute(
        self,
        *,
        context: BatchContext,
        runs: int,
        seed: int,
        should_cancel: CancelCheck | None,
    ) -> list[RunResult]:
        # Each run owns its slot and its generator; no locking needed.
        slots: list[RunResult | None] = [None] * runs

        def _run(run_id: int) -> None:
            if should_cancel is not None and should_cancel():
                return
            slots[run_id] = simulate_one(
                context=context, run_id=run_id, rng=rng_for_run(seed, run_id)
            )

        with ThreadPoolExecutor(max_workers=self.workers) as ex:
            list(ex.map(_run, range(runs)))

        return [r for r in slots if r is not None]


def default_executor(workers: int) -> RunExecutor:
    if workers < 1:
        raise ValueError(f"workers must be >= 1 (got {workers})")
    if workers == 1:
        return SerialExecutor()
    return ThreadPoolRunExecutor(workers=workers)
