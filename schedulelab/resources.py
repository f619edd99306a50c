from __future__ import annotations

from itertools import groupby

from schedulelab.model import TaskDef
from schedulelab.types import TaskTiming


def peak_usage(
    *,
    tasks: tuple[TaskDef, ...] | list[TaskDef],
    timings: dict[str, TaskTiming],
    resource_types: tuple[str, ...] = (),
) -> dict[str, float]:
    """Maximum concurrent quantity per resource type over one run.

    Every task holding a positive quantity acquires it at its start and
    releases it at its finish. All deltas sharing a timestamp are applied
    together before the peak is read, so a release and an acquisition at the
    same instant never stack. Types in ``resource_types`` that see no events
    report 0.
    """

    # (time, resource_type, delta)
    events: list[tuple[float, str, float]] = []
    for t in tasks:
        if not t.uses_resource:
            continue
        timing = timings[t.id]
        qty = float(t.resource_count)  # type: ignore[arg-type]
        events.append((timing.start, t.resource_type, qty))  # type: ignore[arg-type]
        events.append((timing.finish, t.resource_type, -qty))  # type: ignore[arg-type]

    events.sort(key=lambda e: e[0])

    peaks: dict[str, float] = {rt: 0.0 for rt in resource_types}
    current: dict[str, float] = {}

    for _, same_time in groupby(events, key=lambda e: e[0]):
        deltas: dict[str, float] = {}
        for _, rtype, delta in same_time:
            deltas[rtype] = deltas.get(rtype, 0.0) + delta
        for rtype, delta in deltas.items():
            level = current.get(rtype, 0.0) + delta
            current[rtype] = level
            peaks[rtype] = max(peaks.get(rtype, 0.0), level)

    return peaks
