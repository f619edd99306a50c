from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture(scope="session", autouse=True)
def _add_repo_root_to_syspath() -> None:
    """Make the local package importable when running tests from `tests/`."""

    root = Path(__file__).resolve().parents[1]
    root_str = str(root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)


def task(
    task_id: str,
    opt: float,
    mode: float | None = None,
    pess: float | None = None,
    *,
    deps: list[str] | None = None,
    resource: str | None = None,
    count: float | None = None,
) -> dict[str, Any]:
    """Upstream-format task; a single estimate means a fixed duration."""

    out: dict[str, Any] = {
        "id": task_id,
        "name": task_id.upper(),
        "optimistic": opt,
        "mostLikely": opt if mode is None else mode,
        "pessimistic": opt if pess is None else pess,
        "dependencies": list(deps or []),
    }
    if resource is not None:
        out["resourceType"] = resource
    if count is not None:
        out["resourceCount"] = count
    return out


def project_json(*tasks: dict[str, Any], name: str = "p") -> dict[str, Any]:
    return {"projectName": name, "description": "", "tasks": list(tasks)}
