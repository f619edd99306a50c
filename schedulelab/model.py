from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class ProjectFormatError(ValueError):
    pass


@dataclass(frozen=True)
class TaskDef:
    id: str
    name: str
    optimistic: float
    most_likely: float
    pessimistic: float
    dependencies: tuple[str, ...] = ()
    resource_type: str | None = None
    resource_count: float | None = None

    @property
    def uses_resource(self) -> bool:
        """True when the task holds a positive quantity of a named resource."""
        return (
            bool(self.resource_type)
            and self.resource_count is not None
            and self.resource_count > 0
        )

    @staticmethod
    def from_json(obj: dict[str, Any], *, index: int = 0) -> "TaskDef":
        if not isinstance(obj, dict):
            raise ProjectFormatError(f"task #{index} must be an object")

        def _required(key: str) -> Any:
            if key not in obj:
                raise ProjectFormatError(f"task #{index} is missing '{key}'")
            return obj[key]

        def _as_number(key: str, value: Any) -> float:
            # bool is an int subclass; true/false are not durations.
            if isinstance(value, bool):
                value = None
            try:
                return float(value)
            except (TypeError, ValueError):
                raise ProjectFormatError(
                    f"task #{index} field '{key}' must be a number (got {obj.get(key)!r})"
                ) from None

        def _number(key: str) -> float:
            return _as_number(key, _required(key))

        task_id = _required("id")
        if not isinstance(task_id, str):
            raise ProjectFormatError(
                f"task #{index} field 'id' must be a string (got {task_id!r})"
            )

        deps_raw = obj.get("dependencies", [])
        if not isinstance(deps_raw, (list, tuple)):
            raise ProjectFormatError(f"task #{index} 'dependencies' must be a list")
        for dep in deps_raw:
            if not isinstance(dep, str):
                raise ProjectFormatError(
                    f"task #{index} dependency ids must be strings (got {dep!r})"
                )

        resource_type = obj.get("resourceType")
        resource_type = str(resource_type) if resource_type else None
        resource_count = obj.get("resourceCount")
        if resource_count is not None:
            resource_count = _as_number("resourceCount", resource_count)

        return TaskDef(
            id=task_id,
            name=str(obj.get("name", "")),
            optimistic=_number("optimistic"),
            most_likely=_number("mostLikely"),
            pessimistic=_number("pessimistic"),
            dependencies=tuple(deps_raw),
            resource_type=resource_type,
            resource_count=resource_count,
        )

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "optimistic": self.optimistic,
            "mostLikely": self.most_likely,
            "pessimistic": self.pessimistic,
            "dependencies": list(self.dependencies),
        }
        if self.resource_type is not None:
            out["resourceType"] = self.resource_type
        if self.resource_count is not None:
            out["resourceCount"] = self.resource_count
        return out


@dataclass(frozen=True)
class Project:
    name: str
    description: str
    tasks: tuple[TaskDef, ...]

    def task_by_id(self) -> dict[str, TaskDef]:
        return {t.id: t for t in self.tasks}

    def resource_types(self) -> tuple[str, ...]:
        """Distinct non-empty resource labels, in first-seen task order."""
        seen: dict[str, None] = {}
        for t in self.tasks:
            if t.resource_type:
                seen.setdefault(t.resource_type, None)
        return tuple(seen)

    @staticmethod
    def from_json(obj: dict[str, Any]) -> "Project":
        if not isinstance(obj, dict):
            raise ProjectFormatError("project definition must be a JSON object")
        if "tasks" not in obj:
            raise ProjectFormatError("project definition is missing 'tasks'")
        tasks_raw = obj["tasks"]
        if not isinstance(tasks_raw, list):
            raise ProjectFormatError("project 'tasks' must be a list")

        tasks = tuple(
            TaskDef.from_json(t, index=i) for i, t in enumerate(tasks_raw)
        )
        return Project(
            name=str(obj.get("projectName", "")),
            description=str(obj.get("description", "")),
            tasks=tasks,
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "projectName": self.name,
            "description": self.description,
            "tasks": [t.to_json() for t in self.tasks],
        }
