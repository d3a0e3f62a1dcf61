"""Task, step and workflow definitions for manifests."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, ClassVar


class InvalidTemplateError(ValueError):
    """A workflow template violates a structural invariant."""


class TaskType(Enum):
    """Task discriminants, as written to the manifest `type` field."""

    DOWNLOAD_URL = "DownloadUrl"
    IMPORT_OPENSTREETMAP = "ImportOpenStreetMap"
    EXECUTE_SQL = "ExecuteSql"


def _region_field():
    # Kept in memory only: never serialized and ignored by equality
    return field(default=None, compare=False, metadata={"json": None})


@dataclass(frozen=True)
class Task:
    """
    A single operation interpreted by the external workflow executor.

    Tasks are immutable values. Variants declare their manifest fields as
    dataclass fields; `metadata["json"]` overrides the manifest key, and a
    `None` key keeps the field out of the manifest entirely.
    """

    task_type: ClassVar[TaskType]

    def to_dict(self) -> dict[str, Any]:
        """Manifest projection, `type` first then fields in declaration order."""
        data: dict[str, Any] = {"type": self.task_type.value}
        for f in fields(self):
            key = f.metadata.get("json", f.name)
            if key is not None:
                data[key] = getattr(self, f.name)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        kwargs = {}
        for f in fields(cls):
            key = f.metadata.get("json", f.name)
            if key is None:
                continue
            if key not in data:
                raise ValueError(f"{cls.task_type.value} task is missing '{key}'")
            kwargs[f.name] = data[key]
        return cls(**kwargs)


@dataclass(frozen=True)
class DownloadUrl(Task):
    """Fetch a remote resource to a local path."""

    task_type: ClassVar[TaskType] = TaskType.DOWNLOAD_URL

    url: str
    path: str
    region: str | None = _region_field()


@dataclass(frozen=True)
class ImportOpenStreetMap(Task):
    """Load a local OpenStreetMap file into a spatial database."""

    task_type: ClassVar[TaskType] = TaskType.IMPORT_OPENSTREETMAP

    file: str
    database: str
    database_srid: int = field(metadata={"json": "databaseSrid"})
    region: str | None = _region_field()


@dataclass(frozen=True)
class ExecuteSql(Task):
    """Run a SQL script against a database."""

    task_type: ClassVar[TaskType] = TaskType.EXECUTE_SQL

    file: str
    database: str


TASK_CLASSES: dict[TaskType, type[Task]] = {
    TaskType.DOWNLOAD_URL: DownloadUrl,
    TaskType.IMPORT_OPENSTREETMAP: ImportOpenStreetMap,
    TaskType.EXECUTE_SQL: ExecuteSql,
}


_JSON_KINDS = {dict: "object", list: "array", str: "string"}


def _expect(value: Any, kind: type, what: str) -> Any:
    if not isinstance(value, kind):
        raise ValueError(f"{what} must be a JSON {_JSON_KINDS[kind]}, got {type(value).__name__}")
    return value


def task_from_dict(data: dict[str, Any]) -> Task:
    """Parse a manifest task, dispatching on its `type` field."""
    _expect(data, dict, "Task")
    try:
        task_type = TaskType(data.get("type"))
    except ValueError:
        raise ValueError(f"Unknown task type: {data.get('type')!r}") from None
    return TASK_CLASSES[task_type].from_dict(data)


@dataclass(frozen=True)
class Step:
    """
    A named group of tasks.

    `needs` names the steps that must complete before this one starts. The
    executor enforces it; here it is only carried through to the manifest.
    """

    id: str
    needs: tuple[str, ...] = ()
    tasks: tuple[Task, ...] = ()

    def __post_init__(self):
        # Accept lists from callers, store tuples
        object.__setattr__(self, "needs", tuple(self.needs))
        object.__setattr__(self, "tasks", tuple(self.tasks))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "needs": list(self.needs),
            "tasks": [task.to_dict() for task in self.tasks],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Step:
        _expect(data, dict, "Step")
        if "id" not in data:
            raise ValueError("Step is missing 'id'")
        step_id = _expect(data["id"], str, "Step id")
        needs = _expect(data.get("needs", []), list, f"Step '{step_id}' needs")
        tasks = _expect(data.get("tasks", []), list, f"Step '{step_id}' tasks")
        return cls(
            id=step_id,
            needs=[_expect(need, str, f"Step '{step_id}' need") for need in needs],
            tasks=[task_from_dict(task) for task in tasks],
        )


@dataclass(frozen=True)
class Workflow:
    """
    An ordered sequence of steps.

    Workflows define WHAT the executor should do, not HOW to execute it.
    """

    steps: tuple[Step, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "steps", tuple(self.steps))

    @property
    def step_ids(self) -> list[str]:
        return [step.id for step in self.steps]

    def get_step(self, step_id: str) -> Step | None:
        """Get a step by ID."""
        for step in self.steps:
            if step.id == step_id:
                return step
        return None

    def tasks_by_region(self, step_id: str) -> dict[str, Task]:
        """Map region identifier to task for a region-parameterized step."""
        step = self.get_step(step_id)
        if step is None:
            return {}
        return {task.region: task for task in step.tasks if getattr(task, "region", None) is not None}

    def validate(self) -> None:
        """
        Check that step ids are unique and `needs` only names earlier steps.

        Raises:
            InvalidTemplateError: On the first violation found
        """
        seen: set[str] = set()
        for step in self.steps:
            if step.id in seen:
                raise InvalidTemplateError(f"Duplicate step id: {step.id}")
            for need in step.needs:
                if need not in seen:
                    raise InvalidTemplateError(f"Step '{step.id}' needs '{need}', which is not an earlier step")
            seen.add(step.id)

    def to_dict(self) -> dict[str, Any]:
        return {"steps": [step.to_dict() for step in self.steps]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Workflow:
        _expect(data, dict, "Manifest")
        return cls(steps=[Step.from_dict(step) for step in _expect(data.get("steps", []), list, "Manifest steps")])
