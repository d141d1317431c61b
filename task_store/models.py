"""
Data models for the Task Store service.

This module defines the ``Task`` record exchanged over the API and the
``TaskStore`` mapping that holds every task in process memory. The store
is the only state the service has; it is lost on restart.
"""

import copy
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from flask import Flask

# Wire order of task fields in JSON output
TASK_FIELDS: tuple[str, ...] = ("id", "description", "note", "applications")


class TaskDecodeError(ValueError):
    """Raised when a JSON value cannot be decoded into a task."""


def _json_type(value: Any) -> str:
    """Return the JSON type name of a decoded value, for error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


@dataclass
class Task:
    """
    Task record representing a to-do item.

    Attributes:
        id: Identifier of the task, used as the key in the store.
        description: Free-text description of the task.
        note: Free-text note attached to the task.
        applications: Ordered list of applications used for the task.
    """

    id: str = ""
    description: str = ""
    note: str = ""
    applications: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Task":
        """
        Decode a task from a parsed JSON value.

        Unknown fields are ignored and missing or null fields keep their
        defaults. Field names are matched case-insensitively.

        Args:
            data: Value produced by parsing the request body as JSON.

        Returns:
            Decoded Task instance.

        Raises:
            TaskDecodeError: If the value does not have the task shape.
        """
        task = cls()
        if data is None:
            return task
        if not isinstance(data, dict):
            raise TaskDecodeError(
                f"cannot decode JSON {_json_type(data)} into a task object"
            )

        # Every matching key is type-checked, even when a later case
        # variant of the same name would replace it
        for key, value in data.items():
            name = key.lower()
            if name not in TASK_FIELDS or value is None:
                continue
            if name == "applications":
                task.applications = _decode_applications(value)
                continue
            if not isinstance(value, str):
                raise TaskDecodeError(
                    f"field '{name}' must be a string, got JSON {_json_type(value)}"
                )
            setattr(task, name, value)

        return task

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the task to a dictionary representation.

        Returns:
            Dictionary containing all task fields in wire order.
        """
        return {
            "id": self.id,
            "description": self.description,
            "note": self.note,
            "applications": list(self.applications),
        }


def _decode_applications(value: Any) -> list[str]:
    """Decode the ``applications`` field; null elements become empty strings."""
    if not isinstance(value, list):
        raise TaskDecodeError(
            f"field 'applications' must be an array, got JSON {_json_type(value)}"
        )

    applications = []
    for index, item in enumerate(value):
        if item is None:
            applications.append("")
        elif isinstance(item, str):
            applications.append(item)
        else:
            raise TaskDecodeError(
                f"field 'applications[{index}]' must be a string, "
                f"got JSON {_json_type(item)}"
            )
    return applications


SEED_TASKS: tuple[Task, ...] = (
    Task(
        id="1",
        description="Сделать финальное задание темы REST API",
        note="Если сегодня сделаю, то завтра будет свободный день. Ура!",
        applications=["VS Code", "Terminal", "git"],
    ),
    Task(
        id="2",
        description="Протестировать финальное задание с помощью Postmen",
        note=(
            "Лучше это делать в процессе разработки, каждый раз, "
            "когда запускаешь сервер и проверяешь хендлер"
        ),
        applications=["VS Code", "Terminal", "git", "Postman"],
    ),
)


class TaskStore:
    """
    In-memory mapping from task id to task.

    Every read and write goes through a single lock, so concurrently
    handled requests never see a partially applied update. Ordering
    between concurrent requests on the same id is still undefined.
    """

    def __init__(self, tasks: Iterable[Task] | None = None) -> None:
        self._lock = threading.Lock()
        self._tasks: dict[str, Task] = {}
        if tasks is not None:
            self.reset(tasks)

    def init_app(self, app: Flask) -> None:
        """
        Attach the store to a Flask application.

        Seeds the mapping with ``SEED_TASKS`` when the ``SEED_TASKS``
        config flag is enabled.
        """
        app.extensions["task_store"] = self
        if app.config.get("SEED_TASKS", True):
            self.reset(SEED_TASKS)

    def reset(self, tasks: Iterable[Task]) -> None:
        """Replace the whole mapping with copies of the given tasks."""
        fresh = {task.id: copy.deepcopy(task) for task in tasks}
        with self._lock:
            self._tasks = fresh

    def all(self) -> dict[str, Task]:
        """Return a snapshot of the mapping, ordered by id."""
        with self._lock:
            return {task_id: self._tasks[task_id] for task_id in sorted(self._tasks)}

    def get(self, task_id: str) -> Task | None:
        with self._lock:
            return self._tasks.get(task_id)

    def put(self, task: Task) -> None:
        """Store a task under its own id, replacing any existing entry."""
        with self._lock:
            self._tasks[task.id] = task

    def delete(self, task_id: str) -> bool:
        """
        Remove a task.

        Returns:
            True if the task existed and was removed, False otherwise.
        """
        with self._lock:
            return self._tasks.pop(task_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        with self._lock:
            return task_id in self._tasks

    def __repr__(self) -> str:
        """Return string representation of the store."""
        return f"<TaskStore {len(self)} tasks>"
