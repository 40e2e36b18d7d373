# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from task_dashboard.tasks.task_client import RequestFailed
from task_dashboard.tasks.task_models import Task, TaskId


class FakeTaskTransport:
    """
    In-memory TaskTransport used for controller unit tests.

    - Assigns ids like a record store would (incrementing ints)
    - Captures calls for assertions
    - `fail` makes the named operations raise RequestFailed
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self.tasks: list[Task] = list(tasks or [])
        self.calls: list[tuple[str, Any]] = []
        self.fail: set[str] = set()
        self._next_id = max((int(t.id) for t in self.tasks), default=0) + 1

    def _maybe_fail(self, op: str) -> None:
        if op in self.fail:
            raise RequestFailed(f"{op} exploded", status_code=500)

    async def list(self) -> list[Task]:
        self.calls.append(("list", None))
        self._maybe_fail("list")
        return list(self.tasks)

    async def create(self, payload: dict[str, Any]) -> Task:
        self.calls.append(("create", payload))
        self._maybe_fail("create")
        task = Task.from_wire({**payload, "id": self._next_id})
        self._next_id += 1
        self.tasks.append(task)
        return task

    async def update(self, task_id: TaskId, patch: dict[str, Any]) -> Task:
        self.calls.append(("update", (task_id, patch)))
        self._maybe_fail("update")
        for i, t in enumerate(self.tasks):
            if t.id == task_id:
                updated = Task.from_wire({**t.to_wire(), **patch})
                self.tasks[i] = updated
                return updated
        raise RequestFailed("Not Found", status_code=404)

    async def delete(self, task_id: TaskId) -> bool:
        self.calls.append(("delete", task_id))
        self._maybe_fail("delete")
        self.tasks = [t for t in self.tasks if t.id != task_id]
        return True

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]


@dataclass(slots=True)
class FakeConfirm:
    """Confirmation prompt returning a fixed answer and recording the questions asked."""

    answer: bool = True
    asked: list[str] = field(default_factory=list)

    def __call__(self, question: str) -> bool:
        self.asked.append(question)
        return self.answer


@dataclass(slots=True)
class FakeNotifier:
    notices: list[str] = field(default_factory=list)

    def __call__(self, text: str) -> None:
        self.notices.append(text)
