# src/task_dashboard/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

TaskId = int | str

FILTER_ALL = "all"

# Wire names of the fields the dashboard knows about; anything else is kept in Task.extra.
_KNOWN_FIELDS = ("id", "title", "description", "status", "priority", "createdAt")


class TaskStatus(StrEnum):
    PENDING = "pending"
    COMPLETED = "completed"

    @classmethod
    def from_wire(cls, raw: Any) -> TaskStatus:
        if not raw:
            return cls.PENDING
        try:
            return cls(str(raw))
        except ValueError:
            return cls.PENDING

    def toggled(self) -> TaskStatus:
        return TaskStatus.PENDING if self is TaskStatus.COMPLETED else TaskStatus.COMPLETED


class TaskPriority(StrEnum):
    """
    Priorities offered by the dashboard.

    The controller treats priority as an opaque string; this enum only lists
    the values the console suggests for /add and /filter.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def utc_now_iso() -> str:
    """ISO-8601 timestamp in the same shape a browser's Date.toISOString() produces."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True, slots=True)
class Task:
    id: TaskId
    title: str
    description: str
    status: TaskStatus
    priority: str
    created_at: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> Task:
        if not isinstance(data, dict):
            raise ValueError(f"Task payload must be an object, got {type(data).__name__}")
        if data.get("id") is None:
            raise ValueError("Task payload has no id")

        created_at = data.get("createdAt")
        return cls(
            id=data["id"],
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            status=TaskStatus.from_wire(data.get("status")),
            priority=str(data.get("priority") or ""),
            created_at=str(created_at) if created_at is not None else None,
            extra={k: v for k, v in data.items() if k not in _KNOWN_FIELDS},
        )

    def to_wire(self) -> dict[str, Any]:
        out: dict[str, Any] = dict(self.extra)
        out.update(
            {
                "id": self.id,
                "title": self.title,
                "description": self.description,
                "status": str(self.status),
                "priority": self.priority,
            }
        )
        if self.created_at is not None:
            out["createdAt"] = self.created_at
        return out


@dataclass(frozen=True, slots=True)
class TaskStats:
    total: int = 0
    completed: int = 0
    pending: int = 0
    completion_rate: int = 0  # percent, 0..100


@dataclass(frozen=True, slots=True)
class TaskDraft:
    """What the input form submits for a new task (no id: the store assigns it)."""

    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING
    priority: str = TaskPriority.MEDIUM

    def to_payload(self, *, created_at: str) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "status": str(self.status),
            "priority": str(self.priority),
            "createdAt": created_at,
        }
