# src/task_dashboard/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The controllers depend on Protocols instead of concrete implementations.
This keeps the HTTP transport and the presentation layer swappable and makes
testing easier (see tests/fakes.py).
"""

from typing import Any, Protocol

from ..tasks.task_models import Task, TaskId


class TaskTransport(Protocol):
    """CRUD transport for the remote task collection. Failures raise RequestFailed."""

    async def list(self) -> list[Task]: ...
    async def create(self, payload: dict[str, Any]) -> Task: ...
    async def update(self, task_id: TaskId, patch: dict[str, Any]) -> Task: ...
    async def delete(self, task_id: TaskId) -> bool: ...


class ConfirmPrompt(Protocol):
    """Blocking yes/no decision surfaced to the user (e.g. before a delete)."""

    def __call__(self, question: str) -> bool: ...


class Notifier(Protocol):
    """User-facing success notices ("Task created successfully!")."""

    def __call__(self, text: str) -> None: ...
