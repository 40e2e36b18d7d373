# src/task_dashboard/tasks/task_controller.py

"""
Task collection controller.

Owns the client-side snapshot of the task collection (TaskListState) and
mediates every mutation through the transport.

Update policy is pessimistic on purpose: a create/update/delete is applied to
the snapshot only after the store has confirmed it, and always from the
store's response rather than the locally submitted payload. The user sees
the store's view (ids, defaults, normalization), at the cost of waiting for
the round trip.

Failures never leave this module: every operation catches RequestFailed,
logs it and turns it into the single surfaced error message.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ..core.ports import ConfirmPrompt, Notifier, TaskTransport
from ..core.state import TaskListState
from .task_client import RequestFailed
from .task_models import Task, TaskDraft, TaskId, utc_now_iso
from .task_views import filter_tasks

logger = logging.getLogger(__name__)

DELETE_QUESTION = "Are you sure you want to delete this task?"


def _failure_message(verb: str) -> str:
    return f"Failed to {verb} tasks. Please try again."


def _always_yes(question: str) -> bool:
    return True


def _silent(text: str) -> None:
    return None


class TaskController:
    def __init__(
        self,
        transport: TaskTransport,
        *,
        confirm: ConfirmPrompt | None = None,
        notify: Notifier | None = None,
        state: TaskListState | None = None,
        clock: Callable[[], str] = utc_now_iso,
    ) -> None:
        self.transport = transport
        self.confirm: ConfirmPrompt = confirm or _always_yes
        self.notify: Notifier = notify or _silent
        self.state = state if state is not None else TaskListState()
        self._clock = clock

    # ---- read side ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self.state.tasks

    @property
    def error(self) -> str | None:
        return self.state.error

    def find(self, task_id: TaskId) -> Task | None:
        for t in self.state.tasks:
            if t.id == task_id:
                return t
        return None

    def visible_tasks(self) -> list[Task]:
        return list(filter_tasks(self.state.tasks, self.state.filter, self.state.search))

    def summary(self) -> str:
        return f"Showing {len(self.visible_tasks())} of {len(self.state.tasks)} tasks"

    # ---- presentation-only state ----

    def set_filter(self, selector: str) -> None:
        self.state.filter = selector

    def set_search(self, text: str) -> None:
        self.state.search = text

    def clear_error(self) -> None:
        self.state.error = None

    def begin_edit(self, task_id: TaskId) -> Task | None:
        task = self.find(task_id)
        self.state.editing_id = task.id if task is not None else None
        return task

    def cancel_edit(self) -> None:
        self.state.editing_id = None

    # ---- helpers ----

    def _fail(self, verb: str, err: RequestFailed) -> None:
        logger.warning("Error %s task(s): %s (status=%s)", verb, err.detail, err.status_code)
        self.state.error = _failure_message(verb)

    # ---- operations ----

    async def refresh(self) -> bool:
        """Replace the snapshot wholesale with the store's collection."""
        self.state.loading = True
        self.state.error = None
        try:
            tasks = await self.transport.list()
        except RequestFailed as e:
            self._fail("fetch", e)
            return False
        finally:
            self.state.loading = False

        self.state.tasks = tuple(tasks)
        logger.info("Loaded %d tasks", len(tasks))
        return True

    async def create(self, draft: TaskDraft) -> Task | None:
        self.state.error = None
        # Stamped when the call is issued, not when the store answers.
        payload = draft.to_payload(created_at=self._clock())
        try:
            created = await self.transport.create(payload)
        except RequestFailed as e:
            self._fail("create", e)
            return None

        self.state.tasks = (created, *self.state.tasks)
        logger.info("Task created id=%s", created.id)
        self.notify("Task created successfully!")
        return created

    async def update(self, task_id: TaskId, patch: dict[str, Any]) -> Task | None:
        self.state.error = None
        try:
            updated = await self.transport.update(task_id, patch)
        except RequestFailed as e:
            self._fail("update", e)
            return None

        # Applied to whatever the snapshot is now; a racing call may have replaced it meanwhile.
        self.state.tasks = tuple(updated if t.id == task_id else t for t in self.state.tasks)
        if self.state.editing_id == task_id:
            self.state.editing_id = None
        logger.info("Task updated id=%s", task_id)
        self.notify("Task updated successfully!")
        return updated

    async def delete(self, task_id: TaskId) -> bool | None:
        """True when deleted, False when the store call failed, None when the user declined."""
        if not self.confirm(DELETE_QUESTION):
            logger.debug("Delete of task id=%s declined", task_id)
            return None

        self.state.error = None
        try:
            await self.transport.delete(task_id)
        except RequestFailed as e:
            self._fail("delete", e)
            return False

        self.state.tasks = tuple(t for t in self.state.tasks if t.id != task_id)
        if self.state.editing_id == task_id:
            self.state.editing_id = None
        logger.info("Task deleted id=%s", task_id)
        self.notify("Task deleted successfully!")
        return True

    async def toggle_status(self, task_id: TaskId) -> Task | None:
        task = self.find(task_id)
        if task is None:
            # UI is working on a stale snapshot; nothing to flip.
            logger.debug("Toggle ignored, task id=%s not in snapshot", task_id)
            return None
        return await self.update(task_id, {"status": str(task.status.toggled())})
