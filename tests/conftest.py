# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from task_dashboard.core.state import AppState
from task_dashboard.tasks.task_controller import TaskController
from task_dashboard.tasks.task_models import Task, TaskStatus
from task_dashboard.tasks.task_views import StatsPanel

from .fakes import FakeConfirm, FakeNotifier, FakeTaskTransport


def make_task(
    task_id: int,
    title: str = "Task",
    *,
    description: str = "",
    status: TaskStatus = TaskStatus.PENDING,
    priority: str = "medium",
) -> Task:
    return Task(
        id=task_id,
        title=title,
        description=description,
        status=status,
        priority=priority,
        created_at="2024-01-01T00:00:00.000Z",
    )


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment / .env.
    """
    return SimpleNamespace(
        app_name="task-dashboard-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        api_url="http://store.test",
        confirm_deletes=True,
    )


@pytest.fixture()
def seed_tasks() -> list[Task]:
    return [
        make_task(1, "Buy Milk", description="2 litres", priority="low"),
        make_task(2, "Write report", description="Quarterly numbers", status=TaskStatus.COMPLETED, priority="high"),
        make_task(3, "Call plumber", description="Kitchen sink leaks", priority="high"),
    ]


@pytest.fixture()
def transport(seed_tasks: list[Task]) -> FakeTaskTransport:
    return FakeTaskTransport(seed_tasks)


@pytest.fixture()
def confirm() -> FakeConfirm:
    return FakeConfirm(answer=True)


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def controller(transport: FakeTaskTransport, confirm: FakeConfirm, notifier: FakeNotifier) -> TaskController:
    return TaskController(
        transport,
        confirm=confirm,
        notify=notifier,
        clock=lambda: "2024-05-01T12:00:00.000Z",
    )


@pytest.fixture()
def state(settings: SimpleNamespace, transport: FakeTaskTransport, controller: TaskController) -> AppState:
    """AppState wired with the in-memory transport instead of HTTP."""
    return AppState(
        settings=settings,
        client=SimpleNamespace(endpoint="http://store.test/tasks"),
        tasks=controller,
        stats=StatsPanel(transport),
    )
