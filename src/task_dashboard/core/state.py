# src/task_dashboard/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..tasks.task_models import FILTER_ALL, Task, TaskId, TaskStats

if TYPE_CHECKING:
    from ..config import Settings
    from ..tasks.task_client import TaskClient
    from ..tasks.task_controller import TaskController
    from ..tasks.task_views import StatsPanel


@dataclass(slots=True)
class TaskListState:
    """
    State owned by the task list controller.

    `tasks` is the last known server snapshot. It is only ever replaced with a
    new tuple, never mutated in place. `filter` and `search` are presentation
    selectors: they never change `tasks`, the filtered view applies them.
    """

    tasks: tuple[Task, ...] = ()
    filter: str = FILTER_ALL
    search: str = ""
    error: str | None = None
    loading: bool = False
    editing_id: TaskId | None = None


@dataclass(slots=True)
class StatsState:
    """State owned by the statistics panel (its own snapshot, see StatsPanel)."""

    stats: TaskStats = field(default_factory=TaskStats)
    error: str | None = None
    loading: bool = False


@dataclass
class AppState:
    """Everything the console dashboard needs, wired once in cli/bootstrap.py."""

    settings: Settings
    client: TaskClient
    tasks: TaskController
    stats: StatsPanel
