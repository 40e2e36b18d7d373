# src/task_dashboard/tasks/task_views.py

"""
Read-only projections of a task snapshot.

- filter_tasks: the filtered/searched subset shown in the task grid
- compute_stats: totals and completion rate shown in the statistics cards
- StatsPanel: the statistics cards' own state + fetch
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from ..core.ports import TaskTransport
from ..core.state import StatsState
from .task_client import RequestFailed
from .task_models import FILTER_ALL, Task, TaskStats, TaskStatus

logger = logging.getLogger(__name__)

STATS_ERROR_MESSAGE = "Unable to load statistics. Please try again later."


def matches_filter(task: Task, selector: str) -> bool:
    """`selector` is "all", a status value or a priority value."""
    return selector == FILTER_ALL or task.status == selector or task.priority == selector


def matches_search(task: Task, term: str) -> bool:
    needle = term.lower()
    return needle in task.title.lower() or needle in task.description.lower()


def filter_tasks(tasks: Iterable[Task], selector: str = FILTER_ALL, search: str = "") -> Iterator[Task]:
    """Lazily yield tasks passing both the filter selector and the search term, in order."""
    return (t for t in tasks if matches_filter(t, selector) and matches_search(t, search))


def _round_half_up_percent(part: int, whole: int) -> int:
    # floor(part / whole * 100 + 0.5) in integer arithmetic, so 1/8 -> 13 and 2/5 -> 40 exactly.
    return (part * 200 + whole) // (2 * whole)


def compute_stats(tasks: Iterable[Task]) -> TaskStats:
    total = 0
    completed = 0
    for t in tasks:
        total += 1
        if t.status == TaskStatus.COMPLETED:
            completed += 1

    rate = _round_half_up_percent(completed, total) if total > 0 else 0
    return TaskStats(
        total=total,
        completed=completed,
        pending=total - completed,
        completion_rate=rate,
    )


class StatsPanel:
    """
    Statistics cards.

    The panel fetches its own snapshot of the collection instead of reading the
    task list controller's cache, so right after a mutation the two can disagree
    until both have refreshed. The console dashboard refreshes both after every
    mutating command.
    """

    def __init__(self, transport: TaskTransport, state: StatsState | None = None) -> None:
        self.transport = transport
        self.state = state if state is not None else StatsState()

    @property
    def stats(self) -> TaskStats:
        return self.state.stats

    async def refresh(self) -> None:
        self.state.error = None
        self.state.loading = True
        try:
            tasks = await self.transport.list()
        except RequestFailed as e:
            logger.warning("Error fetching stats: %s", e.detail)
            self.state.error = STATS_ERROR_MESSAGE
            return
        finally:
            self.state.loading = False

        self.state.stats = compute_stats(tasks)
        logger.debug("Stats refreshed: %s", self.state.stats)
