# src/task_dashboard/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires the HTTP transport, the task list controller and the statistics
  panel into AppState.
"""

from __future__ import annotations

import logging

import httpx

from ..config import get_settings
from ..core.ports import ConfirmPrompt, Notifier
from ..core.state import AppState
from ..tasks.task_client import TaskClient
from ..tasks.task_controller import TaskController
from ..tasks.task_views import StatsPanel

logger = logging.getLogger(__name__)


def _auto_confirm(question: str) -> bool:
    logger.debug("Auto-confirmed: %s", question)
    return True


def create_initial_state(
    *,
    settings=None,
    confirm: ConfirmPrompt | None = None,
    notify: Notifier | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the HTTP transport) injectable makes the app easier to
    test and avoids hidden global config reads. If settings is None, falls back
    to get_settings().
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    if not settings.confirm_deletes:
        confirm = _auto_confirm

    client = TaskClient(settings.api_url, transport=transport)

    state = AppState(
        settings=settings,
        client=client,
        tasks=TaskController(client, confirm=confirm, notify=notify),
        stats=StatsPanel(client),
    )
    return state


async def refresh_all(state: AppState) -> None:
    """Refresh the task list and the statistics panel (each with its own fetch)."""
    await state.tasks.refresh()
    await state.stats.refresh()


async def shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        await state.client.aclose()
    except Exception:
        logger.debug("HTTP client close failed.", exc_info=True)
