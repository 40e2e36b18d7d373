# src/task_dashboard/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any, cast

from ..core.state import AppState
from ..tasks.task_models import FILTER_ALL, Task, TaskDraft, TaskPriority, TaskStatus
from .bootstrap import refresh_all

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], Awaitable[str]]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], Awaitable[str]]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "description", "status", "priority")
FILTER_CHOICES = (FILTER_ALL, *[s.value for s in TaskStatus], *[p.value for p in TaskPriority])


class CommandRegistry:
    """Simple slash-command registry used by the console dashboard (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return await h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return await h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering ----


def _fmt_created(raw: str | None) -> str:
    if not raw:
        return "-"
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00")).astimezone().strftime("%Y-%m-%d %H:%M")
    except ValueError:
        return raw


def render_task(task: Task) -> str:
    mark = "x" if task.status == TaskStatus.COMPLETED else " "
    line = f"[{mark}] #{task.id} {task.title} ({task.priority or '-'}, created {_fmt_created(task.created_at)})"
    if task.description:
        line += f"\n      {task.description}"
    return line


def render_task_list(state: AppState) -> str:
    ctl = state.tasks
    lines: list[str] = []

    if ctl.error:
        lines.append(f"!! {ctl.error} (/dismiss to hide)")

    lines.append(f"Filter: {ctl.state.filter} | Search: {ctl.state.search or '-'}")

    visible = ctl.visible_tasks()
    if not visible:
        lines.append("No tasks found")
        lines.append("Try adjusting your filters or create a new task to get started!")
    else:
        lines.extend(render_task(t) for t in visible)

    lines.append(ctl.summary())
    return "\n".join(lines)


def render_stats(state: AppState) -> str:
    panel = state.stats
    if panel.state.error:
        return panel.state.error
    s = panel.stats
    return (
        "Statistics:\n"
        f"  Total tasks:     {s.total}\n"
        f"  Completed:       {s.completed}\n"
        f"  Pending:         {s.pending}\n"
        f"  Completion rate: {s.completion_rate}%"
    )


def _result(state: AppState) -> str:
    """Error banner when the last operation failed, task list otherwise."""
    err = state.tasks.error
    if err:
        return f"!! {err} (/dismiss to hide)"
    return render_task_list(state)


def _lookup(state: AppState, raw: str) -> Task | None:
    """Match user-typed ids against the snapshot (the store may use int or str ids)."""
    for t in state.tasks.tasks:
        if str(t.id) == raw:
            return t
    return None


def parse_fields(args: list[str]) -> dict[str, Any]:
    """
    Parse `field=value` tokens; tokens without "=" continue the previous value.

    "title=Buy oat milk priority=high" -> {"title": "Buy oat milk", "priority": "high"}
    """
    out: dict[str, Any] = {}
    current: str | None = None
    for tok in args:
        key, sep, value = tok.partition("=")
        if sep and key.lower() in EDITABLE_FIELDS:
            current = key.lower()
            out[current] = value
        elif current is not None:
            out[current] = f"{out[current]} {tok}"
        else:
            raise ValueError(f"Expected field=value, got: {tok}")
    return out


# ---- handlers ----


async def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


async def cmd_status(state: AppState, args: list[str]) -> str:
    ctl = state.tasks
    return (
        "Status:\n"
        f"  Endpoint: {state.client.endpoint}\n"
        f"  Tasks loaded: {len(ctl.tasks)}\n"
        f"  Filter: {ctl.state.filter} | Search: {ctl.state.search or '-'}\n"
        f"  Editing: {ctl.state.editing_id if ctl.state.editing_id is not None else '-'}"
    )


async def cmd_list(state: AppState, args: list[str]) -> str:
    return render_task_list(state)


async def cmd_refresh(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if emit:
        emit("Loading tasks...")
    await refresh_all(state)
    return render_task_list(state)


async def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add title | description | priority
    Description and priority are optional (priority defaults to medium).
    """
    raw = " ".join(args)
    parts = [p.strip() for p in raw.split("|")]
    title = parts[0] if parts else ""
    if not title:
        return "Usage: /add title | description | priority"

    description = parts[1] if len(parts) > 1 else ""
    priority = (parts[2] if len(parts) > 2 else "").lower() or TaskPriority.MEDIUM
    if priority not in {p.value for p in TaskPriority}:
        return f"Unknown priority: {priority}. Use one of: low, medium, high."

    await state.tasks.create(TaskDraft(title=title, description=description, priority=priority))
    await state.stats.refresh()
    return _result(state)


async def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <id>                      -> select the task and show its fields
    /edit <id> field=value ...      -> patch title/description/status/priority
    """
    if not args:
        return "Usage: /edit <id> [title=...] [description=...] [status=...] [priority=...]"

    found = _lookup(state, args[0])
    if found is None:
        return f"No task with id {args[0]}. Use /refresh to reload."
    task = state.tasks.begin_edit(found.id) or found

    if len(args) == 1:
        return f"Editing task #{task.id}:\n{render_task(task)}\nSend /edit {task.id} field=value ... or /cancel."

    try:
        patch = parse_fields(args[1:])
    except ValueError as e:
        return str(e)

    if "status" in patch and patch["status"] not in {s.value for s in TaskStatus}:
        return "Status must be pending or completed."

    await state.tasks.update(task.id, patch)
    await state.stats.refresh()
    return _result(state)


async def cmd_cancel(state: AppState, args: list[str]) -> str:
    state.tasks.cancel_edit()
    return "Edit cancelled."


async def cmd_done(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /done <id>"
    task = _lookup(state, args[0])
    if task is None:
        return f"No task with id {args[0]}. Use /refresh to reload."

    await state.tasks.toggle_status(task.id)
    await state.stats.refresh()
    return _result(state)


async def cmd_rm(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /rm <id>"
    task = _lookup(state, args[0])
    if task is None:
        return f"No task with id {args[0]}. Use /refresh to reload."

    deleted = await state.tasks.delete(task.id)
    if deleted is None:
        return "Delete cancelled."
    if deleted:
        await state.stats.refresh()
    return _result(state)


async def cmd_filter(state: AppState, args: list[str]) -> str:
    if not args:
        return f"Filter is {state.tasks.state.filter}. Choices: {', '.join(FILTER_CHOICES)}."
    selector = args[0].lower()
    if selector not in FILTER_CHOICES:
        return f"Unknown filter: {selector}. Choices: {', '.join(FILTER_CHOICES)}."
    state.tasks.set_filter(selector)
    return render_task_list(state)


async def cmd_search(state: AppState, args: list[str]) -> str:
    state.tasks.set_search(" ".join(args))
    return render_task_list(state)


async def cmd_stats(state: AppState, args: list[str]) -> str:
    await state.stats.refresh()
    return render_stats(state)


async def cmd_dismiss(state: AppState, args: list[str]) -> str:
    state.tasks.clear_error()
    return "Error dismissed."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show endpoint, filter and edit state.")
registry.register("list", cmd_list, help_text="Show tasks matching the current filter/search.", aliases=["ls"])
registry.register("refresh", cmd_refresh, help_text="Reload tasks and statistics from the store.")
registry.register("add", cmd_add, help_text="Create a task: /add title | description | low|medium|high.")
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <id> field=value ...")
registry.register("cancel", cmd_cancel, help_text="Stop editing the selected task.")
registry.register("done", cmd_done, help_text="Toggle a task between pending and completed: /done <id>.")
registry.register("rm", cmd_rm, help_text="Delete a task (asks for confirmation): /rm <id>.", aliases=["delete"])
registry.register("filter", cmd_filter, help_text="Filter by all | pending | completed | low | medium | high.")
registry.register("search", cmd_search, help_text="Search title/description: /search text (empty clears).")
registry.register("stats", cmd_stats, help_text="Show task statistics.")
registry.register("dismiss", cmd_dismiss, help_text="Hide the current error message.")
