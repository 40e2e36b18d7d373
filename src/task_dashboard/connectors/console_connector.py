# src/task_dashboard/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
import sys
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.commands import render_stats, render_task_list
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _rewrite_prev_line(line: str) -> None:
    """
    Replace the last terminal line with `line`.
    Best-effort: if not a TTY, just print a new line.
    """
    try:
        if sys.stdout.isatty():
            sys.stdout.write("\033[1A\033[2K\r")
            sys.stdout.write(line + "\n")
            sys.stdout.flush()
        else:
            print(line)
    except OSError:
        print(line)


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def console_confirm(question: str) -> bool:
    """Blocking y/N prompt; anything but an explicit yes declines."""
    try:
        answer = input(f"[{_ts_local()}] {question} [y/N]: ")
    except (EOFError, KeyboardInterrupt):
        print()
        return False
    return answer.strip().lower() in {"y", "yes"}


def console_notify(text: str) -> None:
    print(f"[{_ts_local()}] ✔ {text}", flush=True)


def run_console_loop(state: AppState, runner: asyncio.Runner) -> None:
    """
    Interactive dashboard. Each command runs to completion on `runner`'s loop
    before the next line is read.
    """
    logger.info("Console dashboard started (endpoint=%s).", state.client.endpoint)
    _print_ts("[DASHBOARD] Use /help for commands. Use /exit to quit.\n")

    print(render_stats(state))
    print(render_task_list(state))

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    while True:
        try:
            user_input = input(">>> ").strip()
            _rewrite_prev_line(f"[{_ts_local()}] >>> {user_input}")
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            cmd_response = runner.run(command_registry.handle(state, user_input, emit=emit))
        except Exception:
            logger.exception("Command handler crashed.")
            cmd_response = "Internal error while handling a command."

        if cmd_response is None:
            cmd_response = "Commands start with '/'. Use /help to list available commands."

        print(f"[{_ts_local()}] {cmd_response}\n")

    logger.info("Console dashboard finished.")
