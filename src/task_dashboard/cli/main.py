# src/task_dashboard/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, loads the task list and statistics,
then runs the console dashboard until /exit, EOF or Ctrl+C.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state, refresh_all, shutdown
from ..config import get_settings
from ..connectors.console_connector import console_confirm, console_notify, run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s (api=%s)...", settings.app_name, settings.api_url)

    state = create_initial_state(
        settings=settings,
        confirm=console_confirm,
        notify=console_notify,
    )

    with asyncio.Runner() as runner:
        try:
            runner.run(refresh_all(state))
            run_console_loop(state, runner)
        finally:
            runner.run(shutdown(state))
            logger.info("Bye.")


if __name__ == "__main__":
    main()
