# src/tasklist/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs the console REPL.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import ConsoleNotifier, run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    setup_logging(log_dir=settings.data_dir, console_level=settings.log_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings, notifier=ConsoleNotifier())

    try:
        if settings.console_enabled:
            run_console_loop(state)
        else:
            logger.info(
                "Console disabled; %s task(s) in %s.",
                state.task_store.count_tasks(),
                state.task_store.db_path,
            )
    finally:
        state.task_store.close()
        logger.info("Bye.")


if __name__ == "__main__":
    main()
