# src/today_tracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, loads stored items, runs the console
REPL and, on the way out, calls the background hook (prune, then save).
"""

from __future__ import annotations

import logging
import signal

from ..cli.bootstrap import create_initial_state, on_background, on_start, shutdown
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_dir = getattr(settings, "data_dir", ".local/today")
    setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s...", getattr(settings, "app_name", "today"))

    state = create_initial_state(settings=settings)
    on_start(state)

    def _handle_sigterm(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        raise KeyboardInterrupt

    try:
        signal.signal(signal.SIGTERM, _handle_sigterm)
    except Exception:
        # Some platforms may not support SIGTERM.
        pass

    try:
        run_console_loop(state)
    finally:
        try:
            on_background(state)
        except Exception:
            logger.exception("Background hook failed.")
        shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
