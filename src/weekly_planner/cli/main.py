# src/weekly_planner/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (opening the task database), then runs the
console REPL in the main thread.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state, shutdown
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from ..tasks.errors import InitializationError

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()

    # Console level from settings.log_level; the file log always gets DEBUG.
    console_level = getattr(logging, str(settings.log_level).upper(), logging.INFO)
    log_file = setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.info("Starting %s (log=%s)...", settings.app_name, log_file)

    try:
        state = create_initial_state(settings=settings)
    except InitializationError as e:
        logger.critical("Startup aborted: %s", e)
        print(f"Cannot open the task database: {e}", file=sys.stderr)
        return 1

    try:
        run_console_loop(state)
    finally:
        shutdown(state)
        logger.info("Bye.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
