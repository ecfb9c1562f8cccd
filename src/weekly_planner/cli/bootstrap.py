# src/weekly_planner/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root": it takes settings once and wires the
concrete SQLite TaskStore into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().

    Raises InitializationError if the data directory or database cannot be set up.
    """
    if settings is None:
        settings = get_settings()

    store = TaskStore(settings.tasks_db_path)
    return AppState(settings=settings, task_store=store)


def shutdown(state: AppState) -> None:
    """Release the store connection; never raises."""
    try:
        state.task_store.close()
    except Exception:
        logger.exception("TaskStore close failed.")
