# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from weekly_planner.core.state import AppState
from weekly_planner.tasks.task_store import TaskStore

WEEK = "2024-01-01"


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    data_dir = tmp_path / "planner"
    return SimpleNamespace(
        app_name="weekly-planner-test",
        log_level="DEBUG",
        data_dir=data_dir,
        tasks_db_path=data_dir / "weekly_planner.db",
        log_dir=data_dir,
    )


@pytest.fixture()
def store(settings: SimpleNamespace):
    s = TaskStore(settings.tasks_db_path)
    yield s
    s.close()


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    """
    AppState wired with a real SQLite store, pinned to a fixed week.

    NOTE: the store is real on purpose, its behaviour is part of what the
    command tests check.
    """
    return AppState(settings=settings, task_store=store, current_week=WEEK)
