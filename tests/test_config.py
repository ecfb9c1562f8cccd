# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from weekly_planner.config import Settings

_VARS = ("APP_NAME", "LOG_LEVEL", "DATA_DIR", "TASKS_DB_PATH", "LOG_DIR")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for suffix in _VARS:
        monkeypatch.delenv(f"PLANNER_{suffix}", raising=False)


def test_defaults_live_in_a_private_user_dir() -> None:
    s = Settings.from_env()
    assert s.app_name == "weekly-planner"
    assert s.log_level == "INFO"
    assert s.data_dir == Path("~/.local/share/weekly-planner").expanduser()
    assert s.tasks_db_path == s.data_dir / "weekly_planner.db"
    assert s.log_dir == s.data_dir


def test_data_dir_override_moves_derived_paths(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PLANNER_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("PLANNER_LOG_LEVEL", "debug")

    s = Settings.from_env()
    assert s.data_dir == tmp_path
    assert s.tasks_db_path == tmp_path / "weekly_planner.db"
    assert s.log_level == "DEBUG"


def test_explicit_paths_and_blank_values(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PLANNER_TASKS_DB_PATH", str(tmp_path / "other.db"))
    monkeypatch.setenv("PLANNER_LOG_DIR", "   ")
    monkeypatch.setenv("PLANNER_APP_NAME", "")

    s = Settings.from_env()
    assert s.tasks_db_path == tmp_path / "other.db"
    assert s.log_dir == s.data_dir
    assert s.app_name == "weekly-planner"
