# tests/test_cli.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from weekly_planner.cli import main as cli_main
from weekly_planner.cli.bootstrap import create_initial_state, shutdown
from weekly_planner.connectors.console_connector import run_console_loop
from weekly_planner.core.state import AppState
from weekly_planner.tasks.errors import InitializationError, LockError


def _feed(monkeypatch: pytest.MonkeyPatch, lines: list[str]) -> None:
    it = iter(lines)

    def fake_input(prompt: str = "") -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)


def test_bootstrap_opens_store_in_data_dir(settings: SimpleNamespace) -> None:
    state = create_initial_state(settings=settings)
    try:
        assert settings.tasks_db_path.exists()
        assert state.task_store.count_tasks() == 0
        assert state.current_week
    finally:
        shutdown(state)

    with pytest.raises(LockError):
        state.task_store.count_tasks()
    shutdown(state)  # idempotent


def test_bootstrap_surfaces_initialization_error(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x", "utf-8")
    settings = SimpleNamespace(tasks_db_path=blocker / "weekly_planner.db")

    with pytest.raises(InitializationError):
        create_initial_state(settings=settings)


def test_console_loop_runs_commands_until_exit(
    state: AppState, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _feed(monkeypatch, ["", "/add monday high Plan week", "hello", "/week", "/exit", "/week"])

    run_console_loop(state)

    out = capsys.readouterr().out
    assert "Added task" in out
    assert "Commands start with '/'" in out
    assert "1. [ ] Plan week (todo, high)" in out
    assert state.task_store.count_tasks() == 1


def test_main_runs_console_and_closes_store(
    settings: SimpleNamespace, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)
    monkeypatch.setattr(cli_main, "setup_logging", lambda **_: settings.log_dir / "weekly_planner.log")
    _feed(monkeypatch, ["/add friday low Relax"])

    assert cli_main.main() == 0
    assert "Added task" in capsys.readouterr().out
    assert settings.tasks_db_path.exists()


def test_main_exits_non_zero_when_database_cannot_open(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x", "utf-8")
    settings = SimpleNamespace(
        app_name="weekly-planner-test",
        log_level="INFO",
        data_dir=blocker / "sub",
        tasks_db_path=blocker / "sub" / "weekly_planner.db",
        log_dir=tmp_path,
    )
    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)
    monkeypatch.setattr(cli_main, "setup_logging", lambda **_: tmp_path / "weekly_planner.log")

    assert cli_main.main() == 1
    assert "Cannot open the task database" in capsys.readouterr().err
