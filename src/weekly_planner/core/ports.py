# src/weekly_planner/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the boundary layer.

task_api and the console commands depend on this Protocol instead of the concrete
SQLite store, which keeps the storage swappable and makes testing easier.
"""

from typing import Any, Protocol


class TaskRepo(Protocol):
    def add_task(
            self,
            *,
            title: str,
            day: str,
            status: str,
            priority: str,
            week_id: str,
            description: str | None = None,
    ) -> str: ...

    def list_tasks_for_week(self, week_id: str) -> list[Any]: ...

    def update_task(self, task_id: str, updates: Any) -> int: ...  # TaskUpdate
    def update_task_status(self, task_id: str, status: str) -> int: ...
    def update_task_day(self, task_id: str, day: str) -> int: ...
    def delete_task(self, task_id: str) -> int: ...

    def count_tasks(self) -> int: ...
    def close(self) -> None: ...
