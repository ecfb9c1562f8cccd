# src/weekly_planner/tasks/task_api.py

"""
Boundary surface used by the presentation layer.

Every call validates the closed tags (day/status/priority) and the week id before
anything reaches the store, so the store only ever sees canonical strings.
Failures of any kind come back as CommandError with a flat, readable message.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Iterator

from ..core.ports import TaskRepo
from .errors import CommandError, TaskStoreError
from .task_models import (
    CreateTaskRequest,
    Day,
    Priority,
    Task,
    TaskStatus,
    TaskUpdate,
    parse_week_id,
)

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def _boundary(op: str) -> Iterator[None]:
    try:
        yield
    except ValueError as e:
        logger.info("%s rejected: %s", op, e)
        raise CommandError(f"{op}: {e}") from e
    except TaskStoreError as e:
        logger.exception("%s failed", op)
        raise CommandError(f"{op} failed: {e}") from e


def _require_id(task_id: str) -> str:
    task_id = (task_id or "").strip()
    if not task_id:
        raise ValueError("task id is required")
    return task_id


def _require_title(title: str) -> str:
    # Only checked; the title is stored exactly as given.
    if not (title or "").strip():
        raise ValueError("title is required")
    return title


def _validated_update(updates: TaskUpdate) -> TaskUpdate:
    return TaskUpdate(
        title=_require_title(updates.title) if updates.title is not None else None,
        description=updates.description,
        day=Day.parse(updates.day).value if updates.day is not None else None,
        status=TaskStatus.parse(updates.status).value if updates.status is not None else None,
        priority=Priority.parse(updates.priority).value if updates.priority is not None else None,
    )


def create_task(repo: TaskRepo, request: CreateTaskRequest) -> str:
    with _boundary("create_task"):
        task_id = repo.add_task(
            title=_require_title(request.title),
            description=request.description,
            day=Day.parse(request.day).value,
            status=TaskStatus.parse(request.status).value,
            priority=Priority.parse(request.priority).value,
            week_id=parse_week_id(request.week_id),
        )
    logger.info("Task created id=%s week=%s", task_id, request.week_id)
    return task_id


def list_tasks_for_week(repo: TaskRepo, week_id: str) -> list[Task]:
    with _boundary("list_tasks_for_week"):
        return repo.list_tasks_for_week(parse_week_id(week_id))


def update_task(repo: TaskRepo, task_id: str, updates: TaskUpdate) -> int:
    """Returns affected rows; 0 means no task with that id (not an error)."""
    with _boundary("update_task"):
        return repo.update_task(_require_id(task_id), _validated_update(updates))


def update_task_status(repo: TaskRepo, task_id: str, status: str) -> int:
    with _boundary("update_task_status"):
        return repo.update_task_status(_require_id(task_id), TaskStatus.parse(status).value)


def update_task_day(repo: TaskRepo, task_id: str, day: str) -> int:
    with _boundary("update_task_day"):
        return repo.update_task_day(_require_id(task_id), Day.parse(day).value)


def delete_task(repo: TaskRepo, task_id: str) -> int:
    with _boundary("delete_task"):
        n = repo.delete_task(_require_id(task_id))
    if n:
        logger.info("Task deleted id=%s", task_id)
    return n
