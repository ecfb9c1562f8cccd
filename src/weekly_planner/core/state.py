# src/weekly_planner/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from ..tasks.task_models import week_id_for
from .ports import TaskRepo


@dataclass
class AppState:
    # Settings are kept on the state so commands can read paths/app name.
    settings: object

    task_store: TaskRepo

    # Console session: the week being viewed and ids of the last listing (1-based refs).
    current_week: str = field(default_factory=lambda: week_id_for(date.today()))
    last_listing: list[str] = field(default_factory=list)
