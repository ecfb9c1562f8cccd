# src/weekly_planner/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from datetime import UTC, date, datetime, timedelta
from enum import StrEnum
from typing import Any

from .errors import DecodeError


class _Tag(StrEnum):
    """Closed set of string tags; parse() accepts any case and surrounding spaces."""

    @classmethod
    def parse(cls, raw: str | _Tag) -> Any:
        if isinstance(raw, cls):
            return raw
        key = str(raw or "").strip().lower()
        try:
            return cls(key)
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            label = re.sub(r"(?<!^)(?=[A-Z])", " ", cls.__name__).lower()
            raise ValueError(f"invalid {label} {raw!r} (expected one of: {allowed})") from None


class Day(_Tag):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


class TaskStatus(_Tag):
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class Priority(_Tag):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ---- week anchors ----


def week_id_for(d: date) -> str:
    """ISO date of the Monday of the week containing d."""
    if isinstance(d, datetime):
        d = d.date()
    return (d - timedelta(days=d.weekday())).isoformat()


def parse_week_id(raw: str) -> str:
    """Accept only a canonical YYYY-MM-DD date; the value is returned unchanged."""
    try:
        canonical = date.fromisoformat(str(raw)).isoformat()
    except ValueError:
        canonical = None
    if canonical != raw:
        raise ValueError(f"invalid week id {raw!r} (expected YYYY-MM-DD)")
    return raw


# ---- timestamp codec ----


def format_ts(ts: datetime) -> str:
    # Fixed width, always UTC: lexical order == time order.
    return ts.astimezone(UTC).isoformat(timespec="microseconds")


def parse_ts(raw: str | None) -> datetime:
    if not raw:
        raise DecodeError(f"missing timestamp {raw!r}")
    try:
        ts = datetime.fromisoformat(raw)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"cannot parse timestamp {raw!r}") from e
    if ts.tzinfo is None:
        raise DecodeError(f"timestamp without timezone {raw!r}")
    return ts.astimezone(UTC)


@dataclass(slots=True)
class Task:
    id: str
    title: str
    description: str | None

    day: str
    status: str
    priority: str
    week_id: str

    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "day": self.day,
            "status": self.status,
            "priority": self.priority,
            "week_id": self.week_id,
            "created_at": format_ts(self.created_at),
            "updated_at": format_ts(self.updated_at),
        }


@dataclass(slots=True)
class TaskUpdate:
    """Partial field set; None means "leave untouched"."""

    title: str | None = None
    description: str | None = None
    day: str | None = None
    status: str | None = None
    priority: str | None = None

    def assignments(self) -> list[tuple[str, str]]:
        """(column, value) pairs for the supplied fields, in column order."""
        out: list[tuple[str, str]] = []
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                out.append((f.name, str(value)))
        return out


@dataclass(slots=True)
class CreateTaskRequest:
    title: str
    day: str
    status: str
    priority: str
    week_id: str
    description: str | None = None
