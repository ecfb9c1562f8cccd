# src/weekly_planner/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from datetime import date, timedelta
from typing import cast

from ..core.state import AppState
from ..tasks import task_api
from ..tasks.errors import CommandError
from ..tasks.task_models import (
    CreateTaskRequest,
    Day,
    Task,
    TaskStatus,
    TaskUpdate,
    parse_week_id,
    week_id_for,
)

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = ("title", "description", "day", "status", "priority")


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /week, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        CommandError raised by a handler becomes the reply text.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, emit)

            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except CommandError as e:
            return e.message

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----


def _resolve_ref(state: AppState, ref: str) -> str:
    """
    A task ref is one of:
    - the 1-based position in the last /week listing
    - a unique id prefix (e.g. the short id shown) of a task in that listing
    - a full task id
    """
    if ref.isdigit() and 1 <= int(ref) <= len(state.last_listing):
        return state.last_listing[int(ref) - 1]

    matches = [task_id for task_id in state.last_listing if task_id.startswith(ref)]
    if len(matches) > 1:
        raise CommandError(f"Ambiguous task id {ref!r} ({len(matches)} matches). Use more characters.")
    if matches:
        return matches[0]

    if ref.isdigit():
        raise CommandError(f"No task #{ref} in the last listing. Use /week to list tasks.")
    return ref


def _format_task(i: int, task: Task) -> str:
    done = "x" if task.status == TaskStatus.COMPLETED else " "
    line = f"  {i}. [{done}] {task.title} ({task.status}, {task.priority}) id={task.id[:8]}"
    if task.description:
        line += f"\n       {task.description}"
    return line


def _render_week(state: AppState, tasks: list[Task]) -> str:
    start = date.fromisoformat(state.current_week)
    end = start + timedelta(days=6)
    lines = [f"Week of {start:%b %d} - {end:%b %d, %Y} ({len(tasks)} tasks)"]

    by_day: dict[str, list[Task]] = {d.value: [] for d in Day}
    unknown: list[Task] = []
    for t in tasks:
        by_day.get(t.day, unknown).append(t)

    # Numbering follows display order, which is what refs point at.
    listing: list[str] = []
    for day in Day:
        day_tasks = by_day[day.value]
        if not day_tasks:
            continue
        lines.append(f"{day.value.capitalize()}:")
        for t in day_tasks:
            listing.append(t.id)
            lines.append(_format_task(len(listing), t))
    if unknown:
        lines.append("Other:")
        for t in unknown:
            listing.append(t.id)
            lines.append(_format_task(len(listing), t))

    state.last_listing = listing
    if not tasks:
        lines.append("  (no tasks)")
    return "\n".join(lines)


def _not_found(ref: str) -> str:
    return f"No task {ref!r}. Nothing changed."


# ---- commands ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_week(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /week              -> list the current week
    /week next|prev    -> move one week forward/back and list it
    /week today        -> jump to this week
    /week YYYY-MM-DD   -> jump to the week containing that date
    """
    if args:
        arg = args[0].lower()
        current = date.fromisoformat(state.current_week)
        if arg == "next":
            state.current_week = week_id_for(current + timedelta(days=7))
        elif arg in ("prev", "previous"):
            state.current_week = week_id_for(current - timedelta(days=7))
        elif arg == "today":
            state.current_week = week_id_for(date.today())
        else:
            try:
                state.current_week = week_id_for(date.fromisoformat(parse_week_id(arg)))
            except ValueError as e:
                raise CommandError(str(e)) from e

    tasks = task_api.list_tasks_for_week(state.task_store, state.current_week)
    return _render_week(state, tasks)


def cmd_add(state: AppState, args: list[str]) -> str:
    """/add <day> <priority> <title...>  (status starts as todo)"""
    if len(args) < 3:
        return "Usage: /add <day> <priority> <title...>"

    request = CreateTaskRequest(
        title=" ".join(args[2:]),
        day=args[0],
        status=TaskStatus.TODO,
        priority=args[1],
        week_id=state.current_week,
    )
    task_id = task_api.create_task(state.task_store, request)
    return f"Added task {task_id[:8]} on {request.day.lower()} (week {state.current_week})."


def cmd_edit(state: AppState, args: list[str]) -> str:
    """/edit <ref> <field> <value...>"""
    if len(args) < 3 or args[1].lower() not in _EDITABLE_FIELDS:
        return f"Usage: /edit <ref> <{'|'.join(_EDITABLE_FIELDS)}> <value...>"

    task_id = _resolve_ref(state, args[0])
    field_name = args[1].lower()
    updates = TaskUpdate(**{field_name: " ".join(args[2:])})

    if not task_api.update_task(state.task_store, task_id, updates):
        return _not_found(args[0])
    return f"Task {args[0]}: {field_name} updated."


def cmd_status(state: AppState, args: list[str]) -> str:
    """/status <ref> <todo|in-progress|completed>"""
    if len(args) != 2:
        return "Usage: /status <ref> <todo|in-progress|completed>"

    task_id = _resolve_ref(state, args[0])
    if not task_api.update_task_status(state.task_store, task_id, args[1]):
        return _not_found(args[0])
    return f"Task {args[0]}: status -> {args[1].lower()}."


def cmd_move(state: AppState, args: list[str]) -> str:
    """/move <ref> <day>"""
    if len(args) != 2:
        return "Usage: /move <ref> <day>"

    task_id = _resolve_ref(state, args[0])
    if not task_api.update_task_day(state.task_store, task_id, args[1]):
        return _not_found(args[0])
    return f"Task {args[0]}: moved to {args[1].lower()}."


def cmd_rm(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/rm <ref>"""
    if len(args) != 1:
        return "Usage: /rm <ref>"

    task_id = _resolve_ref(state, args[0])
    if not task_api.delete_task(state.task_store, task_id):
        return _not_found(args[0])

    # Positions shift after a delete; force a fresh listing before the next numeric ref.
    state.last_listing = []
    if emit:
        emit("Positions changed; use /week to list again.")
    return f"Task {args[0]} deleted."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register(
    "week", cmd_week, help_text="List tasks: /week [next|prev|today|YYYY-MM-DD].", aliases=["w", "ls"]
)
registry.register("add", cmd_add, help_text="Add a task: /add <day> <priority> <title...>.")
registry.register("edit", cmd_edit, help_text="Edit one field: /edit <ref> <field> <value...>.")
registry.register("status", cmd_status, help_text="Set status: /status <ref> <todo|in-progress|completed>.")
registry.register("move", cmd_move, help_text="Move to another day: /move <ref> <day>.")
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <ref>.", aliases=["del"])
