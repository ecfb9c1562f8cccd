# src/weekly_planner/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import threading
import uuid
from collections.abc import Iterator, Sequence
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

from .errors import InitializationError, LockError, PersistenceError, TaskStoreError
from .task_models import Task, TaskUpdate, format_ts, parse_ts

logger = logging.getLogger(__name__)

DB_FILENAME = "weekly_planner.db"

_COLUMNS = "id, title, description, day, status, priority, week_id, created_at, updated_at"


class TaskStore:
    """
    SQLite task store.

    - one shared connection, every public call holds the store lock for its full duration
    - schema: a single table created if missing (no migrations, no secondary indexes)
    - each mutation is one statement, committed before the lock is released
    - update/delete report affected rows; an unknown id is not an error (0 rows)

    Day/status/priority are stored as given. Validation belongs to the caller
    (see tasks/task_api.py).
    """

    def __init__(self, db_path: str | Path = DB_FILENAME) -> None:
        self._db_path = Path(db_path)
        self._lock = threading.Lock()
        self._last_ts: datetime | None = None
        self._conn: sqlite3.Connection | None = None

        data_dir = self._db_path.parent
        try:
            if not data_dir.exists():
                # Private to the current user: task titles are personal data.
                data_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
        except OSError as e:
            raise InitializationError(f"cannot create data directory {data_dir}: {e}") from e

        try:
            self._conn = self._connect()
            self._ensure_schema(self._conn)
        except sqlite3.Error as e:
            if self._conn is not None:
                with contextlib.suppress(sqlite3.Error):
                    self._conn.close()
                self._conn = None
            raise InitializationError(f"cannot open database {self._db_path}: {e}") from e

        try:
            total = self.count_tasks()
        except TaskStoreError:
            total = -1
        logger.info("TaskStore ready db=%s total=%s", self._db_path, total)

    @property
    def db_path(self) -> Path:
        return self._db_path

    def close(self) -> None:
        with self._lock:
            if self._conn is None:
                return
            self._conn.close()
            self._conn = None
        logger.info("TaskStore closed db=%s", self._db_path)

    # ---- low-level helpers ----

    def _connect(self) -> sqlite3.Connection:
        # Shared across threads; the store lock serializes all access.
        conn = sqlite3.connect(str(self._db_path), timeout=30.0, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    @staticmethod
    def _ensure_schema(conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS tasks (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                description TEXT,
                day TEXT NOT NULL,
                status TEXT NOT NULL,
                priority TEXT NOT NULL,
                week_id TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )
        conn.commit()

    @contextlib.contextmanager
    def _locked(self) -> Iterator[sqlite3.Connection]:
        with self._lock:
            if self._conn is None:
                raise LockError(f"task store is closed (db={self._db_path})")
            yield self._conn

    def _next_ts(self) -> datetime:
        """Current UTC time, strictly after any timestamp this store issued before."""
        now = datetime.now(UTC)
        if self._last_ts is not None and now <= self._last_ts:
            now = self._last_ts + timedelta(microseconds=1)
        self._last_ts = now
        return now

    @staticmethod
    def _write(conn: sqlite3.Connection, sql: str, params: Sequence[Any]) -> int:
        try:
            cur = conn.execute(sql, params)
            conn.commit()
        except sqlite3.Error as e:
            with contextlib.suppress(sqlite3.Error):
                conn.rollback()
            raise PersistenceError(str(e)) from e
        return cur.rowcount

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=str(row["id"]),
            title=row["title"],
            description=row["description"],
            day=row["day"],
            status=row["status"],
            priority=row["priority"],
            week_id=row["week_id"],
            created_at=parse_ts(row["created_at"]),
            updated_at=parse_ts(row["updated_at"]),
        )

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._locked() as conn:
            try:
                (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            except sqlite3.Error as e:
                raise PersistenceError(str(e)) from e
        return int(n)

    def add_task(
        self,
        *,
        title: str,
        day: str,
        status: str,
        priority: str,
        week_id: str,
        description: str | None = None,
    ) -> str:
        task_id = str(uuid.uuid4())

        with self._locked() as conn:
            now = format_ts(self._next_ts())
            self._write(
                conn,
                f"INSERT INTO tasks ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (task_id, title, description, day, status, priority, week_id, now, now),
            )

        logger.debug("Task added id=%s week=%s day=%s status=%s", task_id, week_id, day, status)
        return task_id

    def list_tasks_for_week(self, week_id: str) -> list[Task]:
        """
        All tasks of one week, oldest first.

        A row with an unreadable timestamp aborts the whole read with DecodeError.
        """
        with self._locked() as conn:
            try:
                rows = conn.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM tasks
                    WHERE week_id = ?
                    ORDER BY created_at ASC, rowid ASC
                    """,
                    (week_id,),
                ).fetchall()
            except sqlite3.Error as e:
                raise PersistenceError(str(e)) from e

        return [self._row_to_task(r) for r in rows]

    def update_task(self, task_id: str, updates: TaskUpdate) -> int:
        """
        Apply all supplied fields plus one updated_at refresh in a single statement.

        Returns affected rows: 0 for an unknown id or an empty update.
        """
        pairs = updates.assignments()
        sets = [f"{name} = ?" for name, _ in pairs]
        sets.append("updated_at = ?")
        params: list[Any] = [value for _, value in pairs]

        with self._locked() as conn:
            if not pairs:
                return 0
            params.append(format_ts(self._next_ts()))
            params.append(task_id)
            n = self._write(conn, f"UPDATE tasks SET {', '.join(sets)} WHERE id = ?", params)

        logger.debug("Task updated id=%s fields=%s rows=%s", task_id, [p[0] for p in pairs], n)
        return n

    def update_task_status(self, task_id: str, status: str) -> int:
        return self.update_task(task_id, TaskUpdate(status=status))

    def update_task_day(self, task_id: str, day: str) -> int:
        return self.update_task(task_id, TaskUpdate(day=day))

    def delete_task(self, task_id: str) -> int:
        with self._locked() as conn:
            n = self._write(conn, "DELETE FROM tasks WHERE id = ?", (task_id,))
        logger.debug("Task deleted id=%s rows=%s", task_id, n)
        return n
