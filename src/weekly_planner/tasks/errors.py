# src/weekly_planner/tasks/errors.py

from __future__ import annotations


class TaskStoreError(Exception):
    """Base class for everything TaskStore raises."""


class InitializationError(TaskStoreError):
    """Data directory cannot be created or the database cannot be opened."""


class LockError(TaskStoreError):
    """Store lock unavailable (or the store was already closed)."""


class PersistenceError(TaskStoreError):
    """SQLite rejected a statement."""


class DecodeError(TaskStoreError):
    """A stored timestamp could not be parsed back."""


class CommandError(Exception):
    """
    Boundary error handed to the presentation layer.

    Carries a flat, human-readable message; the underlying error is chained as __cause__.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
