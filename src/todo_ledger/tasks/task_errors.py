# src/todo_ledger/tasks/task_errors.py

from __future__ import annotations


class LedgerError(Exception):
    """Base class for rejected ledger operations (never a partial mutation)."""


class InvalidInput(LedgerError):
    """Empty or too long description, malformed account identifier."""


class NotFound(LedgerError):
    """Task id not present for the account in question."""


class InvalidState(LedgerError):
    """Operation not allowed given the task flags (e.g. already deleted)."""
