# src/todo_ledger/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The ledger depends on Protocols instead of concrete implementations.
This keeps storage and notification sinks swappable and makes testing easier.
"""

from typing import Protocol

from ..tasks.task_models import (
    Task,
    TaskAdded,
    TaskDeleted,
    TaskEdited,
    TaskStatusToggled,
)


class TaskRepo(Protocol):
    """
    Per-account task storage.

    Accounts arrive already normalised by the ledger. The repo does no
    validation of its own: the ledger decides what is allowed, the repo applies it.
    """

    def count_accounts(self) -> int: ...
    def count_tasks(self, account: str) -> int: ...
    def count_active_tasks(self, account: str) -> int: ...
    def count_completed_tasks(self, account: str) -> int: ...

    def insert_task(
            self,
            account: str,
            *,
            task_id: int,
            description: str,
            timestamp: int,
    ) -> None: ...

    def get_task(self, account: str, task_id: int) -> Task | None: ...
    def list_tasks(self, account: str, *, include_deleted: bool = True) -> list[Task]: ...

    def update_task_fields(
            self,
            account: str,
            task_id: int,
            *,
            description: str | None = None,
            completed: bool | None = None,
            deleted: bool | None = None,
            updated_at: int | None = None,
    ) -> None: ...


class LedgerObserver(Protocol):
    """
    Notification sink for committed ledger mutations.

    Called synchronously after the state change; whatever the observer does
    (log, forward, record) cannot undo the mutation.
    """

    def task_added(self, event: TaskAdded) -> None: ...
    def task_edited(self, event: TaskEdited) -> None: ...
    def task_status_toggled(self, event: TaskStatusToggled) -> None: ...
    def task_deleted(self, event: TaskDeleted) -> None: ...
