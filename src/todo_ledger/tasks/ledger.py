# src/todo_ledger/tasks/ledger.py

from __future__ import annotations

"""
Per-account task ledger.

Every operation takes the caller account explicitly. Task ids are scoped to
that account: id N of one account has nothing to do with id N of another.

State machine per task (two independent flags):
- completed toggles freely while the task is not deleted,
- deleted goes False -> True exactly once; afterwards both flags are frozen.

Mutations run under a single writer lock (check + apply is one step), and
observers are notified only after the store has committed the change.
"""

import logging
import threading
import time
from collections.abc import Callable

from ..core.ports import LedgerObserver, TaskRepo
from .task_errors import InvalidInput, InvalidState, NotFound
from .task_models import (
    MAX_DESCRIPTION_LENGTH,
    Task,
    TaskAdded,
    TaskDeleted,
    TaskEdited,
    TaskEvent,
    TaskStats,
    TaskStatusToggled,
)

logger = logging.getLogger(__name__)

# Same message for "out of range" and "belongs to someone else": no leak of other accounts' sizes.
TASK_NOT_FOUND = "Task does not exist"
TASK_DELETED = "Task is deleted"
DESCRIPTION_EMPTY = "Description cannot be empty"
DESCRIPTION_TOO_LONG = "Description too long"

# Largest id SQLite can bind as INTEGER.
MAX_TASK_ID = 2**63 - 1


def normalize_account(account: str | None) -> str:
    """Accounts are opaque, but compared case-insensitively (0xAbC... == 0xabc...)."""
    acct = (account or "").strip().lower()
    if not acct:
        raise InvalidInput("Account identifier is required")
    return acct


class TaskLedger:
    def __init__(
        self,
        repo: TaskRepo,
        *,
        observer: LedgerObserver | None = None,
        max_description_length: int = MAX_DESCRIPTION_LENGTH,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._repo = repo
        self._observer = observer
        self._max_len = int(max_description_length)
        self._clock = clock
        self._lock = threading.RLock()

    # ---- helpers ----

    def _now(self) -> int:
        return int(self._clock())

    def _validate_description(self, description: str | None) -> str:
        if description is None or not str(description).strip():
            raise InvalidInput(DESCRIPTION_EMPTY)
        text = str(description)
        if len(text) > self._max_len:
            raise InvalidInput(DESCRIPTION_TOO_LONG)
        return text

    def _require_task(self, account: str, task_id: int) -> Task:
        # bool is an int subclass; True must not alias task 1.
        if isinstance(task_id, bool) or not isinstance(task_id, int):
            raise NotFound(TASK_NOT_FOUND)
        if not 0 <= task_id <= MAX_TASK_ID:
            raise NotFound(TASK_NOT_FOUND)
        task = self._repo.get_task(account, task_id)
        if task is None:
            raise NotFound(TASK_NOT_FOUND)
        return task

    def _require_live_task(self, account: str, task_id: int) -> Task:
        task = self._require_task(account, task_id)
        if task.deleted:
            raise InvalidState(TASK_DELETED)
        return task

    def _notify(self, event: TaskEvent) -> None:
        if self._observer is None:
            return
        try:
            if isinstance(event, TaskAdded):
                self._observer.task_added(event)
            elif isinstance(event, TaskEdited):
                self._observer.task_edited(event)
            elif isinstance(event, TaskStatusToggled):
                self._observer.task_status_toggled(event)
            elif isinstance(event, TaskDeleted):
                self._observer.task_deleted(event)
        except Exception:
            # The mutation is already committed; a broken sink must not undo it.
            logger.exception("Ledger observer failed for %s", type(event).__name__)

    # ---- mutators ----

    def add_task(self, account: str, description: str) -> int:
        acct = normalize_account(account)
        text = self._validate_description(description)

        with self._lock:
            task_id = self._repo.count_tasks(acct)
            ts = self._now()
            self._repo.insert_task(acct, task_id=task_id, description=text, timestamp=ts)
            logger.debug("Task added account=%s task_id=%s", acct, task_id)
            self._notify(TaskAdded(account=acct, task_id=task_id, description=text, timestamp=ts))
        return task_id

    def edit_task(self, account: str, task_id: int, new_description: str) -> None:
        acct = normalize_account(account)

        with self._lock:
            task = self._require_live_task(acct, task_id)
            text = self._validate_description(new_description)
            ts = self._now()
            self._repo.update_task_fields(acct, task.id, description=text, updated_at=ts)
            self._notify(TaskEdited(account=acct, task_id=task.id, new_description=text, timestamp=ts))

    def toggle_task_status(self, account: str, task_id: int) -> bool:
        """Flip completed; returns the new value."""
        acct = normalize_account(account)

        with self._lock:
            task = self._require_live_task(acct, task_id)
            completed = not task.completed
            ts = self._now()
            self._repo.update_task_fields(acct, task.id, completed=completed, updated_at=ts)
            self._notify(
                TaskStatusToggled(account=acct, task_id=task.id, completed=completed, timestamp=ts)
            )
        return completed

    def soft_delete_task(self, account: str, task_id: int) -> None:
        acct = normalize_account(account)

        with self._lock:
            task = self._require_live_task(acct, task_id)
            ts = self._now()
            self._repo.update_task_fields(acct, task.id, deleted=True, updated_at=ts)
            self._notify(TaskDeleted(account=acct, task_id=task.id, timestamp=ts))

    # ---- accessors (caller-owned) ----

    def get_task(self, account: str, task_id: int) -> Task:
        return self._require_task(normalize_account(account), task_id)

    def get_all_tasks(self, account: str) -> list[Task]:
        return self._repo.list_tasks(normalize_account(account), include_deleted=True)

    def get_active_tasks(self, account: str) -> list[Task]:
        return self._repo.list_tasks(normalize_account(account), include_deleted=False)

    def get_task_count(self, account: str) -> int:
        return self._repo.count_tasks(normalize_account(account))

    def get_active_task_count(self, account: str) -> int:
        return self._repo.count_active_tasks(normalize_account(account))

    def get_completed_task_count(self, account: str) -> int:
        return self._repo.count_completed_tasks(normalize_account(account))

    def get_stats(self, account: str) -> TaskStats:
        """All three counters read under the writer lock, so they agree with each other."""
        acct = normalize_account(account)
        with self._lock:
            return TaskStats(
                total=self._repo.count_tasks(acct),
                active=self._repo.count_active_tasks(acct),
                completed=self._repo.count_completed_tasks(acct),
            )

    # ---- public read across accounts ----

    def get_user_tasks(self, other_account: str) -> list[Task]:
        """Every task of any account, deleted ones included. Not restricted by caller."""
        return self._repo.list_tasks(normalize_account(other_account), include_deleted=True)
