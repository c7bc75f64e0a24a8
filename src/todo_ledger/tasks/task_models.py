# src/todo_ledger/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass

MAX_DESCRIPTION_LENGTH = 500


@dataclass(frozen=True, slots=True)
class Task:
    """
    Read-only snapshot of one ledger entry.

    Notes:
    - id is scoped to the owning account (0, 1, 2, ...), never reused.
    - timestamp is the creation time in epoch seconds; edits do not move it.
    - deleted is a soft-delete flag; the record stays readable forever.
    """

    id: int
    description: str
    completed: bool = False
    deleted: bool = False
    timestamp: int = 0


@dataclass(frozen=True, slots=True)
class TaskStats:
    total: int
    active: int
    completed: int

    @property
    def deleted(self) -> int:
        return self.total - self.active


# ---- notifications (emitted after a mutation commits) ----


@dataclass(frozen=True, slots=True)
class TaskAdded:
    account: str
    task_id: int
    description: str
    timestamp: int


@dataclass(frozen=True, slots=True)
class TaskEdited:
    account: str
    task_id: int
    new_description: str
    timestamp: int


@dataclass(frozen=True, slots=True)
class TaskStatusToggled:
    account: str
    task_id: int
    completed: bool
    timestamp: int


@dataclass(frozen=True, slots=True)
class TaskDeleted:
    account: str
    task_id: int
    timestamp: int


TaskEvent = TaskAdded | TaskEdited | TaskStatusToggled | TaskDeleted
