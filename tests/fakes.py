# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field

from todo_ledger.tasks.task_models import (
    TaskAdded,
    TaskDeleted,
    TaskEdited,
    TaskEvent,
    TaskStatusToggled,
)


@dataclass(slots=True)
class RecordingObserver:
    """
    LedgerObserver that keeps every notification for assertions.
    """

    events: list[TaskEvent] = field(default_factory=list)

    def task_added(self, event: TaskAdded) -> None:
        self.events.append(event)

    def task_edited(self, event: TaskEdited) -> None:
        self.events.append(event)

    def task_status_toggled(self, event: TaskStatusToggled) -> None:
        self.events.append(event)

    def task_deleted(self, event: TaskDeleted) -> None:
        self.events.append(event)


class FailingObserver:
    """Observer whose delivery always fails (broken webhook, full disk, ...)."""

    def __init__(self) -> None:
        self.calls = 0

    def _fail(self, event: object) -> None:
        self.calls += 1
        raise RuntimeError("sink unavailable")

    task_added = _fail
    task_edited = _fail
    task_status_toggled = _fail
    task_deleted = _fail


class FakeClock:
    """Deterministic clock: returns `now`, which tests move forward explicitly."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
