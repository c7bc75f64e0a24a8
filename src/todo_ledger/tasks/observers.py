# src/todo_ledger/tasks/observers.py

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..core.ports import LedgerObserver
from .task_models import TaskAdded, TaskDeleted, TaskEdited, TaskStatusToggled

logger = logging.getLogger(__name__)


class LoggingObserver:
    """Writes every committed ledger change to the log (INFO)."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def task_added(self, event: TaskAdded) -> None:
        self._log.info(
            "TaskAdded account=%s task_id=%s len=%d ts=%s",
            event.account,
            event.task_id,
            len(event.description),
            event.timestamp,
        )

    def task_edited(self, event: TaskEdited) -> None:
        self._log.info(
            "TaskEdited account=%s task_id=%s len=%d ts=%s",
            event.account,
            event.task_id,
            len(event.new_description),
            event.timestamp,
        )

    def task_status_toggled(self, event: TaskStatusToggled) -> None:
        self._log.info(
            "TaskStatusToggled account=%s task_id=%s completed=%s ts=%s",
            event.account,
            event.task_id,
            event.completed,
            event.timestamp,
        )

    def task_deleted(self, event: TaskDeleted) -> None:
        self._log.info(
            "TaskDeleted account=%s task_id=%s ts=%s", event.account, event.task_id, event.timestamp
        )


class CompositeObserver:
    """
    Fan-out to several observers.

    A failing observer is logged and skipped; the others still get the event.
    """

    def __init__(self, observers: Iterable[LedgerObserver] = ()) -> None:
        self._observers: list[LedgerObserver] = list(observers)

    def add(self, observer: LedgerObserver) -> None:
        self._observers.append(observer)

    def _each(self, method: str, event: object) -> None:
        for obs in list(self._observers):
            try:
                getattr(obs, method)(event)
            except Exception:
                logger.exception("Observer %s.%s failed", type(obs).__name__, method)

    def task_added(self, event: TaskAdded) -> None:
        self._each("task_added", event)

    def task_edited(self, event: TaskEdited) -> None:
        self._each("task_edited", event)

    def task_status_toggled(self, event: TaskStatusToggled) -> None:
        self._each("task_status_toggled", event)

    def task_deleted(self, event: TaskDeleted) -> None:
        self._each("task_deleted", event)
