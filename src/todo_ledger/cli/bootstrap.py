# src/todo_ledger/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the SQLite store, the ledger and its observers into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.ledger import TaskLedger
from ..tasks.observers import CompositeObserver, LoggingObserver
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.ledger_db_path.parent.mkdir(parents=True, exist_ok=True)


def build_ledger(store: TaskStore, settings) -> TaskLedger:
    observer = CompositeObserver([LoggingObserver()])
    return TaskLedger(
        store,
        observer=observer,
        max_description_length=getattr(settings, "max_description_length", 500),
    )


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TaskStore(settings.ledger_db_path)
    state = AppState(
        settings=settings,
        ledger=build_ledger(store, settings),
        task_store=store,
        current_account=settings.default_account,
    )
    logger.info("State ready account=%s db=%s", state.current_account, store.db_path)
    return state
