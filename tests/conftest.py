# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_ledger.core.state import AppState
from todo_ledger.tasks.ledger import TaskLedger
from todo_ledger.tasks.task_store import TaskStore

from .fakes import FakeClock, RecordingObserver

ALICE = "0x90F8bf6A479f320ead074411a4B0e7944Ea8c9C1"
BOB = "0xFFcf8FDEE72ac11b5c542428B35EEF5769C409f0"
CAROL = "0x22d491Bde2303f2f43325b2108D26f1eAbA1e32b"


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the connectors.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="todo-ledger-test",
        log_level="DEBUG",
        console_enabled=False,
        api_enabled=False,
        api_host="127.0.0.1",
        api_port=5000,
        accounts=[ALICE, BOB, CAROL],
        default_account=ALICE,
        max_description_length=500,
        data_dir=tmp_path,
        ledger_db_path=tmp_path / "ledger.sqlite3",
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.ledger_db_path)


@pytest.fixture()
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def ledger(store: TaskStore, observer: RecordingObserver, clock: FakeClock) -> TaskLedger:
    """
    NOTE: We keep a real SQLite store here because its correctness
    (ordering, per-account scoping) is part of what we want to test.
    """
    return TaskLedger(store, observer=observer, clock=clock)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, ledger: TaskLedger) -> AppState:
    return AppState(
        settings=settings,
        ledger=ledger,
        task_store=store,
        current_account=settings.default_account,
    )
