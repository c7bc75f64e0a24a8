# src/todo_ledger/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from ..tasks.ledger import TaskLedger
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Settings object (real Settings or a test stand-in with the same attributes).
    settings: Any

    ledger: TaskLedger
    task_store: TaskStore

    # Account the console acts as; the wallet switcher (/use) changes it.
    current_account: str = ""

    lock: threading.RLock = field(default_factory=threading.RLock)
