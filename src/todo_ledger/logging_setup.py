# src/todo_ledger/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path


class _ConsoleNoiseFilter(logging.Filter):
    """Keeps stderr readable while the REPL prompt is on screen; the log file gets everything."""

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name.startswith("todo_ledger."):
            # Command replies already say what happened to each task.
            if name == "todo_ledger.tasks.observers":
                return record.levelno >= logging.WARNING
            return True

        if name == "py.warnings":
            return record.levelno >= logging.ERROR

        if name.startswith(("uvicorn", "httpx", "httpcore")):
            return record.levelno >= logging.WARNING

        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/todo-ledger",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Route every logger to a filtered stderr handler and to `<log_dir>/todo-ledger.log`.

    Replaces handlers already on the root logger, so calling it twice is harmless.
    Run it from the entrypoint before the store or the API server log anything.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    ledger_file = logging.FileHandler(str(log_dir / "todo-ledger.log"), encoding="utf-8")
    ledger_file.setLevel(file_level)
    ledger_file.setFormatter(fmt)
    root.addHandler(ledger_file)

    logging.captureWarnings(True)
