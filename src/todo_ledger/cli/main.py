# src/todo_ledger/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then starts connectors:
- console REPL in the main thread (optional),
- HTTP API (uvicorn) in a background thread (optional).
"""

from __future__ import annotations

import logging
import signal
import threading

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..connectors.http_connector import ApiBackgroundRunner, start_api_in_background
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    # TaskStore uses short-lived sqlite connections per call; close() is a hook only.
    try:
        store = getattr(state, "task_store", None)
        if store is not None and hasattr(store, "close"):
            store.close()
    except Exception:
        logger.debug("Task store close failed.", exc_info=True)


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_dir = getattr(settings, "data_dir", ".local/todo-ledger")
    setup_logging(log_dir=log_dir, console_level=console_level)

    logging.getLogger("uvicorn").setLevel(max(console_level, logging.INFO))
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logger.info("Starting %s...", getattr(settings, "app_name", "todo-ledger"))

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)

    api_runner: ApiBackgroundRunner | None = None
    if settings.api_enabled:
        api_runner = start_api_in_background(state)

    # Use an Event so main can wait without a busy while-loop.
    stop_main = threading.Event()

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()

    try:
        signal.signal(signal.SIGTERM, _handle_signal)
        if not settings.console_enabled:
            # The console REPL turns Ctrl+C into KeyboardInterrupt itself.
            signal.signal(signal.SIGINT, _handle_signal)
    except Exception:
        # Some platforms may not support SIGTERM, etc.
        pass

    try:
        if settings.console_enabled:
            run_console_loop(state)
            stop_main.set()
        elif api_runner is None:
            logger.warning("Console and HTTP API are both disabled; nothing to run.")
        else:
            logger.info("Console disabled. Serving HTTP API only. Press Ctrl+C to stop.")
            stop_main.wait()

    finally:
        if api_runner is not None:
            api_runner.stop()
            api_runner.join(timeout=10.0)

        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
