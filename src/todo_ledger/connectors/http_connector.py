# src/todo_ledger/connectors/http_connector.py

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

import uvicorn

from ..api.app import create_app
from ..core.state import AppState

logger = logging.getLogger(__name__)


@dataclass
class ApiBackgroundRunner:
    thread: threading.Thread
    server: uvicorn.Server

    def stop(self) -> None:
        # uvicorn polls this flag from its own loop.
        self.server.should_exit = True

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_api_in_background(state: AppState) -> ApiBackgroundRunner | None:
    """
    Start the HTTP API in a background thread (so console REPL can run in parallel).

    Why a thread:
    - console REPL is blocking (input()).
    - uvicorn wants its own event loop.
    """
    settings = state.settings
    if not getattr(settings, "api_enabled", False):
        logger.info("HTTP API disabled, not starting.")
        return None

    config = uvicorn.Config(
        create_app(state),
        host=settings.api_host,
        port=int(settings.api_port),
        log_level="warning",
        # Logging is configured by setup_logging(); keep uvicorn from replacing it.
        log_config=None,
    )
    server = uvicorn.Server(config)

    def runner() -> None:
        try:
            server.run()
        except Exception:
            logger.exception("HTTP API server crashed.")

    t = threading.Thread(target=runner, name="todo-ledger-api", daemon=True)
    t.start()

    logger.info("HTTP API started on http://%s:%s/api", settings.api_host, settings.api_port)
    return ApiBackgroundRunner(thread=t, server=server)
