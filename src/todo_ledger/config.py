# src/todo_ledger/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No secrets required at import time.
- Demo accounts mirror a local dev chain: the first one is the default caller.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "TODO"

# Well-known local dev-chain accounts, used when TODO_ACCOUNTS is not set.
DEFAULT_ACCOUNTS = [
    "0x90F8bf6A479f320ead074411a4B0e7944Ea8c9C1",
    "0xFFcf8FDEE72ac11b5c542428B35EEF5769C409f0",
    "0x22d491Bde2303f2f43325b2108D26f1eAbA1e32b",
]


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Connector flags ----
    console_enabled: bool
    api_enabled: bool

    # ---- HTTP API ----
    api_host: str
    api_port: int

    # ---- Accounts ----
    accounts: list[str]
    default_account: str

    # ---- Ledger ----
    max_description_length: int

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    ledger_db_path: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todo-ledger") or "todo-ledger"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)
        api_enabled = _env_bool(_k("API_ENABLED"), True)

        api_host = _env(_k("API_HOST"), "127.0.0.1")
        # PORT is what most hosting platforms set.
        api_port = _env_int(_k("API_PORT"), _env_int("PORT", 5000))

        accounts = _env_list(_k("ACCOUNTS"), DEFAULT_ACCOUNTS)
        default_account = _env(_k("DEFAULT_ACCOUNT"), "").strip() or (accounts[0] if accounts else "")

        max_description_length = _env_int(_k("MAX_DESCRIPTION_LENGTH"), 500)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo-ledger"))
        ledger_db_path = _env_path(_k("LEDGER_DB_PATH"), data_dir / "ledger.sqlite3")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            api_enabled=api_enabled,
            api_host=api_host,
            api_port=api_port,
            accounts=accounts,
            default_account=default_account,
            max_description_length=max_description_length,
            data_dir=data_dir,
            ledger_db_path=ledger_db_path,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
