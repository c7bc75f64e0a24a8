# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from todo_ledger.config import DEFAULT_ACCOUNTS, Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "TODO_ACCOUNTS",
        "TODO_DEFAULT_ACCOUNT",
        "TODO_API_PORT",
        "PORT",
        "TODO_API_ENABLED",
        "TODO_DATA_DIR",
        "TODO_LEDGER_DB_PATH",
        "TODO_MAX_DESCRIPTION_LENGTH",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = Settings.from_env()
    assert s.accounts == DEFAULT_ACCOUNTS
    assert s.default_account == DEFAULT_ACCOUNTS[0]
    assert s.api_port == 5000
    assert s.max_description_length == 500
    assert s.ledger_db_path == s.data_dir / "ledger.sqlite3"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TODO_ACCOUNTS", "0xaaa, 0xbbb 0xccc")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("TODO_API_ENABLED", "no")
    monkeypatch.setenv("TODO_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TODO_MAX_DESCRIPTION_LENGTH", "not-a-number")

    s = Settings.from_env()
    assert s.accounts == ["0xaaa", "0xbbb", "0xccc"]
    assert s.default_account == "0xaaa"
    assert s.api_port == 8080
    assert s.api_enabled is False
    assert s.ledger_db_path == tmp_path / "ledger.sqlite3"
    assert s.max_description_length == 500

    monkeypatch.setenv("TODO_API_PORT", "9000")
    monkeypatch.setenv("TODO_DEFAULT_ACCOUNT", "0xbbb")
    s2 = Settings.from_env()
    assert s2.api_port == 9000
    assert s2.default_account == "0xbbb"
