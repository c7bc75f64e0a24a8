# src/todo_ledger/core/accounts.py

from __future__ import annotations

import re

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_valid_address(address: str | None) -> bool:
    """Well-formed account identifier: 0x + 40 hex digits (checksum case is not enforced)."""
    return bool(address) and bool(_ADDRESS_RE.match(address.strip()))


def short_address(address: str) -> str:
    """0x90F8...c9C1 style, for console output."""
    a = (address or "").strip()
    if len(a) <= 12:
        return a
    return f"{a[:6]}...{a[-4:]}"
