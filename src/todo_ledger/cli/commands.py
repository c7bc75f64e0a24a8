# src/todo_ledger/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..core.accounts import is_valid_address, short_address
from ..core.state import AppState
from ..tasks.task_errors import LedgerError
from ..tasks.task_models import Task

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Ledger rejections (unknown task, deleted task, bad description) come back
        as the reply text instead of propagating.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return handler(state, args)
        except LedgerError as e:
            logger.debug("Command /%s rejected: %s", name, e)
            return f"Error: {e}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _fmt_ts(ts: int) -> str:
    return datetime.fromtimestamp(ts).astimezone().strftime("%Y-%m-%d %H:%M:%S")


def format_task(task: Task) -> str:
    mark = "x" if task.completed else " "
    flag = " (deleted)" if task.deleted else ""
    return f"#{task.id} [{mark}] {task.description}{flag}  ({_fmt_ts(task.timestamp)})"


def _parse_id(raw: str) -> int | None:
    try:
        return int(raw)
    except ValueError:
        return None


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    api = "ON" if getattr(settings, "api_enabled", False) else "OFF"
    host = getattr(settings, "api_host", "")
    port = getattr(settings, "api_port", "")
    return (
        "Status:\n"
        f"  Account: {state.current_account}\n"
        f"  HTTP API: {api} ({host}:{port})\n"
        f"  Ledger DB: {state.task_store.db_path}"
    )


def cmd_accounts(state: AppState, args: list[str]) -> str:
    accounts = list(getattr(state.settings, "accounts", []) or [])
    if not accounts:
        return "No demo accounts configured."
    current = state.current_account.lower()
    lines = ["Accounts:"]
    for i, acct in enumerate(accounts):
        marker = "*" if acct.lower() == current else " "
        lines.append(f" {marker} {i}. {acct}")
    return "\n".join(lines)


def cmd_use(state: AppState, args: list[str]) -> str:
    """
    /use 1          -> switch to the 2nd configured account
    /use 0xABC...   -> switch to an explicit account
    """
    if not args:
        return "Usage: /use <index|address>"

    raw = args[0]
    accounts = list(getattr(state.settings, "accounts", []) or [])

    idx = _parse_id(raw)
    if idx is not None:
        if not 0 <= idx < len(accounts):
            return f"No account with index {idx}. See /accounts."
        target = accounts[idx]
    elif is_valid_address(raw):
        target = raw
    else:
        return "Invalid account address."

    state.current_account = target
    logger.debug("Console account switched to %s", target)
    return f"Now acting as {short_address(target)}."


def cmd_whoami(state: AppState, args: list[str]) -> str:
    return f"Current account: {state.current_account}"


def cmd_add(state: AppState, args: list[str]) -> str:
    text = " ".join(args)
    task_id = state.ledger.add_task(state.current_account, text)
    return f"Task #{task_id} added."


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    /list       -> active tasks
    /list all   -> include deleted
    """
    show_all = bool(args) and args[0].lower() == "all"
    if show_all:
        tasks = state.ledger.get_all_tasks(state.current_account)
    else:
        tasks = state.ledger.get_active_tasks(state.current_account)
    if not tasks:
        return "No tasks."
    return "\n".join(format_task(t) for t in tasks)


def cmd_show(state: AppState, args: list[str]) -> str:
    if not args or _parse_id(args[0]) is None:
        return "Usage: /show <id>"
    task = state.ledger.get_task(state.current_account, int(args[0]))
    return format_task(task)


def cmd_edit(state: AppState, args: list[str]) -> str:
    if len(args) < 1 or _parse_id(args[0]) is None:
        return "Usage: /edit <id> <new description>"
    task_id = int(args[0])
    state.ledger.edit_task(state.current_account, task_id, " ".join(args[1:]))
    return f"Task #{task_id} updated."


def cmd_toggle(state: AppState, args: list[str]) -> str:
    if not args or _parse_id(args[0]) is None:
        return "Usage: /toggle <id>"
    task_id = int(args[0])
    completed = state.ledger.toggle_task_status(state.current_account, task_id)
    return f"Task #{task_id} is now {'done' if completed else 'open'}."


def cmd_delete(state: AppState, args: list[str]) -> str:
    if not args or _parse_id(args[0]) is None:
        return "Usage: /delete <id>"
    task_id = int(args[0])
    state.ledger.soft_delete_task(state.current_account, task_id)
    return f"Task #{task_id} deleted."


def cmd_stats(state: AppState, args: list[str]) -> str:
    stats = state.ledger.get_stats(state.current_account)
    return (
        "Stats:\n"
        f"  Total: {stats.total}\n"
        f"  Active: {stats.active}\n"
        f"  Completed: {stats.completed}\n"
        f"  Deleted: {stats.deleted}"
    )


def cmd_user(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /user <address>"
    address = args[0]
    if not is_valid_address(address):
        return "Invalid account address."
    tasks = state.ledger.get_user_tasks(address)
    if not tasks:
        return f"No tasks for {short_address(address)}."
    lines = [f"Tasks of {short_address(address)}:"]
    lines.extend(format_task(t) for t in tasks)
    return "\n".join(lines)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show current account, API and storage.")
registry.register("accounts", cmd_accounts, help_text="List demo accounts.")
registry.register("use", cmd_use, help_text="Switch account: /use <index|address>.", aliases=["switch"])
registry.register("whoami", cmd_whoami, help_text="Show the account commands act as.")
registry.register("add", cmd_add, help_text="Add a task: /add <description>.")
registry.register("list", cmd_list, help_text="List tasks: /list | /list all.", aliases=["ls"])
registry.register("show", cmd_show, help_text="Show one task: /show <id>.")
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <id> <description>.")
registry.register("toggle", cmd_toggle, help_text="Toggle completion: /toggle <id>.", aliases=["done"])
registry.register("delete", cmd_delete, help_text="Soft-delete a task: /delete <id>.", aliases=["rm"])
registry.register("stats", cmd_stats, help_text="Task counters for the current account.")
registry.register("user", cmd_user, help_text="Public read of any account: /user <address>.")
