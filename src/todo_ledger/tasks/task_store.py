# src/todo_ledger/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from pathlib import Path
from typing import Any

from .task_models import Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    SQLite task store, one row per (account, task_id).

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Thread-safety:
    - each method opens its own SQLite connection
    - every write is a single committed statement, so readers never see half an update
    """

    def __init__(self, db_path: str | Path = "ledger.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        try:
            accounts = self.count_accounts()
        except Exception:
            accounts = -1
        logger.info("TaskStore ready db=%s accounts=%s", self._db_path, accounts)

    @property
    def db_path(self) -> Path:
        return self._db_path

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(Exception):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    account TEXT NOT NULL,
                    task_id INTEGER NOT NULL,
                    description TEXT NOT NULL,
                    completed INTEGER NOT NULL DEFAULT 0,
                    deleted INTEGER NOT NULL DEFAULT 0,
                    created_at INTEGER NOT NULL,
                    updated_at INTEGER NOT NULL,
                    PRIMARY KEY (account, task_id)
                )
                """
            )

            # Migrations (safe): add missing columns.
            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("completed", "INTEGER NOT NULL DEFAULT 0")
            add_col("deleted", "INTEGER NOT NULL DEFAULT 0")
            add_col("created_at", "INTEGER NOT NULL DEFAULT 0")
            add_col("updated_at", "INTEGER NOT NULL DEFAULT 0")

            cur.execute(
                "CREATE INDEX IF NOT EXISTS idx_tasks_account_flags ON tasks(account, deleted, completed)"
            )

            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["task_id"]),
            description=str(row["description"] or ""),
            completed=bool(row["completed"]),
            deleted=bool(row["deleted"]),
            timestamp=int(row["created_at"] or 0),
        )

    def _scalar(self, sql: str, params: tuple[Any, ...]) -> int:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(sql, params)
            (n,) = cur.fetchone()
            return int(n or 0)
        finally:
            conn.close()

    # ---- public API ----

    def count_accounts(self) -> int:
        return self._scalar("SELECT COUNT(DISTINCT account) FROM tasks", ())

    def count_tasks(self, account: str) -> int:
        return self._scalar("SELECT COUNT(*) FROM tasks WHERE account = ?", (account,))

    def count_active_tasks(self, account: str) -> int:
        return self._scalar(
            "SELECT COUNT(*) FROM tasks WHERE account = ? AND deleted = 0",
            (account,),
        )

    def count_completed_tasks(self, account: str) -> int:
        return self._scalar(
            "SELECT COUNT(*) FROM tasks WHERE account = ? AND deleted = 0 AND completed = 1",
            (account,),
        )

    def insert_task(
        self,
        account: str,
        *,
        task_id: int,
        description: str,
        timestamp: int,
    ) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO tasks(account, task_id, description, completed, deleted, created_at, updated_at)
                VALUES (?, ?, ?, 0, 0, ?, ?)
                """,
                (account, int(task_id), description, int(timestamp), int(timestamp)),
            )
            conn.commit()
            logger.debug("Task inserted account=%s task_id=%s", account, task_id)
        finally:
            conn.close()

    def get_task(self, account: str, task_id: int) -> Task | None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                "SELECT * FROM tasks WHERE account = ? AND task_id = ?",
                (account, int(task_id)),
            )
            row = cur.fetchone()
            return self._row_to_task(row) if row else None
        finally:
            conn.close()

    def list_tasks(self, account: str, *, include_deleted: bool = True) -> list[Task]:
        """Tasks of one account in id order (gaps appear when deleted ones are skipped)."""
        sql = "SELECT * FROM tasks WHERE account = ?"
        if not include_deleted:
            sql += " AND deleted = 0"
        sql += " ORDER BY task_id ASC"

        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(sql, (account,))
            return [self._row_to_task(r) for r in cur.fetchall()]
        finally:
            conn.close()

    def update_task_fields(
        self,
        account: str,
        task_id: int,
        *,
        description: str | None = None,
        completed: bool | None = None,
        deleted: bool | None = None,
        updated_at: int | None = None,
    ) -> None:
        fields: list[str] = []
        params: list[Any] = []

        if description is not None:
            fields.append("description = ?")
            params.append(description)

        if completed is not None:
            fields.append("completed = ?")
            params.append(1 if completed else 0)

        if deleted is not None:
            fields.append("deleted = ?")
            params.append(1 if deleted else 0)

        if not fields:
            return

        fields.append("updated_at = ?")
        params.append(int(time.time()) if updated_at is None else int(updated_at))
        params.extend([account, int(task_id)])

        sql = f"UPDATE tasks SET {', '.join(fields)} WHERE account = ? AND task_id = ?"

        conn = self._get_conn()
        try:
            conn.execute(sql, params)
            conn.commit()
        finally:
            conn.close()
