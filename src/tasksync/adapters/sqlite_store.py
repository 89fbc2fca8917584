"""SQLite-backed local task store."""

import logging
import sqlite3
from contextlib import closing
from pathlib import Path

from tasksync.core.tasks import Task

logger = logging.getLogger(__name__)

TABLE_NAME = "tasks"


class SqliteTaskStore:
    """
    On-device task storage.

    Implements TaskDataSource protocol. Each method opens its own connection,
    so the store holds no open handles between calls.
    """

    def __init__(self, db_path: Path | str):
        self.db_path = Path(db_path).expanduser()
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.debug(f"Local task store ready at {self.db_path}")

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with closing(self._connect()) as conn, conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
                    entryid TEXT PRIMARY KEY,
                    title TEXT,
                    description TEXT,
                    completed INTEGER NOT NULL DEFAULT 0
                )
                """
            )

    def _execute(self, sql: str, params: tuple = ()) -> int:
        """Run a write statement and return the affected row count."""
        with closing(self._connect()) as conn, conn:
            return conn.execute(sql, params).rowcount

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=row["entryid"],
            title=row["title"] or "",
            description=row["description"] or "",
            completed=bool(row["completed"]),
        )

    def list_tasks(self) -> list[Task] | None:
        """List all stored tasks. Returns None if the table is empty."""
        with closing(self._connect()) as conn:
            rows = conn.execute(
                f"SELECT entryid, title, description, completed FROM {TABLE_NAME} ORDER BY rowid"
            ).fetchall()
        if not rows:
            return None
        return [self._row_to_task(row) for row in rows]

    def get_task(self, task_id: str) -> Task | None:
        """Get a task by exact id. Returns None if not found."""
        with closing(self._connect()) as conn:
            row = conn.execute(
                f"SELECT entryid, title, description, completed FROM {TABLE_NAME} WHERE entryid = ?",
                (task_id,),
            ).fetchone()
        if row is None:
            return None
        return self._row_to_task(row)

    def save_task(self, task: Task) -> None:
        self._execute(
            f"INSERT OR REPLACE INTO {TABLE_NAME} (entryid, title, description, completed) "
            "VALUES (?, ?, ?, ?)",
            (task.id, task.title, task.description, int(task.completed)),
        )

    def _set_completed(self, task_id: str, completed: bool) -> None:
        self._execute(
            f"UPDATE {TABLE_NAME} SET completed = ? WHERE entryid = ?",
            (int(completed), task_id),
        )

    def complete_task(self, task: Task | str) -> None:
        # The repository resolves ids to tasks from its cache
        if isinstance(task, Task):
            self._set_completed(task.id, True)

    def activate_task(self, task: Task | str) -> None:
        if isinstance(task, Task):
            self._set_completed(task.id, False)

    def clear_completed_tasks(self) -> None:
        deleted = self._execute(f"DELETE FROM {TABLE_NAME} WHERE completed = 1")
        logger.debug(f"Cleared {deleted} completed tasks from local store")

    def refresh_tasks(self) -> None:
        # Refreshing is handled by the repository
        pass

    def delete_all_tasks(self) -> None:
        self._execute(f"DELETE FROM {TABLE_NAME}")

    def delete_task(self, task_id: str) -> None:
        self._execute(f"DELETE FROM {TABLE_NAME} WHERE entryid = ?", (task_id,))

    def count_tasks(self) -> int:
        with closing(self._connect()) as conn:
            return conn.execute(f"SELECT COUNT(*) FROM {TABLE_NAME}").fetchone()[0]
