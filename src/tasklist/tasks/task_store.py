# src/tasklist/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from pathlib import Path

from ..core.ports import Notifier, NullNotifier
from .schema import (
    COLUMN_COLOR,
    COLUMN_DEADLINE,
    COLUMN_DESCRIPTION,
    COLUMN_ID,
    COLUMN_IMAGE,
    COLUMN_TITLE,
    LATEST_VERSION,
    TABLE_NAME,
    get_version,
    migrate,
    table_columns,
)
from .task_models import ADD_FAILED, Task, WriteResult

logger = logging.getLogger(__name__)

_LIKE_ESCAPE = "\\"


def _like_pattern(query: str) -> str:
    """Wrap `query` in % wildcards, matching any %, _ or \\ inside it literally."""
    escaped = (
        query.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


class TaskStore:
    """
    SQLite store for the to-do list (one table, `my_tasks`).

    Opening the store creates the table if missing and runs the pending
    schema migrations (see schema.py).

    Every method opens its own connection and closes it before returning;
    nothing is shared between calls.

    Writes never raise on SQLite errors: the error is logged, the notifier
    gets a failure message and a sentinel is returned (ADD_FAILED or
    WriteResult.FAILED).
    """

    def __init__(
        self,
        db_path: str | Path = "TaskList.db",
        notifier: Notifier | None = None,
    ) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self.notifier: Notifier = notifier or NullNotifier()
        self._ensure_schema()
        try:
            total = self.count_tasks()
        except sqlite3.Error:
            total = -1
        logger.info("TaskStore ready db=%s total=%s", self._db_path, total)

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
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            migrate(conn, LATEST_VERSION)
        finally:
            conn.close()

    def _notify(self, text: str) -> None:
        try:
            self.notifier.notify(text)
        except Exception:
            logger.exception("Notifier failed for message %r", text)

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row[COLUMN_ID]),
            title=row[COLUMN_TITLE],
            description=row[COLUMN_DESCRIPTION],
            deadline=row[COLUMN_DEADLINE],
            color=row[COLUMN_COLOR],
            image=row[COLUMN_IMAGE],
        )

    def _select(self, sql: str, params: tuple = ()) -> list[Task]:
        conn = self._get_conn()
        try:
            rows = conn.execute(sql, params).fetchall()
            return [self._row_to_task(r) for r in rows]
        except sqlite3.Error:
            logger.exception("TaskStore query failed: %s", sql.strip())
            return []
        finally:
            conn.close()

    def _write(
        self,
        sql: str,
        params: tuple,
        *,
        ok_text: str,
        fail_text: str,
        missing_ok: bool = False,
    ) -> WriteResult:
        conn = self._get_conn()
        try:
            cur = conn.execute(sql, params)
            conn.commit()
            affected = cur.rowcount
        except sqlite3.Error:
            logger.exception("TaskStore write failed: %s params=%s", sql.strip(), params)
            self._notify(fail_text)
            return WriteResult.FAILED
        finally:
            conn.close()

        if affected < 1 and not missing_ok:
            logger.debug("TaskStore write matched no rows: %s params=%s", sql.strip(), params)
            self._notify("Task not found")
            return WriteResult.NOT_FOUND

        self._notify(ok_text)
        return WriteResult.OK

    # ---- public API ----

    def schema_version(self) -> int:
        conn = self._get_conn()
        try:
            return get_version(conn)
        finally:
            conn.close()

    def columns(self) -> set[str]:
        conn = self._get_conn()
        try:
            return table_columns(conn)
        finally:
            conn.close()

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            (n,) = conn.execute(f"SELECT COUNT(*) FROM {TABLE_NAME}").fetchone()
            return int(n)
        finally:
            conn.close()

    def image_in_use(self, image_path: str) -> bool:
        """True while any task row still references `image_path`."""
        conn = self._get_conn()
        try:
            row = conn.execute(
                f"SELECT 1 FROM {TABLE_NAME} WHERE {COLUMN_IMAGE} = ? LIMIT 1",
                (image_path,),
            ).fetchone()
            return row is not None
        finally:
            conn.close()

    def add_task(
        self,
        title: str | None,
        description: str | None = None,
        deadline: str | None = None,
        color: str | None = None,
        image_path: str | None = None,
    ) -> int:
        """
        Insert one task. Returns the id SQLite assigned, or ADD_FAILED.
        """
        conn = self._get_conn()
        try:
            cur = conn.execute(
                f"""
                INSERT INTO {TABLE_NAME}(
                    {COLUMN_TITLE}, {COLUMN_DESCRIPTION}, {COLUMN_DEADLINE},
                    {COLUMN_COLOR}, {COLUMN_IMAGE}
                )
                VALUES (?, ?, ?, ?, ?)
                """,
                (title, description, deadline, color, image_path),
            )
            conn.commit()
            rowid = cur.lastrowid
        except sqlite3.Error:
            logger.exception("Task insert failed title=%r", title)
            rowid = None
        finally:
            conn.close()

        if rowid is None:
            self._notify("Failed to add task")
            return ADD_FAILED

        task_id = int(rowid)
        logger.debug("Task added id=%s title=%r color=%s", task_id, title, color)
        self._notify("Task saved successfully!")
        return task_id

    def get_all_tasks(self) -> list[Task]:
        """All tasks, newest first."""
        return self._select(f"SELECT * FROM {TABLE_NAME} ORDER BY {COLUMN_ID} DESC")

    def search_tasks_by_title(self, query: str) -> list[Task]:
        """
        Tasks whose title contains `query`, newest first.

        Matching uses SQLite LIKE, so it is case-insensitive for ASCII letters.
        An empty query matches every task, untitled ones included.
        """
        return self._select(
            f"""
            SELECT *
            FROM {TABLE_NAME}
            WHERE IFNULL({COLUMN_TITLE}, '') LIKE ? ESCAPE '{_LIKE_ESCAPE}'
            ORDER BY {COLUMN_ID} DESC
            """,
            (_like_pattern(query or ""),),
        )

    def get_task_by_id(self, task_id: int) -> Task | None:
        found = self._select(
            f"SELECT * FROM {TABLE_NAME} WHERE {COLUMN_ID} = ?",
            (int(task_id),),
        )
        return found[0] if found else None

    def update_task(
        self,
        task_id: int,
        title: str | None,
        description: str | None = None,
        deadline: str | None = None,
        color: str | None = None,
        image_path: str | None = None,
    ) -> WriteResult:
        """Replace every mutable field of the task."""
        return self._write(
            f"""
            UPDATE {TABLE_NAME}
            SET {COLUMN_TITLE} = ?,
                {COLUMN_DESCRIPTION} = ?,
                {COLUMN_DEADLINE} = ?,
                {COLUMN_COLOR} = ?,
                {COLUMN_IMAGE} = ?
            WHERE {COLUMN_ID} = ?
            """,
            (title, description, deadline, color, image_path, int(task_id)),
            ok_text="Task updated successfully!",
            fail_text="Failed to update task",
        )

    def delete_task(self, task_id: int) -> WriteResult:
        return self._write(
            f"DELETE FROM {TABLE_NAME} WHERE {COLUMN_ID} = ?",
            (int(task_id),),
            ok_text="Task deleted successfully!",
            fail_text="Failed to delete task",
        )

    def delete_all_tasks(self) -> WriteResult:
        return self._write(
            f"DELETE FROM {TABLE_NAME}",
            (),
            ok_text="All tasks deleted!",
            fail_text="Failed to delete tasks",
            missing_ok=True,
        )
