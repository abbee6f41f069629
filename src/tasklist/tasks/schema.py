# src/tasklist/tasks/schema.py

"""
Schema of the task table and its forward-only migrations.

The current version lives in SQLite's `PRAGMA user_version`
(0 for a brand new file). Each step runs once, in order, and bumps
user_version right after it is applied.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

TABLE_NAME = "my_tasks"

COLUMN_ID = "id"
COLUMN_TITLE = "title"
COLUMN_DESCRIPTION = "description"
COLUMN_DEADLINE = "deadline"
COLUMN_COLOR = "color"
COLUMN_IMAGE = "image"


class SchemaError(RuntimeError):
    """Database schema cannot be brought to the requested version."""


@dataclass(frozen=True, slots=True)
class Migration:
    version: int
    name: str
    apply: Callable[[sqlite3.Connection], None]


def table_columns(conn: sqlite3.Connection, table: str = TABLE_NAME) -> set[str]:
    rows = conn.execute(f"PRAGMA table_info({table})").fetchall()
    # row[1] is the column name (works with and without sqlite3.Row)
    return {row[1] for row in rows}


def _create_tasks_table(conn: sqlite3.Connection) -> None:
    conn.execute(
        f"""
        CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
            {COLUMN_ID} INTEGER PRIMARY KEY AUTOINCREMENT,
            {COLUMN_TITLE} TEXT,
            {COLUMN_DESCRIPTION} TEXT,
            {COLUMN_DEADLINE} TEXT,
            {COLUMN_COLOR} TEXT
        )
        """
    )


def _add_image_column(conn: sqlite3.Connection) -> None:
    if COLUMN_IMAGE in table_columns(conn):
        return
    conn.execute(f"ALTER TABLE {TABLE_NAME} ADD COLUMN {COLUMN_IMAGE} TEXT")


MIGRATIONS: tuple[Migration, ...] = (
    Migration(1, "create my_tasks", _create_tasks_table),
    Migration(2, "add image column", _add_image_column),
)

LATEST_VERSION = MIGRATIONS[-1].version


def get_version(conn: sqlite3.Connection) -> int:
    (v,) = conn.execute("PRAGMA user_version").fetchone()
    return int(v)


def _set_version(conn: sqlite3.Connection, version: int) -> None:
    # PRAGMA does not accept bound parameters.
    conn.execute(f"PRAGMA user_version = {int(version)}")


def migrate(conn: sqlite3.Connection, target: int = LATEST_VERSION) -> int:
    """
    Apply every migration newer than the stored version, up to `target`.

    Returns the version the database ends up at. Raises SchemaError for an
    unknown target or a database newer than `target` (no downgrades).
    """
    if target < 1 or target > LATEST_VERSION:
        raise SchemaError(f"Unknown schema version {target} (latest is {LATEST_VERSION})")

    current = get_version(conn)
    if current > target:
        raise SchemaError(
            f"Database schema version {current} is newer than supported version {target}"
        )

    for step in MIGRATIONS:
        if step.version <= current or step.version > target:
            continue
        step.apply(conn)
        _set_version(conn, step.version)
        conn.commit()
        logger.info("TaskStore migration: v%s %s", step.version, step.name)
        current = step.version

    return current
