# tests/test_schema.py

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from tasklist.tasks.schema import LATEST_VERSION, SchemaError, get_version, migrate, table_columns
from tasklist.tasks.task_store import TaskStore


def _make_v1_database(path: Path) -> None:
    """A database as the first release of the app left it: no image column."""
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    try:
        conn.execute(
            "CREATE TABLE my_tasks (id INTEGER PRIMARY KEY AUTOINCREMENT, "
            "title TEXT, description TEXT, deadline TEXT, color TEXT)"
        )
        conn.execute(
            "INSERT INTO my_tasks(title, description, deadline, color) VALUES (?, ?, ?, ?)",
            ("Old task", "from v1", "2024-01-01", "#95E1D3"),
        )
        conn.execute("PRAGMA user_version = 1")
        conn.commit()
    finally:
        conn.close()


def test_fresh_database_gets_every_migration(tmp_path: Path) -> None:
    conn = sqlite3.connect(str(tmp_path / "fresh.db"))
    try:
        assert get_version(conn) == 0
        assert migrate(conn) == LATEST_VERSION
        assert "image" in table_columns(conn)
        # second run is a no-op
        assert migrate(conn) == LATEST_VERSION
    finally:
        conn.close()


def test_migrate_can_stop_at_v1(tmp_path: Path) -> None:
    conn = sqlite3.connect(str(tmp_path / "v1.db"))
    try:
        assert migrate(conn, target=1) == 1
        assert table_columns(conn) == {"id", "title", "description", "deadline", "color"}
    finally:
        conn.close()


def test_open_v1_database_upgrades_to_v2(settings, notifier) -> None:
    _make_v1_database(settings.db_path)

    store = TaskStore(settings.db_path, notifier)

    assert store.schema_version() == 2
    assert "image" in store.columns()

    (old,) = store.get_all_tasks()
    assert old.title == "Old task"
    assert old.color == "#95E1D3"
    assert old.image is None

    new_id = store.add_task("New task", image_path="/sdcard/pic.jpg")
    new = store.get_task_by_id(new_id)
    assert new is not None
    assert new.image == "/sdcard/pic.jpg"
    assert new_id > old.id


def test_image_column_added_once(tmp_path: Path) -> None:
    # Version counter lost but the column already exists.
    path = tmp_path / "legacy.db"
    conn = sqlite3.connect(str(path))
    try:
        conn.execute(
            "CREATE TABLE my_tasks (id INTEGER PRIMARY KEY AUTOINCREMENT, "
            "title TEXT, description TEXT, deadline TEXT, color TEXT, image TEXT)"
        )
        conn.commit()
        assert migrate(conn) == LATEST_VERSION
        assert table_columns(conn) == {
            "id",
            "title",
            "description",
            "deadline",
            "color",
            "image",
        }
    finally:
        conn.close()


def test_newer_database_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "future.db"
    conn = sqlite3.connect(str(path))
    try:
        conn.execute(f"PRAGMA user_version = {LATEST_VERSION + 1}")
        conn.commit()
    finally:
        conn.close()

    with pytest.raises(SchemaError):
        TaskStore(path)


def test_unknown_target_is_rejected(tmp_path: Path) -> None:
    conn = sqlite3.connect(str(tmp_path / "x.db"))
    try:
        with pytest.raises(SchemaError):
            migrate(conn, target=LATEST_VERSION + 1)
        with pytest.raises(SchemaError):
            migrate(conn, target=0)
    finally:
        conn.close()
