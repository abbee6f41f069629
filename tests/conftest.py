# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist.core.state import AppState
from tasklist.tasks.task_store import TaskStore

from .fakes import FakeNotifier


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="tasklist-test",
        log_level="DEBUG",
        console_enabled=False,
        data_dir=tmp_path / "data",
        db_path=tmp_path / "data" / "TaskList.db",
        default_color="#FF6B6B",
    )


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def store(settings: SimpleNamespace, notifier: FakeNotifier) -> TaskStore:
    return TaskStore(settings.db_path, notifier)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, notifier: FakeNotifier) -> AppState:
    """
    AppState wired with a real SQLite store and a recording notifier.
    """
    return AppState(settings=settings, task_store=store, notifier=notifier)
