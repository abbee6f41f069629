# src/tasklist/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..tasks.task_models import TaskColor, resolve_color
from ..tasks.task_store import TaskStore
from .ports import Notifier


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    task_store: TaskStore
    notifier: Notifier

    @property
    def default_color(self) -> str:
        return resolve_color(getattr(self.settings, "default_color", None), TaskColor.RED.value)

    @property
    def data_dir(self) -> Path:
        """Directory the app owns; task images under it may be deleted with their task."""
        raw = getattr(self.settings, "data_dir", None)
        return Path(raw) if raw else self.task_store.db_path.parent
