# src/tasklist/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

- One Settings object for the whole app.
- Every value has a default, so nothing is required at import time.

Variables:
  TASKLIST_APP_NAME         display name (default: tasklist)
  TASKLIST_LOG_LEVEL        console log level (default: INFO; the log file gets DEBUG)
  TASKLIST_CONSOLE_ENABLED  run the interactive console (default: true)
  TASKLIST_DATA_DIR         local data directory (default: .local/tasklist)
  TASKLIST_DB_PATH          task database (default: <data_dir>/TaskList.db)
  TASKLIST_DEFAULT_COLOR    palette name or hex color for new tasks (default: #FF6B6B)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .tasks.task_models import TaskColor, resolve_color

ENV_PREFIX = "TASKLIST"

DEFAULT_DB_NAME = "TaskList.db"
DEFAULT_COLOR = TaskColor.RED.value

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Connector flags ----
    console_enabled: bool

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    db_path: Path

    # ---- Presentation defaults ----
    default_color: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tasklist").strip() or "tasklist"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/tasklist"))
        db_path = _env_path(_k("DB_PATH"), data_dir / DEFAULT_DB_NAME)

        # palette name or hex; anything else falls back to red
        default_color = resolve_color(_env(_k("DEFAULT_COLOR"), DEFAULT_COLOR), DEFAULT_COLOR)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            data_dir=data_dir,
            db_path=db_path,
            default_color=default_color,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
