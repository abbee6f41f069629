# src/tasklist/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

# Returned by TaskStore.add_task when SQLite rejects the insert.
ADD_FAILED = -1


class WriteResult(StrEnum):
    """
    Outcome of an update/delete.

    NOT_FOUND means the statement ran but matched zero rows.
    """

    OK = "ok"
    NOT_FOUND = "not_found"
    FAILED = "failed"

    @property
    def ok(self) -> bool:
        return self is WriteResult.OK


class TaskColor(StrEnum):
    """Palette offered by the task editor. RED is the default."""

    RED = "#FF6B6B"
    BLUE = "#4ECDC4"
    GREEN = "#95E1D3"
    YELLOW = "#FFE66D"
    PURPLE = "#B388FF"
    ORANGE = "#FF9F43"

    @classmethod
    def from_name(cls, raw: str | None) -> TaskColor | None:
        if not raw:
            return None
        try:
            return cls[raw.strip().upper()]
        except KeyError:
            return None


_HEX_COLOR = re.compile(r"^#(?:[0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})$")


def resolve_color(raw: str | None, default: str = TaskColor.RED.value) -> str:
    """
    Palette name ("blue") or hex string ("#4ECDC4", "#FF4ECDC4") -> upper-case hex.
    Anything else falls back to `default`.
    """
    named = TaskColor.from_name(raw)
    if named is not None:
        return named.value
    s = (raw or "").strip()
    if _HEX_COLOR.match(s):
        return s.upper()
    return default


@dataclass(slots=True)
class Task:
    id: int
    title: str | None
    description: str | None = None
    deadline: str | None = None
    color: str | None = None
    image: str | None = None
