# src/tasklist/tasks/task_api.py

"""
Front-end helpers on top of TaskStore.

These hold the editor rules the store itself does not enforce:
a title is required, colours come from the palette, and deleting a task
also deletes its image file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from ..core.state import AppState
from .task_models import ADD_FAILED, Task, TaskColor, WriteResult, resolve_color

logger = logging.getLogger(__name__)

_UNSET: Any = object()

TITLE_REQUIRED = "Error: Title is required!"
DEADLINE_PREFIX = "Deadline: "


def _clean(value: str | None) -> str:
    return (value or "").strip()


def create_task(
    state: AppState,
    title: str | None,
    description: str | None = None,
    deadline: str | None = None,
    color: str | None = None,
    image_path: str | None = None,
) -> int:
    """Validate editor input and add a task. Returns the new id or ADD_FAILED."""
    clean_title = _clean(title)
    if not clean_title:
        state.notifier.notify(TITLE_REQUIRED)
        return ADD_FAILED

    return state.task_store.add_task(
        clean_title,
        _clean(description),
        _clean(deadline),
        resolve_color(color, state.default_color),
        _clean(image_path) or None,
    )


def edit_task(
    state: AppState,
    task_id: int,
    *,
    title: Any = _UNSET,
    description: Any = _UNSET,
    deadline: Any = _UNSET,
    color: Any = _UNSET,
    image_path: Any = _UNSET,
) -> WriteResult:
    """
    Update a task from editor input. Fields not passed keep their stored value.
    """
    current = state.task_store.get_task_by_id(task_id)
    if current is None:
        state.notifier.notify("Task not found")
        return WriteResult.NOT_FOUND

    new_title = _clean(current.title if title is _UNSET else title)
    if not new_title:
        state.notifier.notify(TITLE_REQUIRED)
        return WriteResult.FAILED

    new_description = current.description if description is _UNSET else _clean(description)
    new_deadline = current.deadline if deadline is _UNSET else _clean(deadline)
    new_color = (
        current.color if color is _UNSET else resolve_color(color, state.default_color)
    )
    new_image = current.image if image_path is _UNSET else (_clean(image_path) or None)

    return state.task_store.update_task(
        current.id,
        new_title,
        new_description,
        new_deadline,
        new_color,
        new_image,
    )


def remove_task(state: AppState, task_id: int) -> WriteResult:
    """
    Delete a task and, once the row is gone, its image file.

    The file is only removed when it lives under the app's data directory
    and no remaining task still points at it.
    """
    current = state.task_store.get_task_by_id(task_id)
    result = state.task_store.delete_task(task_id)
    if result is WriteResult.OK and current is not None and current.image:
        _release_image(state, current.image)
    return result


def _owned_path(data_dir: Path, image_path: str) -> Path | None:
    try:
        path = Path(image_path).expanduser().resolve()
        root = data_dir.expanduser().resolve()
    except OSError:
        return None
    return path if path.is_relative_to(root) else None


def _release_image(state: AppState, image_path: str) -> None:
    if state.task_store.image_in_use(image_path):
        logger.debug("Task image %s still referenced, keeping it", image_path)
        return

    path = _owned_path(state.data_dir, image_path)
    if path is None:
        logger.debug("Task image %s is outside %s, keeping it", image_path, state.data_dir)
        return

    try:
        if path.is_file():
            path.unlink()
            logger.debug("Deleted task image %s", path)
    except OSError:
        logger.warning("Could not delete task image %s", path, exc_info=True)


def list_tasks(state: AppState, query: str = "") -> list[Task]:
    if query:
        return state.task_store.search_tasks_by_title(query)
    return state.task_store.get_all_tasks()


def format_task(task: Task, default_color: str = TaskColor.RED.value) -> str:
    parts = [f"#{task.id} [{task.color or default_color}] {task.title or ''}"]
    if task.deadline:
        parts.append(f"{DEADLINE_PREFIX}{task.deadline}")
    if task.description:
        parts.append(task.description)
    if task.image:
        parts.append(f"[image: {task.image}]")
    return " | ".join(parts)
