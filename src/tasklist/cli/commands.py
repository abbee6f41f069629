# src/tasklist/cli/commands.py

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable

from ..core.state import AppState
from ..tasks.task_api import (
    create_task,
    edit_task,
    format_task,
    list_tasks,
    remove_task,
)
from ..tasks.task_models import ADD_FAILED, TaskColor, WriteResult

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)

# key=value options accepted by /add and /edit -> task_api keyword
_FIELD_KEYS = {
    "title": "title",
    "desc": "description",
    "description": "description",
    "deadline": "deadline",
    "due": "deadline",
    "color": "color",
    "colour": "color",
    "image": "image_path",
    "img": "image_path",
}


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError as e:
            return f"Could not parse command: {e}."
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0].lstrip("#"))
    except ValueError:
        return None


def _split_fields(args: list[str]) -> tuple[list[str], dict[str, str]]:
    """
    Separate `key=value` options from plain words.
    Unknown keys are treated as plain words ("a=b" can be part of a title).
    """
    words: list[str] = []
    fields: dict[str, str] = {}
    for arg in args:
        key, sep, value = arg.partition("=")
        target = _FIELD_KEYS.get(key.lower()) if sep else None
        if target is None:
            words.append(arg)
        else:
            fields[target] = value
    return words, fields


def _render(state: AppState, tasks) -> str:
    if not tasks:
        return "No tasks found."
    return "\n".join(format_task(t, state.default_color) for t in tasks)


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return _render(state, list_tasks(state))


def cmd_search(state: AppState, args: list[str]) -> str:
    query = " ".join(args)
    if not query:
        return "Usage: /search <text in title>"
    return _render(state, list_tasks(state, query))


def cmd_show(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /show <id>"
    task = state.task_store.get_task_by_id(task_id)
    if task is None:
        return f"No task with id {task_id}."
    return format_task(task, state.default_color)


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add Buy milk desc="2 litres" deadline=2025-05-01 color=blue image=/tmp/milk.png
    """
    words, fields = _split_fields(args)
    title = fields.pop("title", " ".join(words))
    task_id = create_task(state, title, **fields)
    if task_id == ADD_FAILED:
        return ""
    task = state.task_store.get_task_by_id(task_id)
    return format_task(task, state.default_color) if task else f"Added task #{task_id}."


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <id> [new title words] [title=..] [desc=..] [deadline=..] [color=..] [image=..]
    """
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /edit <id> [title words] [desc=..] [deadline=..] [color=..] [image=..]"
    words, fields = _split_fields(args[1:])
    if words and "title" not in fields:
        fields["title"] = " ".join(words)
    if not fields:
        return "Nothing to change."

    result = edit_task(state, task_id, **fields)
    if result is not WriteResult.OK:
        return ""
    task = state.task_store.get_task_by_id(task_id)
    return format_task(task, state.default_color) if task else ""


def cmd_delete(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /delete <id>"
    remove_task(state, task_id)
    return ""


def cmd_clear(state: AppState, args: list[str]) -> str:
    """
    /clear      -> ask for confirmation
    /clear yes  -> delete every task
    """
    if not args or args[0].lower() not in ("yes", "y"):
        total = state.task_store.count_tasks()
        return f"This deletes all {total} task(s). Confirm with /clear yes."
    logger.debug("Delete-all confirmed")
    state.task_store.delete_all_tasks()
    return ""


def cmd_colors(state: AppState, args: list[str]) -> str:
    lines = ["Colors:"]
    for c in TaskColor:
        mark = " (default)" if c.value == state.default_color.upper() else ""
        lines.append(f"  {c.name.lower()}: {c.value}{mark}")
    return "\n".join(lines)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="List all tasks, newest first.", aliases=["ls"])
registry.register("search", cmd_search, help_text="Find tasks by title: /search <text>.")
registry.register("show", cmd_show, help_text="Show one task: /show <id>.")
registry.register(
    "add",
    cmd_add,
    help_text="Add a task: /add <title> [desc=..] [deadline=..] [color=..] [image=..].",
    aliases=["new"],
)
registry.register(
    "edit",
    cmd_edit,
    help_text="Edit a task: /edit <id> [title] [desc=..] [deadline=..] [color=..] [image=..].",
)
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <id>.", aliases=["rm"])
registry.register("clear", cmd_clear, help_text="Delete all tasks: /clear yes.")
registry.register("colors", cmd_colors, help_text="List the color palette.")
