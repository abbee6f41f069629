# src/tasklist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) between the task store and whatever front-end drives it.

The store only needs a way to surface short status messages, so it depends
on this Protocol instead of a concrete console or UI.
"""

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """
    Front-end side port: shows a short, transient status message
    ("Task saved successfully!", "Failed to add task", ...).
    """

    def notify(self, text: str) -> None: ...


class NullNotifier:
    """Default notifier for headless use: messages only go to the DEBUG log."""

    def notify(self, text: str) -> None:
        logger.debug("notify: %s", text)
