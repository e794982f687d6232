"""
Tool: Notification Channel
Purpose: Fire-and-forget user feedback emitted by core operations

Core code never talks to a UI. It emits Notification events here; a
front end (or the CLI, or a test) registers a listener to display them.
Delivery is best effort: a failing listener is logged and skipped.

Usage:
    from lifeos.notify import Notifier

    notifier = Notifier()
    notifier.add_listener(lambda n: print(n.severity, n.message))
    notifier.notify("+10 XP for Mind!", "info")
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


logger = logging.getLogger(__name__)

# Valid severities
VALID_SEVERITIES = ("success", "error", "info")

Listener = Callable[["Notification"], Any]


@dataclass(frozen=True)
class Notification:
    message: str
    severity: str = "success"
    created_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "severity": self.severity,
            "created_at": self.created_at.isoformat(),
        }


class Notifier:
    """Collects notifications and fans them out to listeners.

    Args:
        history_size: How many past notifications to keep for inspection.
    """

    def __init__(self, history_size: int = 100):
        self.history_size = history_size
        self._history: list[Notification] = []
        self._listeners: list[Listener] = []

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """Register a listener. Returns a callable that removes it."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def notify(self, message: str, severity: str = "success") -> Notification:
        if severity not in VALID_SEVERITIES:
            logger.warning(f"Unknown notification severity '{severity}', using 'info'")
            severity = "info"

        notification = Notification(message=message, severity=severity)
        self._history.append(notification)
        if len(self._history) > self.history_size:
            self._history = self._history[-self.history_size:]

        log = logger.error if severity == "error" else logger.info
        log(f"notification [{severity}]: {message}")

        for listener in list(self._listeners):
            try:
                listener(notification)
            except Exception as e:
                logger.warning(f"Notification listener failed: {e}")

        return notification

    @property
    def history(self) -> list[Notification]:
        return list(self._history)


__all__ = ["Notification", "Notifier", "VALID_SEVERITIES"]
