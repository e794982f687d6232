"""
Shared plumbing for feature services

Every service method returns the same result shape:

    {"success": True, "data": ..., "message": "..."}
    {"success": False, "error": "..."}

Expected failures (guard clauses, bad AI answers, write failures) are
reported through the result and a notification, never raised.
"""

from __future__ import annotations

import logging
from typing import Any

from lifeos.notify import Notifier
from lifeos.state import AppState
from lifeos.store.base import DocumentStore


logger = logging.getLogger(__name__)


class Service:
    """
    Base for feature services.

    Args:
        state: Typed cache of the store (read side)
        store: Document store (write side)
        notifier: User feedback channel
    """

    def __init__(self, state: AppState, store: DocumentStore, notifier: Notifier):
        self.state = state
        self.store = store
        self.notifier = notifier
        self._busy: set[str] = set()

    # =========================================================================
    # Busy flags
    # =========================================================================

    def is_busy(self, operation: str | None = None) -> bool:
        if operation is None:
            return bool(self._busy)
        return operation in self._busy

    def _begin(self, operation: str) -> bool:
        """Mark an operation in flight. False if it already is."""
        if operation in self._busy:
            return False
        self._busy.add(operation)
        return True

    def _end(self, operation: str) -> None:
        self._busy.discard(operation)

    def _already_running(self, operation: str) -> dict[str, Any]:
        message = f"{operation.capitalize()} is already in progress"
        self.notifier.notify(message, "info")
        return {"success": False, "error": message}

    # =========================================================================
    # Results and writes
    # =========================================================================

    def _fail(self, error: str, severity: str = "error") -> dict[str, Any]:
        self.notifier.notify(error, severity)
        return {"success": False, "error": error}

    async def _write(self, key: str, value: Any) -> bool:
        """Write one document; a failure is notified and the caller carries on."""
        ok = await self.store.set(key, value)
        if not ok:
            self.notifier.notify(f"Error saving {key}", "error")
        return ok
