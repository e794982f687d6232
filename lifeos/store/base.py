"""
Document Store Base Class

Contract consumed by the rest of Life OS:

    await get(key)                            -> value or None
    await set(key, value)                     -> True on success, False on failure
    await subscribe(key, on_change, default)  -> unsubscribe()

Design Principles:
- Writes never raise: failures are logged and reported as False
- Subscribers get a private copy of every value, so a cache can never
  alias what the store holds
- Subscribing to a missing document seeds it with the given default
"""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any


logger = logging.getLogger(__name__)

OnChange = Callable[[Any], None]


class StoreError(Exception):
    """A backend could not read or write a document."""


class DocumentStore(ABC):
    """Keyed JSON documents with in-process change subscriptions."""

    def __init__(self) -> None:
        self._subscribers: dict[str, list[OnChange]] = {}

    # =========================================================================
    # Backend hooks
    # =========================================================================

    @abstractmethod
    def _read(self, key: str) -> tuple[bool, Any]:
        """Return (exists, value). Raise StoreError on backend failure."""

    @abstractmethod
    def _write(self, key: str, value: Any) -> None:
        """Persist value. Raise StoreError on backend failure."""

    # =========================================================================
    # Contract
    # =========================================================================

    async def get(self, key: str) -> Any:
        try:
            exists, value = self._read(key)
        except StoreError as e:
            logger.error(f"Error loading {key}: {e}")
            return None
        return copy.deepcopy(value) if exists else None

    async def set(self, key: str, value: Any) -> bool:
        try:
            self._write(key, value)
        except StoreError as e:
            logger.error(f"Error updating {key}: {e}")
            return False

        self._publish(key, value)
        return True

    async def subscribe(self, key: str, on_change: OnChange, default: Any = None) -> Callable[[], None]:
        """
        Watch one document.

        on_change is called immediately with the current value (seeding
        ``default`` first if the document does not exist), then again on
        every successful write to the key.
        """
        self._subscribers.setdefault(key, []).append(on_change)

        try:
            exists, value = self._read(key)
        except StoreError as e:
            logger.error(f"Error loading {key}: {e}")
            exists, value = False, None

        if not exists:
            value = default
            try:
                self._write(key, default)
            except StoreError as e:
                logger.error(f"Error seeding {key}: {e}")

        self._deliver(on_change, key, value)

        def unsubscribe() -> None:
            callbacks = self._subscribers.get(key, [])
            if on_change in callbacks:
                callbacks.remove(on_change)

        return unsubscribe

    def close(self) -> None:
        self._subscribers.clear()

    # =========================================================================
    # Fan-out
    # =========================================================================

    def _publish(self, key: str, value: Any) -> None:
        for on_change in list(self._subscribers.get(key, [])):
            self._deliver(on_change, key, value)

    def _deliver(self, on_change: OnChange, key: str, value: Any) -> None:
        try:
            on_change(copy.deepcopy(value))
        except Exception as e:
            logger.error(f"Subscriber for {key} failed: {e}")
