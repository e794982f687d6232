"""
Application State

A typed, read-mostly cache of every Life OS document. The store is the
system of record: services write to the store, and the subscription
callbacks registered here replace the cached value wholesale (last
write wins, no merging). External writes to the store land here the
same way.

Defaults are constructed once, while decoding, so readers never need
"or []" style fallbacks.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from lifeos.models import (
    DailyReview,
    FinancialEntry,
    LifeGoal,
    Pillar,
    Settings,
    Task,
    default_pillars,
    pillars_from_doc,
)
from lifeos.store import (
    AI_MEMORY_KEY,
    DEFAULT_DOCUMENTS,
    FINANCIAL_KEY,
    LIFE_GOALS_KEY,
    PILLARS_KEY,
    REVIEWS_KEY,
    SETTINGS_KEY,
    STREAK_KEY,
    TODO_LIST_KEY,
)
from lifeos.store.base import DocumentStore


logger = logging.getLogger(__name__)


def _decode_list(key: str, raw: Any, decoder: Callable[[dict[str, Any]], Any]) -> list[Any]:
    """Decode a list document, skipping (and logging) entries that do not parse."""
    items = []
    for entry in raw or []:
        try:
            items.append(decoder(entry))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping malformed entry in {key}: {e}")
    return items


@dataclass
class AppState:
    pillars: dict[Pillar, int] = field(default_factory=default_pillars)
    settings: Settings = field(default_factory=Settings)
    streak: int = 0
    financial: list[FinancialEntry] = field(default_factory=list)
    tasks: list[Task] = field(default_factory=list)
    goals: list[LifeGoal] = field(default_factory=list)
    memory: str = ""
    reviews: list[DailyReview] = field(default_factory=list)

    _unsubscribes: list[Callable[[], None]] = field(default_factory=list, repr=False)

    # =========================================================================
    # Decoders: raw document -> typed field
    # =========================================================================

    def _apply(self, key: str, raw: Any) -> None:
        try:
            if key == PILLARS_KEY:
                self.pillars = pillars_from_doc(raw)
            elif key == SETTINGS_KEY:
                self.settings = Settings.from_dict(raw)
            elif key == STREAK_KEY:
                self.streak = max(0, int(raw or 0))
            elif key == FINANCIAL_KEY:
                self.financial = _decode_list(key, raw, FinancialEntry.from_dict)
            elif key == TODO_LIST_KEY:
                self.tasks = _decode_list(key, raw, Task.from_dict)
            elif key == LIFE_GOALS_KEY:
                self.goals = _decode_list(key, raw, LifeGoal.from_dict)
            elif key == AI_MEMORY_KEY:
                self.memory = str(raw or "")
            elif key == REVIEWS_KEY:
                self.reviews = _decode_list(key, raw, DailyReview.from_dict)
            else:
                logger.warning(f"Ignoring update for unknown key {key}")
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.error(f"Could not decode {key}, keeping previous value: {e}")

    # =========================================================================
    # Store wiring
    # =========================================================================

    async def attach(self, store: DocumentStore) -> None:
        """Subscribe to every document, seeding defaults for missing ones."""
        for key, default in DEFAULT_DOCUMENTS.items():
            unsubscribe = await store.subscribe(
                key,
                lambda raw, key=key: self._apply(key, raw),
                default=default,
            )
            self._unsubscribes.append(unsubscribe)
        logger.info(f"State attached to store ({len(self._unsubscribes)} documents)")

    def detach(self) -> None:
        for unsubscribe in self._unsubscribes:
            unsubscribe()
        self._unsubscribes.clear()

    @classmethod
    async def load(cls, store: DocumentStore) -> AppState:
        state = cls()
        await state.attach(store)
        return state
