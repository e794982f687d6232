"""
Life OS Application

Composition root: builds the store, notifier, AI client, cached state
and the feature services, and tears them down again.

Usage:
    app = await LifeOS.create()
    await app.todo.add_task("Call mum", "Relationships", 10)
    print(app.coach.dashboard())
    await app.close()

    # or
    async with await LifeOS.create() as app:
        ...
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from lifeos.ai.client import CompletionClient
from lifeos.config_models import LifeOSConfig, load_and_validate
from lifeos.notify import Notifier
from lifeos.services import (
    CoachService,
    FinanceService,
    GoalService,
    ReviewService,
    SettingsService,
    TodoService,
)
from lifeos.state import AppState
from lifeos.store import create_store
from lifeos.store.base import DocumentStore


logger = logging.getLogger(__name__)


class LifeOS:
    def __init__(
        self,
        config: LifeOSConfig,
        store: DocumentStore,
        notifier: Notifier,
        ai: CompletionClient,
        state: AppState,
    ):
        self.config = config
        self.store = store
        self.notifier = notifier
        self.ai = ai
        self.state = state

        self.todo = TodoService(state, store, notifier, ai, config.tasks)
        self.reviews = ReviewService(state, store, notifier, ai)
        self.goals = GoalService(state, store, notifier, ai, config.tasks)
        self.coach = CoachService(state, store, notifier, ai, config.gamification)
        self.finance = FinanceService(state, store, notifier)
        self.settings = SettingsService(state, store, notifier)

    @classmethod
    async def create(
        cls,
        config: Optional[LifeOSConfig] = None,
        store: Optional[DocumentStore] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        notifier: Optional[Notifier] = None,
    ) -> LifeOS:
        """
        Wire up a Life OS instance and load every document.

        Args:
            config: Loaded config (args/lifeos.yaml when omitted)
            store: Document store (built from config.store when omitted)
            transport: httpx transport for the AI client (tests)
            notifier: Notification channel (a fresh one when omitted)
        """
        config = config or load_and_validate()
        store = store or create_store(config.store)
        notifier = notifier or Notifier()
        ai = CompletionClient(config.ai, notifier, transport=transport)
        state = await AppState.load(store)

        logger.info(f"Life OS ready (store={type(store).__name__}, model={config.ai.model})")
        return cls(config, store, notifier, ai, state)

    async def close(self) -> None:
        self.state.detach()
        await self.ai.close()
        self.store.close()

    async def __aenter__(self) -> LifeOS:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
