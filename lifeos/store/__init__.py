"""Document Store - keyed JSON documents with live subscriptions

The store is the system of record. In-memory state is only a cache that
subscription callbacks replace wholesale (last write wins).

Components:
    base.py: DocumentStore contract and subscription fan-out
    sqlite_store.py: SQLite-backed store (one row per user document)
    memory_store.py: Dict-backed store for tests and throwaway sessions

Usage:
    from lifeos.store import TODO_LIST_KEY, create_store

    store = create_store(config.store)
    unsubscribe = await store.subscribe(TODO_LIST_KEY, on_change, default=[])
    await store.set(TODO_LIST_KEY, [task.to_dict() for task in tasks])
"""

from __future__ import annotations

from typing import Any

# Document keys
PILLARS_KEY = "pillars"
SETTINGS_KEY = "settings"
STREAK_KEY = "dailyReviewStreak"
FINANCIAL_KEY = "financialData"
TODO_LIST_KEY = "todoList"
LIFE_GOALS_KEY = "lifeGoals"
AI_MEMORY_KEY = "aiMemories"
REVIEWS_KEY = "dailyReviews"

# Seeded on first subscription when a document does not exist yet
DEFAULT_DOCUMENTS: dict[str, Any] = {
    PILLARS_KEY: {
        "Body": {"xp": 0},
        "Finance": {"xp": 0},
        "Career": {"xp": 0},
        "Mind": {"xp": 0},
        "Relationships": {"xp": 0},
    },
    SETTINGS_KEY: {
        "financialBudget": 6000,
        "monthlySpend": 1500,
        "dailyReviewQuestions": [],
        "mentors": [],
        "kpis": [],
    },
    STREAK_KEY: 0,
    FINANCIAL_KEY: [],
    TODO_LIST_KEY: [],
    LIFE_GOALS_KEY: [],
    AI_MEMORY_KEY: "",
    REVIEWS_KEY: [],
}


def create_store(config):
    """Build the store selected by the ``store`` config section."""
    from lifeos import PROJECT_ROOT

    from .memory_store import InMemoryDocumentStore
    from .sqlite_store import SQLiteDocumentStore

    if config.backend == "memory":
        return InMemoryDocumentStore()
    if config.backend == "sqlite":
        return SQLiteDocumentStore(
            db_path=PROJECT_ROOT / config.database_path,
            app_id=config.app_id,
            user_id=config.user_id,
        )
    raise ValueError(f"Unknown store backend: {config.backend}. Must be one of: ['sqlite', 'memory']")


__all__ = [
    "PILLARS_KEY",
    "SETTINGS_KEY",
    "STREAK_KEY",
    "FINANCIAL_KEY",
    "TODO_LIST_KEY",
    "LIFE_GOALS_KEY",
    "AI_MEMORY_KEY",
    "REVIEWS_KEY",
    "DEFAULT_DOCUMENTS",
    "create_store",
]
