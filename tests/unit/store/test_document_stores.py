"""Tests for lifeos/store/

Both backends share the DocumentStore contract:
- set() reports failure as False instead of raising
- subscribe() seeds missing documents with the default and delivers
  the current value immediately, then every successful write
- subscribers receive private copies
"""

import sqlite3

import pytest

from lifeos.config_models import StoreConfig
from lifeos.store import DEFAULT_DOCUMENTS, TODO_LIST_KEY, create_store
from lifeos.store.base import StoreError
from lifeos.store.memory_store import InMemoryDocumentStore
from lifeos.store.sqlite_store import SQLiteDocumentStore


@pytest.fixture(params=["memory", "sqlite"])
def store(request, temp_db):
    if request.param == "memory":
        return InMemoryDocumentStore()
    return SQLiteDocumentStore(temp_db, app_id="test-app", user_id="test_user_123")


# ─────────────────────────────────────────────────────────────────────────────
# Contract Tests (both backends)
# ─────────────────────────────────────────────────────────────────────────────


class TestGetSet:
    """Tests for plain reads and writes."""

    @pytest.mark.asyncio
    async def test_missing_key_is_none(self, store):
        assert await store.get("todoList") is None

    @pytest.mark.asyncio
    async def test_round_trip(self, store):
        doc = [{"id": "a", "text": "Run", "pillar": "Body", "points": 10, "completed": False}]

        assert await store.set(TODO_LIST_KEY, doc) is True
        assert await store.get(TODO_LIST_KEY) == doc

    @pytest.mark.asyncio
    async def test_overwrite(self, store):
        await store.set("dailyReviewStreak", 1)
        await store.set("dailyReviewStreak", 2)
        assert await store.get("dailyReviewStreak") == 2

    @pytest.mark.asyncio
    async def test_get_returns_copy(self, store):
        await store.set("settings", {"mentors": ["Seneca"]})
        value = await store.get("settings")
        value["mentors"].append("Mutated")

        assert await store.get("settings") == {"mentors": ["Seneca"]}


class TestSubscribe:
    """Tests for change subscriptions."""

    @pytest.mark.asyncio
    async def test_seeds_default_and_delivers(self, store):
        received = []
        await store.subscribe("settings", received.append, default=DEFAULT_DOCUMENTS["settings"])

        assert received == [DEFAULT_DOCUMENTS["settings"]]
        assert await store.get("settings") == DEFAULT_DOCUMENTS["settings"]

    @pytest.mark.asyncio
    async def test_existing_value_not_overwritten(self, store):
        await store.set("dailyReviewStreak", 4)
        received = []
        await store.subscribe("dailyReviewStreak", received.append, default=0)

        assert received == [4]

    @pytest.mark.asyncio
    async def test_delivers_updates(self, store):
        received = []
        await store.subscribe("aiMemories", received.append, default="")
        await store.set("aiMemories", "I am a runner")

        assert received == ["", "I am a runner"]

    @pytest.mark.asyncio
    async def test_unsubscribe(self, store):
        received = []
        unsubscribe = await store.subscribe("aiMemories", received.append, default="")
        unsubscribe()
        await store.set("aiMemories", "later")

        assert received == [""]

    @pytest.mark.asyncio
    async def test_subscriber_gets_private_copy(self, store):
        received = []
        await store.subscribe("lifeGoals", received.append, default=[])
        doc = [{"id": "g1", "text": "Marathon", "pillar": "Body"}]
        await store.set("lifeGoals", doc)
        received[-1][0]["text"] = "Mutated"

        assert (await store.get("lifeGoals"))[0]["text"] == "Marathon"

    @pytest.mark.asyncio
    async def test_failing_subscriber_does_not_break_write(self, store):
        def broken(_value):
            raise RuntimeError("boom")

        await store.subscribe("aiMemories", broken, default="")
        assert await store.set("aiMemories", "still saved") is True
        assert await store.get("aiMemories") == "still saved"


class TestWriteFailure:
    @pytest.mark.asyncio
    async def test_unserializable_value_reports_false(self, temp_db):
        store = SQLiteDocumentStore(temp_db)
        received = []
        await store.subscribe("aiMemories", received.append, default="")

        assert await store.set("aiMemories", {"bad": object()}) is False
        assert received == [""]

    @pytest.mark.asyncio
    async def test_backend_error_reports_false(self, memory_store):
        def fail(key, value):
            raise StoreError("disk full")

        memory_store._write = fail
        assert await memory_store.set("todoList", []) is False


# ─────────────────────────────────────────────────────────────────────────────
# SQLite Specifics
# ─────────────────────────────────────────────────────────────────────────────


class TestSQLiteDocumentStore:
    """Tests for the SQLite backend."""

    def test_creates_documents_table(self, temp_db):
        SQLiteDocumentStore(temp_db)

        conn = sqlite3.connect(str(temp_db))
        cursor = conn.cursor()
        cursor.execute("SELECT name FROM sqlite_master WHERE type='table' AND name='documents'")
        assert cursor.fetchone() is not None
        conn.close()

    @pytest.mark.asyncio
    async def test_persists_across_instances(self, temp_db):
        await SQLiteDocumentStore(temp_db).set("dailyReviewStreak", 9)
        assert await SQLiteDocumentStore(temp_db).get("dailyReviewStreak") == 9

    @pytest.mark.asyncio
    async def test_users_are_isolated(self, temp_db):
        alice = SQLiteDocumentStore(temp_db, user_id="alice")
        bob = SQLiteDocumentStore(temp_db, user_id="bob")

        await alice.set("aiMemories", "alice's notes")

        assert await bob.get("aiMemories") is None
        assert await alice.get("aiMemories") == "alice's notes"

    @pytest.mark.asyncio
    async def test_non_ascii_round_trip(self, temp_db):
        store = SQLiteDocumentStore(temp_db)
        await store.set("aiMemories", "Voglio più tempo libero ☀")
        assert await store.get("aiMemories") == "Voglio più tempo libero ☀"


class TestCreateStore:
    def test_memory_backend(self):
        assert isinstance(create_store(StoreConfig(backend="memory")), InMemoryDocumentStore)

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown store backend"):
            create_store(StoreConfig(backend="firestore"))
