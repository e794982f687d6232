"""Shared test fixtures for Life OS tests.

This module provides common fixtures used across all test modules:
- Database isolation with temporary files
- In-memory document store and notifier
- A scripted fake of the Gemini generateContent endpoint
- Standard task data
- A fully wired LifeOS app on top of all of the above

Usage:
    async def test_something(app, fake_gemini):
        fake_gemini.reply_json({"tasks": ["a", "b", "c"]})
        ...
"""

import json
import os
import tempfile
from collections.abc import AsyncGenerator, Generator
from pathlib import Path
from typing import Any

import httpx
import pytest
import pytest_asyncio

from lifeos.app import LifeOS
from lifeos.config_models import LifeOSConfig, StoreConfig
from lifeos.models import Pillar, Task
from lifeos.notify import Notifier
from lifeos.store.memory_store import InMemoryDocumentStore


# ─────────────────────────────────────────────────────────────────────────────
# Path Constants
# ─────────────────────────────────────────────────────────────────────────────

PROJECT_ROOT = Path(__file__).parent.parent


# ─────────────────────────────────────────────────────────────────────────────
# Database Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def temp_db() -> Generator[Path, None, None]:
    """Create a temporary database file for testing.

    The database file is automatically deleted after the test completes.

    Yields:
        Path to the temporary database file
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    yield db_path

    # Cleanup
    if db_path.exists():
        os.unlink(db_path)


@pytest.fixture
def memory_store() -> InMemoryDocumentStore:
    """Empty dict-backed store."""
    return InMemoryDocumentStore()


# ─────────────────────────────────────────────────────────────────────────────
# Notification Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def notifier() -> Notifier:
    return Notifier()


def messages(notifier: Notifier, severity: str | None = None) -> list[str]:
    """Messages in the notifier history, optionally filtered by severity."""
    return [n.message for n in notifier.history if severity is None or n.severity == severity]


# ─────────────────────────────────────────────────────────────────────────────
# AI Fixtures
# ─────────────────────────────────────────────────────────────────────────────


def gemini_body(text: str) -> dict[str, Any]:
    """A minimal successful generateContent response body."""
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


class FakeGemini:
    """Scripted generateContent endpoint.

    Replies are queued and consumed in order, one per request. Every
    request is recorded for inspection.
    """

    def __init__(self) -> None:
        self.replies: list[Any] = []
        self.requests: list[httpx.Request] = []

    def reply_text(self, text: str) -> None:
        self.replies.append(httpx.Response(200, json=gemini_body(text)))

    def reply_json(self, payload: Any) -> None:
        self.reply_text(json.dumps(payload))

    def reply_status(self, status: int, body: str = "upstream error") -> None:
        self.replies.append(httpx.Response(status, text=body))

    def reply_raw(self, response: httpx.Response) -> None:
        self.replies.append(response)

    def fail_connect(self) -> None:
        self.replies.append("connect_error")

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.replies:
            return httpx.Response(500, text="no reply queued")
        reply = self.replies.pop(0)
        if reply == "connect_error":
            raise httpx.ConnectError("connection refused", request=request)
        return reply

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def payload(self, index: int = -1) -> dict[str, Any]:
        return json.loads(self.requests[index].content)

    def prompt(self, index: int = -1) -> str:
        return self.payload(index)["contents"][0]["parts"][0]["text"]


@pytest.fixture
def fake_gemini() -> FakeGemini:
    return FakeGemini()


@pytest.fixture
def config(monkeypatch) -> LifeOSConfig:
    """Default config on the in-memory backend with a test API key."""
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    return LifeOSConfig(store=StoreConfig(backend="memory"))


# ─────────────────────────────────────────────────────────────────────────────
# Task Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def sample_tasks() -> list[Task]:
    """Five open tasks plus one completed task in the middle.

    Open-task view (what the AI sees): t1, t2, t4, t5, t6
    """
    return [
        Task(id="t1", text="Go for a run", pillar=Pillar.BODY, points=10),
        Task(id="t2", text="Review budget", pillar=Pillar.FINANCE, points=20),
        Task(id="t3", text="Old done task", pillar=Pillar.MIND, points=5, completed=True),
        Task(id="t4", text="Update CV", pillar=Pillar.CAREER, points=30),
        Task(id="t5", text="Read a chapter", pillar=Pillar.MIND, points=10),
        Task(id="t6", text="Call a friend", pillar=Pillar.RELATIONSHIPS, points=15),
    ]


# ─────────────────────────────────────────────────────────────────────────────
# App Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def app(
    config: LifeOSConfig,
    memory_store: InMemoryDocumentStore,
    fake_gemini: FakeGemini,
    notifier: Notifier,
) -> AsyncGenerator[LifeOS, None]:
    """A wired LifeOS app on the in-memory store and the fake AI."""
    life_os = await LifeOS.create(
        config=config,
        store=memory_store,
        transport=fake_gemini.transport,
        notifier=notifier,
    )
    yield life_os
    await life_os.close()
