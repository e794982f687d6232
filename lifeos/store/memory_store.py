"""Dict-backed document store. Nothing survives the process."""

from __future__ import annotations

import copy
from typing import Any

from .base import DocumentStore


class InMemoryDocumentStore(DocumentStore):
    def __init__(self, initial: dict[str, Any] | None = None):
        super().__init__()
        self._documents: dict[str, Any] = copy.deepcopy(initial or {})

    def _read(self, key: str) -> tuple[bool, Any]:
        if key in self._documents:
            return True, self._documents[key]
        return False, None

    def _write(self, key: str, value: Any) -> None:
        self._documents[key] = copy.deepcopy(value)
