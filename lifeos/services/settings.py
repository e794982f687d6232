"""
Tool: Settings Service
Purpose: Persist settings edits and the AI memory blob

Settings edits (questions, KPIs, mentors) are made on an immutable
Settings copy via its add_/remove_ helpers and saved in one write.
"""

from __future__ import annotations

from typing import Any

from lifeos.models import Settings
from lifeos.store import AI_MEMORY_KEY, SETTINGS_KEY

from .base import Service


class SettingsService(Service):
    @property
    def current(self) -> Settings:
        return self.state.settings

    async def save(self, settings: Settings) -> dict[str, Any]:
        if any(question.points < 0 for question in settings.daily_review_questions):
            return self._fail("Review question points cannot be negative")
        ok = await self._write(SETTINGS_KEY, settings.to_dict())
        if not ok:
            return {"success": False, "error": f"Error saving {SETTINGS_KEY}"}
        self.notifier.notify("Settings saved!", "success")
        return {"success": True, "data": settings.to_dict(), "message": "Settings saved!"}

    async def save_memory(self, text: str) -> dict[str, Any]:
        """Replace the free-text context sent with every AI prompt."""
        ok = await self._write(AI_MEMORY_KEY, text or "")
        if not ok:
            return {"success": False, "error": f"Error saving {AI_MEMORY_KEY}"}
        self.notifier.notify("Memories saved!", "success")
        return {"success": True, "data": {"length": len(text or "")}, "message": "Memories saved!"}
