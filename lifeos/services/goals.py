"""
Tool: Life Goals Service
Purpose: Long-term goals and AI-suggested actions toward them

Usage:
    service = GoalService(state, store, notifier, ai, config.tasks)
    await service.add_goal("Run a marathon", "Body")
    await service.suggest()              # one concrete action for today
    await service.accept_suggestion()    # becomes a Mind task worth 15 points
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from lifeos.ai.client import CompletionClient
from lifeos.ai.prompts import goal_suggestion_prompt
from lifeos.config_models import TasksConfig
from lifeos.models import LifeGoal, generate_id, parse_pillar
from lifeos.notify import Notifier
from lifeos.state import AppState
from lifeos.store import LIFE_GOALS_KEY, TODO_LIST_KEY
from lifeos.store.base import DocumentStore
from lifeos.tasks import reconciler

from .base import Service


logger = logging.getLogger(__name__)


class GoalService(Service):
    def __init__(
        self,
        state: AppState,
        store: DocumentStore,
        notifier: Notifier,
        ai: CompletionClient,
        config: Optional[TasksConfig] = None,
    ):
        super().__init__(state, store, notifier)
        self.ai = ai
        self.config = config or TasksConfig()
        self.suggestion: Optional[str] = None

    async def add_goal(self, text: str, pillar: Any) -> dict[str, Any]:
        if not text or not text.strip():
            return self._fail("Goal text is required", "info")
        try:
            resolved = parse_pillar(pillar)
        except ValueError as e:
            return self._fail(str(e))

        goal = LifeGoal(id=generate_id(), text=text.strip(), pillar=resolved)
        goals = [*self.state.goals, goal]
        await self._write(LIFE_GOALS_KEY, [g.to_dict() for g in goals])

        self.notifier.notify("Goal added!", "success")
        return {"success": True, "data": goal.to_dict(), "message": "Goal added!"}

    async def remove_goal(self, goal_id: str) -> dict[str, Any]:
        goals = [g for g in self.state.goals if g.id != goal_id]
        if len(goals) == len(self.state.goals):
            return self._fail(f"Goal not found: {goal_id}")

        await self._write(LIFE_GOALS_KEY, [g.to_dict() for g in goals])
        self.notifier.notify("Goal removed.", "info")
        return {"success": True, "data": {"id": goal_id}, "message": "Goal removed."}

    async def suggest(self) -> dict[str, Any]:
        """Ask the AI for one small action to take today toward a goal."""
        if not self._begin("suggestion"):
            return self._already_running("suggestion")

        try:
            text = await self.ai.complete(goal_suggestion_prompt(self.state.memory, self.state.goals))
            text = (text or "").strip()
            self.suggestion = text or None
            if not text:
                return {"success": False, "error": "No suggestion available"}
            return {"success": True, "data": {"suggestion": text}}
        finally:
            self._end("suggestion")

    async def accept_suggestion(self) -> dict[str, Any]:
        """Add the pending suggestion to the to-do list."""
        if not self.suggestion:
            return self._fail("There is no suggestion to add", "info")

        pillar = parse_pillar(self.config.suggestion_pillar)
        tasks = reconciler.add_task(self.state.tasks, self.suggestion, pillar, self.config.suggestion_points)
        await self._write(TODO_LIST_KEY, [task.to_dict() for task in tasks])

        self.suggestion = None
        self.notifier.notify("Suggested task added to the to-do list!", "success")
        return {"success": True, "data": tasks[-1].to_dict()}
