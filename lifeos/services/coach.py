"""
Tool: Coach Service
Purpose: Dashboard summary, mentor help and the strategic report

The dashboard summary is pure derivation from the cached state. Mentor
help and the full report are single free-text AI calls; a failed call
has already been notified by the client and comes back as an empty
string.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Any, Optional

from lifeos.ai.client import CompletionClient
from lifeos.ai.prompts import DOUBTS, full_report_prompt, mentor_prompt
from lifeos.config_models import GamificationConfig
from lifeos.gamification.scoring import kpi_progress, level_of
from lifeos.notify import Notifier
from lifeos.state import AppState
from lifeos.store.base import DocumentStore

from .base import Service


logger = logging.getLogger(__name__)

NO_GOALS_TEXT = "Add goals in the 'Life Goals' section!"


def financial_runway(financial_budget: float, monthly_spend: float) -> float:
    """Months the budget lasts at the current spend; infinite with no spend."""
    if monthly_spend <= 0:
        return math.inf
    return financial_budget / monthly_spend


class CoachService(Service):
    def __init__(
        self,
        state: AppState,
        store: DocumentStore,
        notifier: Notifier,
        ai: CompletionClient,
        gamification: Optional[GamificationConfig] = None,
    ):
        super().__init__(state, store, notifier)
        self.ai = ai
        self.gamification = gamification or GamificationConfig()

    # =========================================================================
    # Dashboard
    # =========================================================================

    def goal_of_the_day(self, today: Optional[date] = None) -> Optional[dict[str, Any]]:
        goals = self.state.goals
        if not goals:
            return None
        day_of_year = (today or date.today()).timetuple().tm_yday
        return goals[day_of_year % len(goals)].to_dict()

    def dashboard(self, today: Optional[date] = None) -> dict[str, Any]:
        state = self.state
        width = self.gamification.level_width

        pillars = {}
        for pillar, xp in state.pillars.items():
            info = level_of(xp, width)
            pillars[pillar.value] = {**info.to_dict(), "xp": xp, "progress": info.progress_percent}

        runway = financial_runway(state.settings.financial_budget, state.settings.monthly_spend)
        goal = self.goal_of_the_day(today)

        return {
            "success": True,
            "data": {
                "pillars": pillars,
                "streak": state.streak,
                "runway_months": None if math.isinf(runway) else round(runway, 1),
                "goal_of_the_day": goal or {"text": NO_GOALS_TEXT},
                "kpis": [{**kpi.to_dict(), "progress": kpi_progress(kpi)} for kpi in state.settings.kpis],
                "review_scores": [
                    {"date": review.date.isoformat(), "score": review.total_score}
                    for review in state.reviews[-30:]
                ],
                "financial_history": [entry.to_dict() for entry in state.financial[-12:]],
            },
        }

    # =========================================================================
    # AI coaching
    # =========================================================================

    async def mentor_help(self, mentor: str, doubt: str) -> dict[str, Any]:
        """Answer one of the fixed doubts in the voice of a configured mentor."""
        if not mentor or not doubt:
            return self._fail("Select a mentor and a doubt.")
        if mentor not in self.state.settings.mentors:
            return self._fail(f"Unknown mentor: {mentor}")
        if doubt not in DOUBTS:
            return self._fail(f"Unknown doubt. Must be one of: {list(DOUBTS)}")
        if not self._begin("mentor help"):
            return self._already_running("mentor help")

        try:
            answer = await self.ai.complete(mentor_prompt(mentor, self.state.memory, doubt))
            if not answer:
                return {"success": False, "error": "No answer from the mentor"}
            return {"success": True, "data": {"mentor": mentor, "doubt": doubt, "answer": answer}}
        finally:
            self._end("mentor help")

    async def generate_report(self) -> dict[str, Any]:
        """Full strategic report over every part of the state, as Markdown."""
        if not self._begin("report"):
            return self._already_running("report")

        try:
            state = self.state
            prompt = full_report_prompt(
                state.memory,
                state.pillars,
                state.goals,
                state.tasks,
                state.financial,
                state.reviews,
            )
            report = await self.ai.complete(prompt)
            if not report:
                return {"success": False, "error": "The report could not be generated"}
            logger.info(f"Generated strategic report ({len(report)} chars)")
            return {"success": True, "data": {"report": report}}
        finally:
            self._end("report")
