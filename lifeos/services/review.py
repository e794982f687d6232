"""
Tool: Daily Review Service
Purpose: Score the daily self-review, award XP, advance the streak

Submit order:
    1. Guard: one review per calendar day
    2. Score "yes" answers into per-pillar XP
    3. Compute the new streak from the previous record
    4. Ask the AI for a short coaching analysis (failure is not fatal)
    5. Write pillars, streak and reviews, each independently
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any, Optional

from lifeos.ai.client import CompletionClient
from lifeos.ai.prompts import review_analysis_prompt
from lifeos.gamification.scoring import award_many
from lifeos.gamification.streaks import has_reviewed_on, next_streak, score_answers
from lifeos.models import DailyReview, pillars_to_doc
from lifeos.notify import Notifier
from lifeos.state import AppState
from lifeos.store import PILLARS_KEY, REVIEWS_KEY, STREAK_KEY
from lifeos.store.base import DocumentStore

from .base import Service


logger = logging.getLogger(__name__)


class ReviewService(Service):
    def __init__(self, state: AppState, store: DocumentStore, notifier: Notifier, ai: CompletionClient):
        super().__init__(state, store, notifier)
        self.ai = ai

    def has_reviewed_today(self, today: Optional[date] = None) -> bool:
        return has_reviewed_on(self.state.reviews, today or date.today())

    async def submit(self, answers: Mapping[int, bool], today: Optional[date] = None) -> dict[str, Any]:
        """
        Submit today's review.

        Args:
            answers: Question index -> answered yes
            today: Review date (defaults to the local calendar date)

        Returns:
            Result dict; data holds total_score, streak, awards and the AI analysis
        """
        today = today or date.today()
        if self.has_reviewed_today(today):
            return self._fail("You have already completed today's review. Come back tomorrow!", "info")
        if not self._begin("review"):
            return self._already_running("review")

        try:
            questions = self.state.settings.daily_review_questions
            answers = {int(index): bool(value) for index, value in answers.items()}
            total_score, awards, transcript = score_answers(questions, answers)

            pillars = award_many(self.state.pillars, awards)
            streak = next_streak(self.state.reviews, self.state.streak, today)
            record = DailyReview(date=today, answers=answers, total_score=total_score)
            reviews = [*self.state.reviews, record]

            analysis = await self.ai.complete(review_analysis_prompt(self.state.memory, transcript))

            await self._write(PILLARS_KEY, pillars_to_doc(pillars))
            await self._write(STREAK_KEY, streak)
            await self._write(REVIEWS_KEY, [review.to_dict() for review in reviews])

            logger.info(f"Review for {today.isoformat()}: score={total_score}, streak={streak}")
            self.notifier.notify("Review completed and saved!", "success")
            return {
                "success": True,
                "data": {
                    "date": today.isoformat(),
                    "total_score": total_score,
                    "streak": streak,
                    "awards": {pillar.value: points for pillar, points in awards.items()},
                    "analysis": analysis,
                },
                "message": "Review completed and saved!",
            }
        finally:
            self._end("review")
