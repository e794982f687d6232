"""
Tool: Streak Tracker
Purpose: Daily review streak continuation and review scoring

Streak rule: compare today with the date of the most recent review in
whole calendar days. Exactly one day apart continues the streak; any
other distance (a gap, or the same day) starts over at 1. The same-day
case is a known quirk: one-review-per-day is enforced by the caller
with has_reviewed_on(), not here.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date

from lifeos.models import DailyReview, Pillar, ReviewQuestion


def next_streak(prior_records: Sequence[DailyReview], current_streak: int, today: date) -> int:
    """
    Compute the streak after appending today's review.

    Args:
        prior_records: Reviews already stored, oldest first
        current_streak: Streak counter before this review
        today: Date of the review being submitted

    Returns:
        The new streak value
    """
    if not prior_records:
        return 1

    last_date = prior_records[-1].date
    diff_days = abs((today - last_date).days)

    if diff_days == 1:
        return current_streak + 1
    return 1


def has_reviewed_on(records: Sequence[DailyReview], day: date) -> bool:
    return any(record.date == day for record in records)


def score_answers(
    questions: Sequence[ReviewQuestion],
    answers: Mapping[int, bool],
) -> tuple[int, dict[Pillar, int], list[dict[str, str]]]:
    """
    Score a set of answers against the configured questions.

    Returns:
        (total_score, xp to award per pillar, question/answer transcript)
    """
    total_score = 0
    awards: dict[Pillar, int] = {}
    transcript: list[dict[str, str]] = []

    for index, question in enumerate(questions):
        if answers.get(index):
            awards[question.pillar] = awards.get(question.pillar, 0) + question.points
            total_score += question.points
            transcript.append({"question": question.text, "answer": "Yes"})
        else:
            transcript.append({"question": question.text, "answer": "No"})

    return total_score, awards, transcript
