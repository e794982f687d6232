"""Tests for lifeos/ai/prompts.py"""

from datetime import date

from lifeos.ai.prompts import (
    DOUBTS,
    full_report_prompt,
    goal_suggestion_prompt,
    mentor_prompt,
    prioritization_prompt,
    review_analysis_prompt,
    subdivision_prompt,
)
from lifeos.models import DailyReview, FinancialEntry, LifeGoal, Pillar, Task, default_pillars
from lifeos.tasks.reconciler import open_tasks


class TestPromptBuilders:
    """Each prompt must embed the state slice its answer depends on."""

    def test_subdivision_mentions_goal_and_shape(self):
        prompt = subdivision_prompt("Launch the blog")
        assert '"Launch the blog"' in prompt
        assert "3-5" in prompt
        assert '"tasks"' in prompt

    def test_prioritization_numbers_open_view(self, sample_tasks):
        prompt = prioritization_prompt("I am a developer", open_tasks(sample_tasks))

        assert "I am a developer" in prompt
        assert "0: Go for a run" in prompt
        assert "2: Update CV" in prompt
        assert "Old done task" not in prompt
        assert '"high", "medium", "low"' in prompt

    def test_review_analysis_embeds_transcript(self):
        prompt = review_analysis_prompt("ctx", [{"question": "Did you train?", "answer": "Yes"}])
        assert '"question": "Did you train?"' in prompt

    def test_goal_suggestion_lists_goals(self):
        goals = [LifeGoal(id="g1", text="Run a marathon", pillar=Pillar.BODY),
                 LifeGoal(id="g2", text="Learn Japanese", pillar=Pillar.MIND)]
        prompt = goal_suggestion_prompt("ctx", goals)
        assert "Run a marathon, Learn Japanese" in prompt

    def test_mentor_prompt(self):
        prompt = mentor_prompt("Seneca", "I value calm", DOUBTS[1])
        assert "Seneca" in prompt
        assert "I value calm" in prompt
        assert DOUBTS[1] in prompt

    def test_four_fixed_doubts(self):
        assert len(DOUBTS) == 4


class TestFullReportPrompt:
    """Tests for the strategic report prompt windows."""

    def test_windows_over_history(self):
        tasks = [
            Task(id=f"d{i}", text=f"done {i}", pillar=Pillar.MIND, points=1, completed=True)
            for i in range(12)
        ] + [
            Task(id=f"o{i}", text=f"open {i}", pillar=Pillar.MIND, points=1)
            for i in range(12)
        ]
        financial = [FinancialEntry(month=f"2024-0{m}", net_worth=m, income=0, expenses=0) for m in range(1, 6)]
        reviews = [DailyReview(date=date(2024, 3, d), answers={}, total_score=d) for d in range(1, 10)]

        prompt = full_report_prompt("who I am", default_pillars(), [], tasks, financial, reviews)

        # last 10 completed, first 10 open
        assert '"done 1"' not in prompt and '"done 2"' in prompt and '"done 11"' in prompt
        assert '"open 9"' in prompt and '"open 10"' not in prompt
        # last 3 months
        assert "2024-02" not in prompt and "2024-03" in prompt and "2024-05" in prompt
        # last 7 reviews
        assert "2024-03-02" not in prompt and "2024-03-03" in prompt and "2024-03-09" in prompt
        assert '"Body": {"xp": 0}' in prompt
        assert "who I am" in prompt
