"""
Prompt builders for the AI coach

Each builder embeds the slice of application state the question needs,
serialized as JSON, ahead of the instruction. The AI memory blob is the
shared "who I am" context for every prompt.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from lifeos.models import DailyReview, FinancialEntry, LifeGoal, Pillar, Task, pillars_to_doc


# Fixed questions offered on the mentor help screen
DOUBTS = (
    "I don't know what to do!",
    "What is my priority?",
    "How am I doing?",
    "Give me advice based on my situation!",
)


def _dump(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)


def subdivision_prompt(goal: str, min_tasks: int = 3, max_tasks: int = 5) -> str:
    return (
        f"Break this main goal down into a list of {min_tasks}-{max_tasks} concrete, "
        f'actionable subtasks. Goal: "{goal}". '
        'Respond with a JSON object with a single key "tasks" containing an array of strings. '
        'Example: {"tasks": ["Research initial data", "Define the report structure", "Write the draft"]}.'
    )


def prioritization_prompt(
    memory: str,
    open_tasks: Sequence[Task],
    high: int = 1,
    medium: int = 3,
    low: int = 5,
) -> str:
    """The numbered list here is the open-task view the returned indices refer to."""
    task_lines = "\n".join(f"{index}: {task.text}" for index, task in enumerate(open_tasks))
    return (
        f"Context about me and my goals: {memory}\n\n"
        f"This is my current to-do list:\n{task_lines}\n\n"
        f"Analyze the list and my goals. Identify {high} high priority task, "
        f"up to {medium} medium priority and up to {low} low priority. "
        'Respond with a JSON object with keys "high", "medium", "low", containing the numeric '
        'indices of the tasks. Example: {"high": [2], "medium": [0, 4], "low": [1, 3]}'
    )


def review_analysis_prompt(memory: str, transcript: Sequence[dict[str, str]]) -> str:
    return (
        f"Context about me: {memory}\n\n"
        f"Today I answered my daily review like this:\n{_dump(list(transcript))}\n\n"
        "Give a concise (at most 3 sentences) and motivating analysis of my day, connecting the "
        "answers to my overall goals. Be a coach, not just a summarizer."
    )


def goal_suggestion_prompt(memory: str, goals: Sequence[LifeGoal]) -> str:
    goal_list = ", ".join(goal.text for goal in goals)
    return (
        f"Context: {memory}\n\n"
        f"Life goals: {goal_list}\n\n"
        "Pick one of the goals and suggest one small, concrete action I can take TODAY to move "
        "closer to it. Phrase the answer as a task to add to a to-do list. Reply with the task "
        "text only."
    )


def mentor_prompt(mentor: str, memory: str, doubt: str) -> str:
    return (
        f"Act as if you were my mentor, {mentor}. Be as direct, wise and incisive as they are. "
        f'Based on this information I have shared about myself: "{memory}", answer this '
        f'specific request of mine: "{doubt}". Give a strategic, actionable answer.'
    )


def full_report_prompt(
    memory: str,
    pillars: dict[Pillar, int],
    goals: Sequence[LifeGoal],
    tasks: Sequence[Task],
    financial: Sequence[FinancialEntry],
    reviews: Sequence[DailyReview],
) -> str:
    """Strategic weekly report over every part of the state."""
    completed = [t.to_dict() for t in tasks if t.completed][-10:]
    open_ = [t.to_dict() for t in tasks if not t.completed][:10]

    return f"""You are my personal strategic coach. Analyze the following data from my "Life OS" and produce a complete, actionable report.

**1. Context and core memory (who I am):**
{memory}

**2. Current state of the pillars (XP):**
{_dump(pillars_to_doc(pillars))}

**3. Life goals (my long-term vision):**
{_dump([g.to_dict() for g in goals])}

**4. Recent tasks (what I did):**
- Completed: {_dump(completed)}
- To do: {_dump(open_)}

**5. Recent financial data (last 3 months):**
{_dump([f.to_dict() for f in financial[-3:]])}

**6. Recent daily reviews (last 7):**
{_dump([r.to_dict() for r in reviews[-7:]])}

**TASK:**
Based on ALL the data above, produce a structured Markdown report with these sections:

### 1. Global strategic analysis
A high-level assessment (2-3 sentences) of how I am doing against my vision and goals. Are my daily actions aligned with my long-term goals?

### 2. Strengths and recent wins
Identify 2-3 wins or positive patterns visible in the data.

### 3. Areas for improvement and risks
Identify 2-3 weaknesses, risks or negative patterns (a neglected pillar, procrastination on some tasks, overspending).

### 4. Action plan for next week
Give 3 concrete, prioritized actions for next week that address the areas for improvement and accelerate progress toward the goals. Be specific.
"""
