"""
Life OS Data Models

Typed documents for everything kept in the store. Each model converts
to and from the JSON-compatible dict stored under its key; the stored
field names (camelCase) match the documents written by earlier versions
of the app, so an existing store can be read back unchanged.

Design Principles:
- Defaults are applied once, in from_dict, never at read sites
- Level and progress are derived from XP, never stored
- Identifiers are generated once and survive every list rewrite
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import date
from enum import StrEnum
from typing import Any


class Pillar(StrEnum):
    """The five fixed life domains XP is bucketed into."""

    BODY = "Body"
    FINANCE = "Finance"
    CAREER = "Career"
    MIND = "Mind"
    RELATIONSHIPS = "Relationships"


class Priority(StrEnum):
    """Priority tag assigned to open tasks by the AI."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    NONE = "None"


# Display rank: lower sorts first
PRIORITY_RANK: dict[Priority, int] = {
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
    Priority.NONE: 4,
}


def generate_id() -> str:
    """Generate a short unique ID."""
    return uuid.uuid4().hex[:12]


def parse_pillar(value: Any) -> Pillar:
    """Convert a stored or user-supplied pillar name, case-insensitively."""
    if isinstance(value, Pillar):
        return value
    for pillar in Pillar:
        if str(value).strip().lower() == pillar.value.lower():
            return pillar
    raise ValueError(f"Invalid pillar '{value}'. Must be one of: {[p.value for p in Pillar]}")


def parse_priority(value: Any) -> Priority:
    """Convert a stored priority; anything unknown or missing is NONE."""
    if isinstance(value, Priority):
        return value
    if value is None:
        return Priority.NONE
    for priority in Priority:
        if str(value).strip().lower() == priority.value.lower():
            return priority
    return Priority.NONE


# =============================================================================
# Pillars
# =============================================================================


def default_pillars() -> dict[Pillar, int]:
    return {pillar: 0 for pillar in Pillar}


def pillars_from_doc(doc: dict[str, Any] | None) -> dict[Pillar, int]:
    """Decode the pillar document ``{"Body": {"xp": 10}, ...}``."""
    pillars = default_pillars()
    for name, value in (doc or {}).items():
        xp = value.get("xp", 0) if isinstance(value, dict) else value
        pillars[parse_pillar(name)] = max(0, int(xp or 0))
    return pillars


def pillars_to_doc(pillars: dict[Pillar, int]) -> dict[str, dict[str, int]]:
    return {pillar.value: {"xp": int(xp)} for pillar, xp in pillars.items()}


# =============================================================================
# To-do list
# =============================================================================


@dataclass(frozen=True)
class Task:
    """A to-do item. Frozen: every change produces a new list of new tasks."""

    id: str
    text: str
    pillar: Pillar
    points: int
    completed: bool = False
    priority: Priority = Priority.NONE
    parent: str | None = None  # goal text this task was subdivided from

    def with_changes(self, **changes: Any) -> Task:
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "pillar": self.pillar.value,
            "points": self.points,
            "completed": self.completed,
            "priority": self.priority.value,
        }
        if self.parent is not None:
            data["parent"] = self.parent
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        return cls(
            id=str(data["id"]),
            text=str(data["text"]),
            pillar=parse_pillar(data["pillar"]),
            points=max(0, int(data.get("points") or 0)),
            completed=bool(data.get("completed", False)),
            priority=parse_priority(data.get("priority")),
            parent=data.get("parent"),
        )


# =============================================================================
# Daily review
# =============================================================================


@dataclass(frozen=True)
class ReviewQuestion:
    text: str
    pillar: Pillar
    points: int

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "pillar": self.pillar.value, "points": self.points}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReviewQuestion:
        return cls(
            text=str(data.get("text", "")),
            pillar=parse_pillar(data.get("pillar", Pillar.MIND)),
            points=max(0, int(data.get("points") or 0)),
        )


@dataclass(frozen=True)
class DailyReview:
    """One submitted review. Immutable once written."""

    date: date
    answers: dict[int, bool]
    total_score: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "answers": {str(index): answer for index, answer in self.answers.items()},
            "totalScore": self.total_score,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DailyReview:
        return cls(
            date=date.fromisoformat(str(data["date"])[:10]),
            answers={int(k): bool(v) for k, v in (data.get("answers") or {}).items()},
            total_score=int(data.get("totalScore") or 0),
        )


# =============================================================================
# Goals, KPIs, finances
# =============================================================================


@dataclass(frozen=True)
class LifeGoal:
    id: str
    text: str
    pillar: Pillar

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "pillar": self.pillar.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LifeGoal:
        return cls(id=str(data["id"]), text=str(data["text"]), pillar=parse_pillar(data["pillar"]))


@dataclass(frozen=True)
class KPI:
    name: str
    start: float = 0.0
    current: float = 0.0
    target: float = 100.0

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "start": self.start, "current": self.current, "target": self.target}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> KPI:
        return cls(
            name=str(data.get("name", "")),
            start=float(data.get("start") or 0),
            current=float(data.get("current") or 0),
            target=float(data.get("target") if data.get("target") is not None else 100),
        )


@dataclass(frozen=True)
class FinancialEntry:
    month: str  # YYYY-MM
    net_worth: float
    income: float
    expenses: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "netWorth": self.net_worth,
            "income": self.income,
            "expenses": self.expenses,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FinancialEntry:
        return cls(
            month=str(data["month"]),
            net_worth=float(data.get("netWorth") or 0),
            income=float(data.get("income") or 0),
            expenses=float(data.get("expenses") or 0),
        )


# =============================================================================
# Settings
# =============================================================================


@dataclass(frozen=True)
class Settings:
    financial_budget: float = 6000
    monthly_spend: float = 1500
    daily_review_questions: tuple[ReviewQuestion, ...] = ()
    mentors: tuple[str, ...] = ()
    kpis: tuple[KPI, ...] = ()

    def add_question(self, text: str = "", pillar: Pillar = Pillar.MIND, points: int = 10) -> Settings:
        question = ReviewQuestion(text=text, pillar=pillar, points=points)
        return replace(self, daily_review_questions=self.daily_review_questions + (question,))

    def remove_question(self, index: int) -> Settings:
        questions = tuple(q for i, q in enumerate(self.daily_review_questions) if i != index)
        return replace(self, daily_review_questions=questions)

    def add_kpi(self, name: str = "", start: float = 0, current: float = 0, target: float = 100) -> Settings:
        kpi = KPI(name=name, start=start, current=current, target=target)
        return replace(self, kpis=self.kpis + (kpi,))

    def remove_kpi(self, index: int) -> Settings:
        return replace(self, kpis=tuple(k for i, k in enumerate(self.kpis) if i != index))

    def add_mentor(self, name: str) -> Settings:
        name = name.strip()
        if not name or name in self.mentors:
            return self
        return replace(self, mentors=self.mentors + (name,))

    def remove_mentor(self, name: str) -> Settings:
        return replace(self, mentors=tuple(m for m in self.mentors if m != name))

    def to_dict(self) -> dict[str, Any]:
        return {
            "financialBudget": self.financial_budget,
            "monthlySpend": self.monthly_spend,
            "dailyReviewQuestions": [q.to_dict() for q in self.daily_review_questions],
            "mentors": list(self.mentors),
            "kpis": [k.to_dict() for k in self.kpis],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Settings:
        data = data or {}
        defaults = cls()
        return cls(
            financial_budget=float(data.get("financialBudget", defaults.financial_budget) or 0),
            monthly_spend=float(data.get("monthlySpend", defaults.monthly_spend) or 0),
            daily_review_questions=tuple(
                ReviewQuestion.from_dict(q) for q in data.get("dailyReviewQuestions") or []
            ),
            mentors=tuple(str(m) for m in data.get("mentors") or []),
            kpis=tuple(KPI.from_dict(k) for k in data.get("kpis") or []),
        )

