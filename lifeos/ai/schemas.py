"""
Schemas for JSON-mode AI answers

Raw parsed JSON never goes past this module. Every answer is validated
into a typed plan or rejected with AIFormatError.

Expected shapes:
    subdivision:     {"tasks": ["Research", "Outline", "Draft"]}
    prioritization:  {"high": [2], "medium": [0, 4], "low": []}
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from lifeos.models import Priority


class AIFormatError(ValueError):
    """The AI answered, but not in the shape that was asked for."""


class SubdivisionPlan(BaseModel):
    model_config = ConfigDict(extra="ignore")
    tasks: list[str] = Field(min_length=1)

    @field_validator("tasks")
    @classmethod
    def drop_blank(cls, value: list[str]) -> list[str]:
        cleaned = [text.strip() for text in value if text.strip()]
        if not cleaned:
            raise ValueError("tasks contains no usable entries")
        return cleaned


NonNegativeInt = Annotated[int, Field(ge=0)]


class PriorityPlan(BaseModel):
    model_config = ConfigDict(extra="ignore")
    high: list[NonNegativeInt]
    medium: list[NonNegativeInt]
    low: list[NonNegativeInt]

    @model_validator(mode="before")
    @classmethod
    def normalize_keys(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {str(key).strip().lower(): value for key, value in data.items()}
        return data

    def capped(self, high: int, medium: int, low: int) -> PriorityPlan:
        """Truncate each bucket to its limit, keeping the AI's order."""
        return PriorityPlan(high=self.high[:high], medium=self.medium[:medium], low=self.low[:low])

    def buckets(self) -> Iterator[tuple[Priority, list[int]]]:
        """Buckets in application order; later buckets win on duplicates."""
        yield Priority.HIGH, self.high
        yield Priority.MEDIUM, self.medium
        yield Priority.LOW, self.low

    def max_index(self) -> int:
        indices = [*self.high, *self.medium, *self.low]
        return max(indices) if indices else -1


def parse_subdivision(raw: Any) -> SubdivisionPlan:
    """Validate a subdivision answer. A bare list of strings is accepted too."""
    if isinstance(raw, list):
        raw = {"tasks": raw}
    if not isinstance(raw, dict) or "tasks" not in raw:
        raise AIFormatError("AI response is missing the 'tasks' list")
    try:
        return SubdivisionPlan.model_validate(raw)
    except ValidationError as e:
        raise AIFormatError(f"Invalid subdivision from AI: {e.error_count()} problem(s)") from e


def parse_priorities(raw: Any, open_count: int | None = None) -> PriorityPlan:
    """
    Validate a prioritization answer.

    Args:
        raw: Parsed JSON from the completion client
        open_count: Size of the open-task view the indices refer to;
            when given, out-of-range indices are rejected

    Raises:
        AIFormatError: missing bucket keys, non-integer or out-of-range indices
    """
    if not isinstance(raw, dict):
        raise AIFormatError("AI response is not a JSON object")
    try:
        plan = PriorityPlan.model_validate(raw)
    except ValidationError as e:
        missing = [err["loc"][0] for err in e.errors() if err["type"] == "missing"]
        if missing:
            raise AIFormatError(f"AI response is missing priority buckets: {missing}") from e
        raise AIFormatError(f"Invalid priorities from AI: {e.error_count()} problem(s)") from e

    if open_count is not None and plan.max_index() >= open_count:
        raise AIFormatError(
            f"AI referenced task index {plan.max_index()} but only {open_count} tasks are open"
        )
    return plan
