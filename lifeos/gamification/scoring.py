"""
Tool: Scoring Model
Purpose: Map accumulated XP to levels and award XP to pillars

Levels have a fixed width (100 XP by default): 250 XP is level 2 with
50 XP into the next level. Absent, zero or negative XP is level 0.
Negative XP is not an error; it is treated as 0.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from lifeos.models import KPI, Pillar

from . import LEVEL_WIDTH


@dataclass(frozen=True)
class LevelInfo:
    level: int
    current_xp: int
    next_level_xp: int

    @property
    def progress_percent(self) -> float:
        return self.current_xp / self.next_level_xp * 100

    def to_dict(self) -> dict[str, int]:
        return {
            "level": self.level,
            "current_xp": self.current_xp,
            "next_level_xp": self.next_level_xp,
        }


def level_of(xp: Optional[int], level_width: int = LEVEL_WIDTH) -> LevelInfo:
    """Derive level and progress within the level from total XP."""
    if not xp or xp <= 0:
        return LevelInfo(level=0, current_xp=0, next_level_xp=level_width)
    return LevelInfo(
        level=xp // level_width,
        current_xp=xp % level_width,
        next_level_xp=level_width,
    )


def award_xp(pillars: dict[Pillar, int], pillar: Pillar, points: int) -> dict[Pillar, int]:
    """
    Return a copy of the pillar map with points added to one pillar.

    Raises:
        ValueError: points is negative; pillar XP only ever grows
    """
    return award_many(pillars, {pillar: points})


def award_many(pillars: dict[Pillar, int], awards: dict[Pillar, int]) -> dict[Pillar, int]:
    negative = {str(pillar): points for pillar, points in awards.items() if int(points) < 0}
    if negative:
        raise ValueError(f"XP awards cannot be negative: {negative}")

    updated = dict(pillars)
    for pillar, points in awards.items():
        updated[pillar] = updated.get(pillar, 0) + int(points)
    return updated


def kpi_progress(kpi: KPI) -> float:
    """Percent of the way from start to target, clamped to [0, 100]."""
    span = kpi.target - kpi.start
    if span == 0:
        # Degenerate KPI: done once current reaches the target, otherwise nothing
        return 100.0 if kpi.current >= kpi.target else 0.0
    progress = (kpi.current - kpi.start) / span * 100
    return max(0.0, min(100.0, progress))
