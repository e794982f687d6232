"""Gamification - XP, levels, KPIs and the daily review streak

Everything in here is pure: no store, no AI, no notifications.
Callers persist the results.

Components:
    scoring.py: XP to level math, XP awards, KPI progress
    streaks.py: Streak continuation and review scoring
"""

# Fixed width of one level in XP
LEVEL_WIDTH = 100

__all__ = ["LEVEL_WIDTH"]
