"""
Life OS feature services

Each service receives only the collaborators it needs (cached state,
store, notifier, and the AI client where it calls one) and returns
result dicts of the form {"success": bool, "data": ..., "message"/"error": str}.
"""

from .coach import CoachService
from .finance import FinanceService
from .goals import GoalService
from .review import ReviewService
from .settings import SettingsService
from .todo import TodoService

__all__ = [
    "CoachService",
    "FinanceService",
    "GoalService",
    "ReviewService",
    "SettingsService",
    "TodoService",
]
