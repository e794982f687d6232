"""
Life OS - gamified personal life management

Tracks XP across five life pillars, a daily self-review with streaks,
a to-do list, monthly finances, long-term goals and KPIs, with an AI
coach (Gemini) that subdivides and prioritizes tasks.

Components:
    gamification/: Level math, XP awards, streaks
    tasks/: Pure transforms on the to-do list
    ai/: Prompt builders, completion client, response schemas
    store/: Keyed document store with live subscriptions
    services/: Feature services wired to store, AI and notifications
    state.py: Typed cached view of every store document
    app.py: Wires everything together

Usage:
    from lifeos.app import LifeOS

    app = await LifeOS.create()
    await app.todo.add_task("Read 20 pages", pillar="Mind", points=10)
"""

from pathlib import Path

__version__ = "1.0.0"

# Path constants
PROJECT_ROOT = Path(__file__).parent.parent
ARGS_DIR = PROJECT_ROOT / "args"
CONFIG_PATH = ARGS_DIR / "lifeos.yaml"

__all__ = [
    "__version__",
    "PROJECT_ROOT",
    "ARGS_DIR",
    "CONFIG_PATH",
]
