"""Life OS Test Suite

Test organization:
- unit/: Unit tests for individual modules
  - gamification/: Level math, XP awards, KPI progress, streaks
  - tasks/: Task list reconciler (add, subdivide, prioritize, toggle)
  - ai/: Completion client, answer schemas, prompt builders
  - store/: Document stores and the cached application state
  - services/: Feature services on the in-memory store
- integration/: End-to-end flows through the wired app

Running tests:
    # All tests
    uv run pytest

    # Specific module
    uv run pytest tests/unit/tasks/

    # With coverage
    uv run pytest --cov=lifeos --cov-report=term-missing
"""
