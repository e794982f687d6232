#!/usr/bin/env python3
"""
Life OS Command Line Interface

Main entry point for the `lifeos` command. Every subcommand prints its
result as JSON; notifications raised along the way go to stderr.

Usage:
    lifeos level 250                          # Level math for an XP value
    lifeos tasks                              # Open tasks, display order
    lifeos add-task "Book dentist" --pillar Body --points 10
    lifeos subdivide "Write quarterly report" --pillar Career --points 30
    lifeos prioritize                         # Ask the AI to rank open tasks
    lifeos toggle <task-id>
    lifeos review --yes 0 --yes 2             # Submit today's daily review
    lifeos dashboard
    lifeos report
    lifeos mentor "Seneca" "What is my priority?"
    lifeos --version
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from lifeos import __version__
from lifeos.ai.prompts import DOUBTS
from lifeos.gamification.scoring import level_of
from lifeos.logging_config import bind_session, get_logger, setup_logging
from lifeos.models import Pillar


log = get_logger(__name__)


def _print(result: Any) -> None:
    print(json.dumps(result, indent=2, ensure_ascii=False, default=str))


def _exit_code(result: Any) -> int:
    if isinstance(result, dict) and result.get("success") is False:
        return 1
    return 0


# =============================================================================
# Commands
# =============================================================================


def cmd_level(args) -> int:
    info = level_of(args.xp, args.width)
    _print({**info.to_dict(), "progress": info.progress_percent})
    return 0


async def run_app_command(args) -> int:
    """Open the app, run one service call, print its result."""
    from lifeos.app import LifeOS
    from lifeos.config_models import load_and_validate

    config = load_and_validate(Path(args.config) if args.config else None)
    bind_session(config)
    app = await LifeOS.create(config=config)
    app.notifier.add_listener(lambda n: print(f"[{n.severity}] {n.message}", file=sys.stderr))

    try:
        command = args.command
        if command == "tasks":
            result = {"success": True, "data": [task.to_dict() for task in app.todo.display_list()]}
        elif command == "add-task":
            result = await app.todo.add_task(args.text, args.pillar, args.points)
        elif command == "subdivide":
            result = await app.todo.subdivide(args.goal, args.pillar, args.points)
        elif command == "prioritize":
            result = await app.todo.prioritize()
        elif command == "toggle":
            result = await app.todo.toggle(args.task_id)
        elif command == "review":
            questions = app.state.settings.daily_review_questions
            answers = {index: index in args.yes for index in range(len(questions))}
            result = await app.reviews.submit(answers)
        elif command == "dashboard":
            result = app.coach.dashboard()
        elif command == "report":
            result = await app.coach.generate_report()
        elif command == "mentor":
            result = await app.coach.mentor_help(args.mentor, args.doubt)
        else:
            log.warning("unknown_command", command=command)
            return 1
    finally:
        await app.close()

    _print(result)
    return _exit_code(result)


def cmd_app(args) -> int:
    return asyncio.run(run_app_command(args))


# =============================================================================
# Parser
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lifeos",
        description="Life OS - gamified life management with an AI coach",
    )
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--config", default=None, help="Path to a lifeos.yaml config file")
    parser.add_argument("--log-level", default=None, help="Override LIFEOS_LOG_LEVEL")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    pillars = [p.value for p in Pillar]

    level_parser = subparsers.add_parser("level", help="Show level and progress for an XP value")
    level_parser.add_argument("xp", type=int, help="Total XP")
    level_parser.add_argument("--width", type=int, default=100, help="XP per level")
    level_parser.set_defaults(func=cmd_level)

    tasks_parser = subparsers.add_parser("tasks", help="List open tasks in display order")
    tasks_parser.set_defaults(func=cmd_app)

    add_parser = subparsers.add_parser("add-task", help="Add a task")
    add_parser.add_argument("text", help="Task text")
    add_parser.add_argument("--pillar", default="Mind", choices=pillars)
    add_parser.add_argument("--points", type=int, default=None)
    add_parser.set_defaults(func=cmd_app)

    subdivide_parser = subparsers.add_parser("subdivide", help="Split a goal into subtasks with the AI")
    subdivide_parser.add_argument("goal", help="Goal to subdivide")
    subdivide_parser.add_argument("--pillar", default="Mind", choices=pillars)
    subdivide_parser.add_argument("--points", type=int, default=None, help="Total points to split")
    subdivide_parser.set_defaults(func=cmd_app)

    prioritize_parser = subparsers.add_parser("prioritize", help="Let the AI prioritize open tasks")
    prioritize_parser.set_defaults(func=cmd_app)

    toggle_parser = subparsers.add_parser("toggle", help="Toggle a task's completion")
    toggle_parser.add_argument("task_id")
    toggle_parser.set_defaults(func=cmd_app)

    review_parser = subparsers.add_parser("review", help="Submit today's daily review")
    review_parser.add_argument(
        "--yes", type=int, action="append", default=[],
        help="Index of a question answered yes (repeatable)",
    )
    review_parser.set_defaults(func=cmd_app)

    dashboard_parser = subparsers.add_parser("dashboard", help="Show the dashboard summary")
    dashboard_parser.set_defaults(func=cmd_app)

    report_parser = subparsers.add_parser("report", help="Generate the strategic report")
    report_parser.set_defaults(func=cmd_app)

    mentor_parser = subparsers.add_parser("mentor", help="Ask a configured mentor for help")
    mentor_parser.add_argument("mentor", help="Mentor name, as configured in settings")
    mentor_parser.add_argument("doubt", choices=list(DOUBTS))
    mentor_parser.set_defaults(func=cmd_app)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"lifeos {__version__}")
        return

    if not args.command:
        parser.print_help()
        return

    setup_logging(level=args.log_level)

    # Commands may return an exit code
    result = args.func(args)
    if isinstance(result, int) and result != 0:
        sys.exit(result)


if __name__ == "__main__":
    main()
