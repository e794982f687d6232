"""
Tool: To-Do Service
Purpose: User and AI driven edits of the to-do list, with XP awards

Wraps the pure reconciler functions with guard clauses, AI calls and
write-through persistence. The in-memory list is never edited directly;
every change is a new list written to the store, and the subscription
refreshes the cached state.

Usage:
    service = TodoService(state, store, notifier, ai, config.tasks)
    await service.add_task("Book dentist", "Body", 10)
    await service.subdivide("Write quarterly report", "Career", 30)
    await service.prioritize()
    await service.toggle(task_id)

Dependencies:
    - httpx (through CompletionClient)
    - pydantic (through the AI answer schemas)
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from lifeos.ai import FAILURE_MESSAGE
from lifeos.ai.client import CompletionClient
from lifeos.ai.prompts import prioritization_prompt, subdivision_prompt
from lifeos.ai.schemas import AIFormatError, parse_priorities, parse_subdivision
from lifeos.config_models import TasksConfig
from lifeos.gamification.scoring import award_xp
from lifeos.models import Pillar, Task, parse_pillar, pillars_to_doc
from lifeos.notify import Notifier
from lifeos.state import AppState
from lifeos.store import PILLARS_KEY, TODO_LIST_KEY
from lifeos.store.base import DocumentStore
from lifeos.tasks import reconciler
from lifeos.tasks.reconciler import OpenTaskSnapshot, StaleSnapshotError

from .base import Service


logger = logging.getLogger(__name__)


def _tasks_doc(tasks: list[Task]) -> list[dict[str, Any]]:
    return [task.to_dict() for task in tasks]


class TodoService(Service):
    def __init__(
        self,
        state: AppState,
        store: DocumentStore,
        notifier: Notifier,
        ai: CompletionClient,
        config: Optional[TasksConfig] = None,
    ):
        super().__init__(state, store, notifier)
        self.ai = ai
        self.config = config or TasksConfig()

    def _guard_input(
        self, text: str, pillar: Any, points: Any
    ) -> tuple[Optional[Pillar], int, Optional[dict[str, Any]]]:
        """Validate text, pillar and points; returns (pillar, points, error)."""
        if not text or not text.strip():
            return None, 0, self._fail("Task text is required", "info")
        try:
            resolved = parse_pillar(pillar)
        except ValueError as e:
            return None, 0, self._fail(str(e))

        if points is None:
            return resolved, self.config.default_points, None
        try:
            value = int(points)
        except (TypeError, ValueError):
            return None, 0, self._fail("Points must be a whole number")
        if value < 0:
            return None, 0, self._fail("Points cannot be negative")
        return resolved, value, None

    # =========================================================================
    # Manual edits
    # =========================================================================

    async def add_task(self, text: str, pillar: Any, points: Any = None) -> dict[str, Any]:
        resolved, points, error = self._guard_input(text, pillar, points)
        if error:
            return error

        tasks = reconciler.add_task(self.state.tasks, text, resolved, points)
        await self._write(TODO_LIST_KEY, _tasks_doc(tasks))

        task = tasks[-1]
        logger.info(f"Added task {task.id} ({task.pillar}, {task.points} pts)")
        return {"success": True, "data": task.to_dict(), "message": f"Task added: {task.text}"}

    async def delete(self, task_id: str) -> dict[str, Any]:
        if reconciler.find_task(self.state.tasks, task_id) is None:
            return self._fail(f"Task not found: {task_id}")

        tasks = reconciler.delete_task(self.state.tasks, task_id)
        await self._write(TODO_LIST_KEY, _tasks_doc(tasks))
        return {"success": True, "data": {"id": task_id}, "message": "Task deleted"}

    async def toggle(self, task_id: str) -> dict[str, Any]:
        """
        Flip completion. Completing a task awards its points to its
        pillar; re-opening takes nothing back.
        """
        try:
            tasks, award = reconciler.toggle_complete(self.state.tasks, task_id)
        except KeyError:
            return self._fail(f"Task not found: {task_id}")

        data: dict[str, Any] = {"id": task_id, "awarded": None}
        if award is not None:
            pillars = award_xp(self.state.pillars, award.pillar, award.points)
            await self._write(PILLARS_KEY, pillars_to_doc(pillars))
            self.notifier.notify(f"+{award.points} XP for {award.pillar}!", "info")
            data["awarded"] = {"pillar": award.pillar.value, "points": award.points}

        await self._write(TODO_LIST_KEY, _tasks_doc(tasks))
        return {"success": True, "data": data}

    def display_list(self) -> list[Task]:
        """Open tasks, High first, storage order within a priority."""
        return reconciler.sort_for_display(self.state.tasks)

    def completed_tasks(self) -> list[Task]:
        return [task for task in self.state.tasks if task.completed]

    # =========================================================================
    # AI edits
    # =========================================================================

    async def subdivide(self, goal: str, pillar: Any, points: Any = None) -> dict[str, Any]:
        """Ask the AI to split one goal into subtasks and append them."""
        resolved, points, error = self._guard_input(goal, pillar, points)
        if error:
            return error
        if not self._begin("subdivision"):
            return self._already_running("subdivision")

        try:
            prompt = subdivision_prompt(goal.strip(), self.config.min_subtasks, self.config.max_subtasks)
            raw = await self.ai.complete(prompt, json_mode=True)
            if self.ai.last_failed:
                return {"success": False, "error": FAILURE_MESSAGE}

            try:
                plan = parse_subdivision(raw)
            except AIFormatError as e:
                logger.warning(f"Rejected subdivision: {e}")
                return self._fail("The AI did not provide a valid subdivision.")

            if len(plan.tasks) > self.config.max_subtasks:
                logger.info(f"Truncating subdivision from {len(plan.tasks)} to {self.config.max_subtasks} subtasks")
                plan = plan.model_copy(update={"tasks": plan.tasks[: self.config.max_subtasks]})

            before = len(self.state.tasks)
            tasks = reconciler.subdivide(self.state.tasks, goal, resolved, points, plan)
            await self._write(TODO_LIST_KEY, _tasks_doc(tasks))

            created = [task.to_dict() for task in tasks[before:]]
            self.notifier.notify("Task subdivided successfully!", "success")
            return {"success": True, "data": {"tasks": created}, "message": f"Created {len(created)} subtasks"}
        finally:
            self._end("subdivision")

    async def prioritize(self) -> dict[str, Any]:
        """
        Ask the AI to rank the open tasks.

        The open-task view is snapshotted when the prompt is built, and
        the AI's positional indices are resolved against that snapshot,
        not against whatever the list looks like when the answer arrives.
        """
        if not self._begin("prioritization"):
            return self._already_running("prioritization")

        try:
            open_view = reconciler.open_tasks(self.state.tasks)
            if not open_view:
                return self._fail("There are no open tasks to prioritize", "info")

            snapshot = OpenTaskSnapshot.capture(self.state.tasks)
            limits = self.config.priority_limits
            prompt = prioritization_prompt(self.state.memory, open_view, limits.high, limits.medium, limits.low)

            raw = await self.ai.complete(prompt, json_mode=True)
            if self.ai.last_failed:
                return {"success": False, "error": FAILURE_MESSAGE}

            try:
                plan = parse_priorities(raw, open_count=len(snapshot))
                plan = plan.capped(limits.high, limits.medium, limits.low)
                tasks = reconciler.prioritize(
                    self.state.tasks,
                    snapshot,
                    plan,
                    reject_stale=self.config.reject_stale_priorities,
                )
            except AIFormatError as e:
                logger.warning(f"Rejected priorities: {e}")
                return self._fail("The AI did not define the priorities.")
            except StaleSnapshotError as e:
                logger.warning(str(e))
                return self._fail("The task list changed while the AI was thinking; try again.", "info")

            await self._write(TODO_LIST_KEY, _tasks_doc(tasks))
            self.notifier.notify("Priorities defined by the AI!", "success")
            return {
                "success": True,
                "data": {"high": plan.high, "medium": plan.medium, "low": plan.low},
                "message": "Priorities updated",
            }
        finally:
            self._end("prioritization")
