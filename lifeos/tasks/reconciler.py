"""
Tool: Task Store Reconciler
Purpose: Apply user actions and validated AI plans to the task list

All functions are pure: (current tasks, params) -> new tasks. Task
identity is preserved across rewrites, and fields an operation does not
own are carried over untouched.

Operations:
    add_task:         append one new task
    subdivide:        append one task per AI subtask, points split rounding up
    prioritize:       reset priorities, then apply AI buckets by snapshot position
    toggle_complete:  flip completion, report an XP award on the open -> done edge
    delete_task:      remove one task
    sort_for_display: open tasks ordered High, Medium, Low, None (stable)
"""

from __future__ import annotations

import hashlib
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from lifeos.ai.schemas import AIFormatError, PriorityPlan, SubdivisionPlan
from lifeos.models import PRIORITY_RANK, Pillar, Priority, Task, generate_id


class StaleSnapshotError(RuntimeError):
    """The open-task list changed between building the prompt and applying the answer."""


@dataclass(frozen=True)
class XPAward:
    pillar: Pillar
    points: int


@dataclass(frozen=True)
class OpenTaskSnapshot:
    """Ordered ids of the open tasks exactly as they were shown to the AI."""

    task_ids: tuple[str, ...]

    @classmethod
    def capture(cls, tasks: Sequence[Task]) -> OpenTaskSnapshot:
        return cls(task_ids=tuple(task.id for task in open_tasks(tasks)))

    def __len__(self) -> int:
        return len(self.task_ids)

    @property
    def fingerprint(self) -> str:
        return hashlib.sha256("\n".join(self.task_ids).encode()).hexdigest()[:16]

    def matches(self, tasks: Sequence[Task]) -> bool:
        return OpenTaskSnapshot.capture(tasks).task_ids == self.task_ids


def open_tasks(tasks: Sequence[Task]) -> list[Task]:
    """Incomplete tasks in storage order - the view the AI is shown."""
    return [task for task in tasks if not task.completed]


def find_task(tasks: Sequence[Task], task_id: str) -> Optional[Task]:
    return next((task for task in tasks if task.id == task_id), None)


def add_task(tasks: Sequence[Task], text: str, pillar: Pillar, points: int) -> list[Task]:
    task = Task(id=generate_id(), text=text.strip(), pillar=pillar, points=int(points))
    return [*tasks, task]


def subdivide(
    tasks: Sequence[Task],
    parent: str,
    pillar: Pillar,
    total_points: int,
    plan: SubdivisionPlan,
) -> list[Task]:
    """
    Append one task per subtask in the plan.

    Each subtask gets ceil(total_points / N) points, so the total handed
    out can exceed the budget by up to N - 1. The parent goal itself is
    never added as a task; its text is kept as a label on each subtask.
    """
    points_each = math.ceil(total_points / len(plan.tasks))
    subtasks = [
        Task(
            id=generate_id(),
            text=text,
            pillar=pillar,
            points=points_each,
            parent=parent.strip(),
        )
        for text in plan.tasks
    ]
    return [*tasks, *subtasks]


def prioritize(
    tasks: Sequence[Task],
    snapshot: OpenTaskSnapshot,
    plan: PriorityPlan,
    reject_stale: bool = False,
) -> list[Task]:
    """
    Apply an AI priority plan.

    Every task's priority is reset to NONE, then each bucket index is
    resolved to the task at that position in the snapshot. Buckets are
    applied High, Medium, Low, so a later bucket wins on a duplicate.

    Args:
        tasks: Current task list
        snapshot: Open-task view captured when the prompt was built
        plan: Validated (and capped) priority plan
        reject_stale: Raise StaleSnapshotError if the open view changed

    Raises:
        AIFormatError: an index does not exist in the snapshot
        StaleSnapshotError: reject_stale is set and the list changed
    """
    if reject_stale and not snapshot.matches(tasks):
        raise StaleSnapshotError(
            f"Open tasks changed since snapshot {snapshot.fingerprint}; priorities not applied"
        )

    if plan.max_index() >= len(snapshot):
        raise AIFormatError(
            f"AI referenced task index {plan.max_index()} but only {len(snapshot)} tasks were shown"
        )

    assigned: dict[str, Priority] = {}
    for priority, indices in plan.buckets():
        for index in indices:
            assigned[snapshot.task_ids[index]] = priority

    return [task.with_changes(priority=assigned.get(task.id, Priority.NONE)) for task in tasks]


def toggle_complete(tasks: Sequence[Task], task_id: str) -> tuple[list[Task], Optional[XPAward]]:
    """
    Flip one task's completion flag.

    Returns:
        (new task list, award) where award is set only when the task went
        from open to completed. Re-opening a task never takes XP back, and
        completing it again awards again.

    Raises:
        KeyError: no task with that id
    """
    if find_task(tasks, task_id) is None:
        raise KeyError(f"Task not found: {task_id}")

    award: Optional[XPAward] = None
    updated: list[Task] = []
    for task in tasks:
        if task.id == task_id:
            task = task.with_changes(completed=not task.completed)
            if task.completed:
                award = XPAward(pillar=task.pillar, points=task.points)
        updated.append(task)

    return updated, award


def delete_task(tasks: Sequence[Task], task_id: str) -> list[Task]:
    return [task for task in tasks if task.id != task_id]


def sort_for_display(tasks: Sequence[Task]) -> list[Task]:
    # sorted() is stable, so equal priorities keep storage order
    return sorted(open_tasks(tasks), key=lambda task: PRIORITY_RANK[task.priority])
