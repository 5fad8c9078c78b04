"""
task_stats.py — Task statistics report and category listing.
Computed from scratch on every call; nothing is cached between requests.
"""

from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from taskboard.config import DUE_SOON_DAYS
from taskboard.models.task import Task, TaskStatus, Priority, as_utc


def completion_rate(completed: int, total: int) -> float:
    """Percentage of completed tasks, two decimals; 0 for an empty list."""
    if total == 0:
        return 0
    return round(completed / total * 100, 2)


def build_report(
    tasks: Iterable[Task],
    now: Optional[datetime] = None,
    due_soon_days: int = DUE_SOON_DAYS,
) -> dict:
    """
    Aggregate a user's tasks into the overview report.

    `overdue` and `dueSoon` only count open (not completed) tasks, and are
    disjoint: one needs the due date before `now`, the other after it.
    """
    now = as_utc(now) if now is not None else datetime.now(timezone.utc)
    horizon = now + timedelta(days=due_soon_days)

    total = 0
    completed = 0
    in_progress = 0
    todo = 0
    by_priority = {p.value: 0 for p in (Priority.HIGH, Priority.MEDIUM, Priority.LOW)}
    by_category: dict[str, int] = {}
    overdue = 0
    due_soon = 0

    for task in tasks:
        total += 1
        if task.completed:
            completed += 1

        if task.status == TaskStatus.IN_PROGRESS.value:
            in_progress += 1
        elif task.status == TaskStatus.TODO.value:
            todo += 1

        if task.priority in by_priority:
            by_priority[task.priority] += 1

        by_category[task.category] = by_category.get(task.category, 0) + 1

        if task.due_date is not None and not task.completed:
            due = as_utc(task.due_date)
            if due < now:
                overdue += 1
            elif now < due < horizon:
                due_soon += 1

    return {
        "total": total,
        "completed": completed,
        "inProgress": in_progress,
        "todo": todo,
        "byPriority": by_priority,
        "byCategory": by_category,
        "completionRate": completion_rate(completed, total),
        "overdue": overdue,
        "dueSoon": due_soon,
    }


def list_categories(tasks: Iterable[Task]) -> list[str]:
    """Distinct categories, first occurrence wins the position."""
    return list(dict.fromkeys(t.category for t in tasks))
