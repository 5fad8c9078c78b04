"""
task_sort.py — Ordering for search results.
"""

from datetime import datetime
from enum import Enum
from typing import Iterable, Optional

from taskboard.models.task import Task, Priority, as_utc


class SortKey(str, Enum):
    DUE_DATE = "dueDate"
    PRIORITY = "priority"


PRIORITY_RANK = {
    Priority.HIGH: 0,
    Priority.MEDIUM: 1,
    Priority.LOW: 2,
}


def _priority_rank(task: Task) -> int:
    try:
        return PRIORITY_RANK[Priority(task.priority)]
    except ValueError:
        # Unknown or missing priority ranks with the default.
        return PRIORITY_RANK[Priority.MEDIUM]


def _due_date_key(task: Task) -> tuple[int, Optional[datetime]]:
    if task.due_date is None:
        return (1, None)
    return (0, as_utc(task.due_date))


def parse_sort_key(sort_by: Optional[str]) -> Optional[SortKey]:
    if not sort_by:
        return None
    try:
        return SortKey(sort_by)
    except ValueError:
        return None


def sort_tasks(tasks: Iterable[Task], sort_by: Optional[str]) -> list[Task]:
    """
    Return a new, stably sorted list.

    dueDate  -> soonest first, undated tasks last
    priority -> high, medium, low
    anything else -> input order
    """
    key = parse_sort_key(sort_by)
    if key is SortKey.DUE_DATE:
        # Undated tasks all share (1, None) and never reach the datetime compare.
        return sorted(tasks, key=_due_date_key)
    if key is SortKey.PRIORITY:
        return sorted(tasks, key=_priority_rank)
    return list(tasks)
