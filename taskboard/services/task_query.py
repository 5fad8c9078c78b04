"""
task_query.py — Search filter for a user's tasks.
Pure predicate over already-loaded tasks; ordering and state are left alone.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from taskboard.models.task import Task


@dataclass(frozen=True)
class TaskFilter:
    """Search parameters. None (or "") means no constraint."""

    query: Optional[str] = None
    priority: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None

    def is_empty(self) -> bool:
        return not (self.query or self.priority or self.category or self.status)


def _matches_text(task: Task, query: str) -> bool:
    needle = query.lower()
    if needle in (task.text or "").lower():
        return True
    if needle in (task.notes or "").lower():
        return True
    # Tags are compared exactly, case included, unlike text and notes.
    return query in task.tag_list


def matches(task: Task, f: TaskFilter) -> bool:
    if f.query and not _matches_text(task, f.query):
        return False
    if f.priority and task.priority != f.priority:
        return False
    if f.category and task.category != f.category:
        return False
    if f.status and task.status != f.status:
        return False
    return True


def filter_tasks(tasks: Iterable[Task], f: TaskFilter) -> list[Task]:
    """Return the tasks matching every supplied parameter, in input order."""
    if f.is_empty():
        return list(tasks)
    return [t for t in tasks if matches(t, f)]
