# tests/factories.py

from __future__ import annotations

import itertools

from taskboard.models import Task

_ids = itertools.count(1)


def make_task(**overrides) -> Task:
    """
    Transient Task with every column filled in, for the pure engines.

    Column defaults only apply on INSERT, so nothing is left to SQLAlchemy here.
    """
    tags = overrides.pop("tags", [])
    fields = {
        "id": next(_ids),
        "user_id": 1,
        "text": "task",
        "completed": False,
        "status": "todo",
        "priority": "medium",
        "due_date": None,
        "category": "general",
        "notes": "",
        "recurring": "none",
        "time_spent": 0,
    }
    fields.update(overrides)
    task = Task(**fields)
    task.tag_list = tags
    return task
