"""
task_service.py — Task management
Owner-scoped CRUD for Tasks, plus search, statistics and category listing.
Every lookup filters on (id, user_id); someone else's task is simply not found.
"""

import logging
from contextlib import contextmanager
from typing import Optional

from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskboard.errors import InternalError, NotFound, ValidationError
from taskboard.models.task import (
    DEFAULT_CATEGORY,
    MAX_TIME_SPENT,
    Priority,
    Recurrence,
    Task,
    TaskStatus,
    to_naive_utc,
)
from taskboard.services.task_query import TaskFilter, filter_tasks
from taskboard.services.task_sort import sort_tasks
from taskboard.services.task_stats import build_report, list_categories

logger = logging.getLogger(__name__)

# Fields the partial update may touch, mapped to their column attribute.
EDITABLE_FIELDS = {
    "text": "text",
    "priority": "priority",
    "due_date": "due_date",
    "category": "category",
    "notes": "notes",
    "recurring": "recurring",
    "tags": "tags",
}


def _value(v):
    return v.value if isinstance(v, (TaskStatus, Priority, Recurrence)) else v


@contextmanager
def _store_call(db: Session, action: str):
    """Roll back and surface a generic InternalError when the store fails."""
    try:
        yield
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Task store failure during %s", action)
        raise InternalError()


class TaskService:
    @staticmethod
    def create(db: Session, user_id: int, data: dict) -> Task:
        """Create a task; anything not in `data` gets its default."""
        task = Task(
            user_id=user_id,
            text=data["text"],
            completed=False,
            status=TaskStatus.TODO.value,
            priority=_value(data.get("priority") or Priority.MEDIUM),
            due_date=to_naive_utc(data.get("due_date")),
            category=data.get("category") or DEFAULT_CATEGORY,
            notes=data.get("notes") or "",
            recurring=_value(data.get("recurring") or Recurrence.NONE),
            time_spent=0,
        )
        task.tag_list = data.get("tags") or []
        with _store_call(db, "create"):
            db.add(task)
            db.commit()
            db.refresh(task)
        logger.info("Task %s created for user %s", task.id, user_id)
        return task

    @staticmethod
    def list_all(db: Session, user_id: int) -> list[Task]:
        """All of the user's tasks, newest first."""
        with _store_call(db, "list"):
            return (
                db.query(Task)
                .filter(Task.user_id == user_id)
                .order_by(desc(Task.created_at), desc(Task.id))
                .all()
            )

    @staticmethod
    def _owned(db: Session, user_id: int) -> list[Task]:
        with _store_call(db, "scan"):
            return db.query(Task).filter(Task.user_id == user_id).order_by(Task.id).all()

    @staticmethod
    def get_by_id(db: Session, user_id: int, task_id: int) -> Task:
        with _store_call(db, "lookup"):
            task = db.query(Task).filter_by(id=task_id, user_id=user_id).first()
        if task is None:
            raise NotFound("Task not found")
        return task

    @staticmethod
    def _save(db: Session, task: Task, action: str) -> Task:
        with _store_call(db, action):
            db.commit()
            db.refresh(task)
        return task

    @staticmethod
    def toggle(db: Session, user_id: int, task_id: int) -> Task:
        task = TaskService.get_by_id(db, user_id, task_id)
        task.completed = not task.completed
        return TaskService._save(db, task, "toggle")

    @staticmethod
    def update_status(db: Session, user_id: int, task_id: int, status: TaskStatus) -> Task:
        task = TaskService.get_by_id(db, user_id, task_id)
        task.status = TaskStatus(status).value
        return TaskService._save(db, task, "update-status")

    @staticmethod
    def update(db: Session, user_id: int, task_id: int, changes: dict) -> Task:
        """
        Apply a partial update. Only keys present in `changes` are written,
        so falsy values (empty notes, no tags, cleared due date) do take effect.
        """
        task = TaskService.get_by_id(db, user_id, task_id)
        for key, value in changes.items():
            attr = EDITABLE_FIELDS.get(key)
            if attr is None:
                continue
            if attr == "tags":
                task.tag_list = value
            elif attr == "due_date":
                task.due_date = to_naive_utc(value)
            else:
                setattr(task, attr, _value(value))
        return TaskService._save(db, task, "update")

    @staticmethod
    def track_time(db: Session, user_id: int, task_id: int, minutes: int) -> Task:
        task = TaskService.get_by_id(db, user_id, task_id)
        total = (task.time_spent or 0) + minutes
        if total > MAX_TIME_SPENT:
            raise ValidationError("Tracked time exceeds the maximum")
        task.time_spent = total
        return TaskService._save(db, task, "track-time")

    @staticmethod
    def delete(db: Session, user_id: int, task_id: int) -> None:
        task = TaskService.get_by_id(db, user_id, task_id)
        with _store_call(db, "delete"):
            db.delete(task)
            db.commit()
        logger.info("Task %s deleted for user %s", task_id, user_id)

    @staticmethod
    def search(db: Session, user_id: int, f: TaskFilter, sort_by: Optional[str] = None) -> list[Task]:
        return sort_tasks(filter_tasks(TaskService._owned(db, user_id), f), sort_by)

    @staticmethod
    def get_stats(db: Session, user_id: int) -> dict:
        return build_report(TaskService._owned(db, user_id))

    @staticmethod
    def get_categories(db: Session, user_id: int) -> list[str]:
        return list_categories(TaskService._owned(db, user_id))
