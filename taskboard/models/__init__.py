# Import all models so they register with SQLAlchemy Base.metadata
# This ensures Base.metadata.create_all() creates all tables

from taskboard.models.user import User
from taskboard.models.task import Task, TaskStatus, Priority, Recurrence

__all__ = [
    "User",
    "Task",
    "TaskStatus",
    "Priority",
    "Recurrence",
]
