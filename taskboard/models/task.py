import json
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey
from taskboard.database import Base


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "inprogress"
    DONE = "done"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Recurrence(str, Enum):
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


DEFAULT_CATEGORY = "general"

# time_spent is a 32-bit INTEGER on Postgres.
MAX_TIME_SPENT = 2**31 - 1


def utcnow() -> datetime:
    # SQLite drops tzinfo on the way back, so everything is stored as naive UTC.
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def as_utc(value: datetime) -> datetime:
    """Read a stored datetime as an aware UTC instant (naive values are UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _iso(value: datetime | None) -> str | None:
    return as_utc(value).isoformat() if value is not None else None


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    text = Column(String(500), nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    status = Column(String(20), nullable=False, default=TaskStatus.TODO.value)  # todo/inprogress/done
    priority = Column(String(20), nullable=False, default=Priority.MEDIUM.value)  # low/medium/high
    due_date = Column(DateTime, nullable=True)
    category = Column(String(100), nullable=False, default=DEFAULT_CATEGORY)
    notes = Column(Text, nullable=False, default="")
    recurring = Column(String(20), nullable=False, default=Recurrence.NONE.value)  # stored only
    time_spent = Column(Integer, nullable=False, default=0)  # minutes
    tags = Column(Text, nullable=False, default="[]")  # JSON array string
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    @property
    def tag_list(self) -> list[str]:
        if not self.tags:
            return []
        try:
            return list(json.loads(self.tags))
        except (TypeError, ValueError):
            return []

    @tag_list.setter
    def tag_list(self, value: list[str]) -> None:
        self.tags = json.dumps(list(value))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user": self.user_id,
            "text": self.text,
            "completed": bool(self.completed),
            "status": self.status,
            "priority": self.priority,
            "dueDate": _iso(self.due_date),
            "category": self.category,
            "notes": self.notes,
            "recurring": self.recurring,
            "timeSpent": self.time_spent or 0,
            "tags": self.tag_list,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }
