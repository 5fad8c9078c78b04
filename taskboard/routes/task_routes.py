from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from sqlalchemy.orm import Session

from taskboard.auth import get_current_user
from taskboard.database import get_db
from taskboard.models.task import MAX_TIME_SPENT, Priority, Recurrence, TaskStatus, to_naive_utc
from taskboard.services.task_query import TaskFilter
from taskboard.services.task_service import TaskService

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be empty")
    return v


def _due_date_utc(v: Optional[datetime]) -> Optional[datetime]:
    try:
        return to_naive_utc(v)
    except OverflowError:
        raise ValueError("date out of range")


class TaskCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(..., max_length=500)
    priority: Optional[Priority] = None
    due_date: Optional[datetime] = Field(None, alias="dueDate")
    category: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None
    recurring: Optional[Recurrence] = None
    tags: Optional[List[str]] = None

    @field_validator("text", "category")
    @classmethod
    def not_blank(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else _strip_required(v)

    @field_validator("due_date")
    @classmethod
    def due_date_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _due_date_utc(v)


class TaskUpdate(BaseModel):
    """
    Partial update. A field left out of the body is untouched; a field that is
    present is written as given, so "" clears notes and null clears dueDate.
    """
    model_config = ConfigDict(populate_by_name=True)

    text: Optional[str] = Field(None, max_length=500)
    priority: Optional[Priority] = None
    due_date: Optional[datetime] = Field(None, alias="dueDate")
    category: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None
    recurring: Optional[Recurrence] = None
    tags: Optional[List[str]] = None

    @field_validator("text", "category")
    @classmethod
    def not_blank(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else _strip_required(v)

    @field_validator("due_date")
    @classmethod
    def due_date_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _due_date_utc(v)

    @model_validator(mode="after")
    def only_due_date_nullable(self):
        for name in ("text", "priority", "category", "notes", "recurring", "tags"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class StatusUpdate(BaseModel):
    status: TaskStatus


class TimeTrack(BaseModel):
    minutes: int = Field(..., ge=0, le=MAX_TIME_SPENT)


@router.post("/add")
def add_task(task_data: TaskCreate, user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    task = TaskService.create(db, user_id, task_data.model_dump())
    return {"message": "Task added", "task": task.to_dict()}


@router.get("")
def list_tasks(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    return [t.to_dict() for t in TaskService.list_all(db, user_id)]


@router.get("/search")
def search_tasks(
    query: Optional[str] = Query(None),
    priority: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    sortBy: Optional[str] = Query(None),
    user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    f = TaskFilter(query=query, priority=priority, category=category, status=status)
    return [t.to_dict() for t in TaskService.search(db, user_id, f, sortBy)]


@router.get("/stats/overview")
def task_stats(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    return TaskService.get_stats(db, user_id)


@router.get("/categories/list")
def task_categories(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    return TaskService.get_categories(db, user_id)


@router.put("/toggle/{task_id}")
def toggle_task(task_id: int, user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    task = TaskService.toggle(db, user_id, task_id)
    return {"message": "Updated", "task": task.to_dict()}


@router.put("/update-status/{task_id}")
def update_task_status(
    task_id: int,
    body: StatusUpdate,
    user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    task = TaskService.update_status(db, user_id, task_id, body.status)
    return {"message": "Status updated", "task": task.to_dict()}


@router.put("/update/{task_id}")
def update_task(
    task_id: int,
    body: TaskUpdate,
    user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    task = TaskService.update(db, user_id, task_id, body.changes())
    return {"message": "Task updated", "task": task.to_dict()}


@router.put("/track-time/{task_id}")
def track_time(
    task_id: int,
    body: TimeTrack,
    user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    task = TaskService.track_time(db, user_id, task_id, body.minutes)
    return {"message": "Time tracked", "task": task.to_dict()}


@router.delete("/delete/{task_id}")
def delete_task(task_id: int, user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    TaskService.delete(db, user_id, task_id)
    return {"message": "Task deleted"}
