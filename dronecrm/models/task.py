"""Internal to-do items."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from dronecrm.models.base import Timestamps


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


TASK_DONE = "done"


class TaskBase(SQLModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(default="")
    status: str = Field(default="pending", max_length=32, index=True, description="pending, in_progress, done...")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM)
    due_date: dt.date
    assignee: str = Field(min_length=1, max_length=128)


class Task(TaskBase, Timestamps, table=True):
    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)


class TaskCreate(TaskBase):
    pass


class TaskUpdate(SQLModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[str] = Field(default=None, min_length=1, max_length=32)
    priority: Optional[TaskPriority] = None
    due_date: Optional[dt.date] = None
    assignee: Optional[str] = Field(default=None, min_length=1, max_length=128)

    @field_validator("title", "description", "status", "priority", "due_date", "assignee")
    @classmethod
    def _required_not_null(cls, value):
        if value is None:
            raise ValueError("field cannot be null")
        return value


__all__ = ["Task", "TaskBase", "TaskCreate", "TaskPriority", "TaskUpdate", "TASK_DONE"]
