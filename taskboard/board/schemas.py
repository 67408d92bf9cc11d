from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from taskboard.board.enums import Priority, TaskStatus
from taskboard.board.models import Column, Record


class DepartmentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""


class TaskFields(BaseModel):
    """What the new-task form collects."""

    title: str = Field(..., min_length=1, max_length=300)
    description: str = ""
    priority: Priority = Priority.MEDIUM


class TaskCreate(TaskFields):
    status: TaskStatus = TaskStatus.BACKLOG


class TaskMove(BaseModel):
    status: TaskStatus


class ColumnOut(Column):
    count: int = 0

    @classmethod
    def from_column(cls, column: Column) -> "ColumnOut":
        return cls(id=column.id, title=column.title, tasks=column.tasks, count=len(column.tasks))


class BoardOut(Record):
    department_id: str
    columns: List[ColumnOut]


class BoardActionsOut(Record):
    """Which toolbar actions are enabled for the session user."""

    department_id: Optional[str] = None
    can_view_department: bool
    can_create_task: bool
    can_create_department: bool
    can_manage_users: bool
