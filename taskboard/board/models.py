from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from taskboard.board.enums import Priority, TaskStatus, UserRole

COLUMN_TITLES: Dict[TaskStatus, str] = {
    TaskStatus.BACKLOG: "Backlog",
    TaskStatus.IN_PROGRESS: "In Progress",
    TaskStatus.REVIEW: "Review",
    TaskStatus.DONE: "Done",
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Record(BaseModel):
    """camelCase on the wire and in the store, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- user ---
class User(Record):
    id: str
    email: str
    name: str
    role: UserRole = UserRole.USER
    department_ids: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)


# --- department ---
class Department(Record):
    id: str
    name: str
    description: str = ""
    manager_id: Optional[str] = None
    # never populated; membership lives on User.department_ids
    members: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)


# --- task ---
class Task(Record):
    id: str
    title: str
    description: str = ""
    status: TaskStatus
    priority: Priority = Priority.MEDIUM
    assigned_to: Optional[str] = None
    department_id: str
    created_by: str
    created_at: datetime = Field(default_factory=utcnow)


class Column(Record):
    id: TaskStatus
    title: str
    tasks: List[Task] = Field(default_factory=list)


def initial_columns() -> List[Column]:
    return [Column(id=status, title=title) for status, title in COLUMN_TITLES.items()]
