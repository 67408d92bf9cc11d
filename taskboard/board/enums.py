from enum import Enum


class TaskStatus(str, Enum):
    BACKLOG = "backlog"
    IN_PROGRESS = "in-progress"
    REVIEW = "review"
    DONE = "done"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class UserRole(str, Enum):
    """Global user roles"""
    ADMIN = "admin"  # Sees every department, manages users
    MANAGER = "manager"
    USER = "user"  # Sees only the departments it belongs to
