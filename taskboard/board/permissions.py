from typing import Optional

from fastapi import Depends, HTTPException, status

from taskboard.auth.dependencies import get_current_user
from taskboard.board.enums import UserRole
from taskboard.board.models import User
from taskboard.board.services import TaskBoard
from taskboard.utils import NotFound


class PermissionChecker:
    """Pure predicates over the session user; the HTTP helpers raise."""

    @staticmethod
    def is_admin(user: Optional[User]) -> bool:
        return user is not None and user.role == UserRole.ADMIN

    @staticmethod
    def can_view_department(user: Optional[User], department_id: str) -> bool:
        """
        Admins see every department; others only the ones listed in
        their department_ids.
        """
        if user is None:
            return False
        if PermissionChecker.is_admin(user):
            return True
        return department_id in user.department_ids

    @staticmethod
    def can_create_task(user: Optional[User], department_id: Optional[str]) -> bool:
        """New tasks need a selected department the user can see."""
        if not department_id:
            return False
        return PermissionChecker.can_view_department(user, department_id)

    @staticmethod
    def can_manage_users(user: Optional[User]) -> bool:
        return PermissionChecker.is_admin(user)

    @staticmethod
    def check_department_access(user: User, department_id: str) -> None:
        """
        Check department access and raise HTTPException if denied.
        """
        if not PermissionChecker.can_view_department(user, department_id):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You don't have access to this department",
            )

    @staticmethod
    def check_task_access(board: TaskBoard, user: User, task_id: str) -> None:
        """
        Check task access (via its department) and raise HTTPException if denied.
        """
        task = board.find_task(task_id)
        if task is None:
            raise NotFound(f"Task {task_id} not found")
        PermissionChecker.check_department_access(user, task.department_id)


can_view_department = PermissionChecker.can_view_department
can_create_task = PermissionChecker.can_create_task


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Dependency to require the admin role"""
    if not PermissionChecker.can_manage_users(current_user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
    return current_user


# Helper functions to use in endpoints
def verify_department_access(department_id: str, current_user: User) -> None:
    """
    Verify user has access to department. Use this in endpoint body.
    """
    PermissionChecker.check_department_access(current_user, department_id)


def verify_task_access(board: TaskBoard, task_id: str, current_user: User) -> None:
    """
    Verify user has access to task (via department). Use this in endpoint body.
    """
    PermissionChecker.check_task_access(board, current_user, task_id)
