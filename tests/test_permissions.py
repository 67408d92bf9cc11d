import pytest
from fastapi import HTTPException

from taskboard.board.enums import TaskStatus, UserRole
from taskboard.board.models import User
from taskboard.board.permissions import (
    PermissionChecker,
    can_create_task,
    can_view_department,
    require_admin,
    verify_department_access,
    verify_task_access,
)
from taskboard.board.schemas import TaskFields
from taskboard.utils import NotFound


def make_user(role=UserRole.USER, department_ids=()):
    return User(id="u", email="u@example.com", name="U", role=role, department_ids=list(department_ids))


@pytest.mark.parametrize("department_id", ["d1", "d2", "unknown", ""])
def test_admin_sees_every_department(department_id):
    assert can_view_department(make_user(UserRole.ADMIN), department_id)


@pytest.mark.parametrize("role", [UserRole.USER, UserRole.MANAGER])
def test_non_admin_sees_only_member_departments(role):
    user = make_user(role, ["d1"])

    assert can_view_department(user, "d1")
    assert not can_view_department(user, "d2")


def test_no_user_sees_nothing():
    assert not can_view_department(None, "d1")
    assert not can_create_task(None, "d1")
    assert not PermissionChecker.can_manage_users(None)


def test_task_creation_needs_selected_visible_department():
    member = make_user(department_ids=["d1"])

    assert can_create_task(member, "d1")
    assert not can_create_task(member, "d2")
    assert not can_create_task(member, None)
    assert not can_create_task(make_user(UserRole.ADMIN), None)
    assert can_create_task(make_user(UserRole.ADMIN), "d2")


def test_only_admins_manage_users():
    assert PermissionChecker.can_manage_users(make_user(UserRole.ADMIN))
    assert not PermissionChecker.can_manage_users(make_user(UserRole.MANAGER))

    admin = make_user(UserRole.ADMIN)
    assert require_admin(admin) is admin
    with pytest.raises(HTTPException) as exc_info:
        require_admin(make_user(UserRole.MANAGER))
    assert exc_info.value.status_code == 403


def test_verify_department_access_raises_forbidden():
    verify_department_access("d1", make_user(department_ids=["d1"]))

    with pytest.raises(HTTPException) as exc_info:
        verify_department_access("d2", make_user(department_ids=["d1"]))
    assert exc_info.value.status_code == 403


def test_verify_task_access_uses_task_department(board):
    task = board.create_task(TaskFields(title="T"), "u1", "d1", TaskStatus.BACKLOG)

    verify_task_access(board, task.id, make_user(department_ids=["d1"]))
    with pytest.raises(HTTPException):
        verify_task_access(board, task.id, make_user(department_ids=["d2"]))
    with pytest.raises(NotFound):
        verify_task_access(board, "missing", make_user(UserRole.ADMIN))
