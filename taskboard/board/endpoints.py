from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from taskboard.auth.dependencies import get_auth_service, get_current_user
from taskboard.auth.services import AuthService
from taskboard.board.dependencies import get_department_registry, get_task_board
from taskboard.board.models import Department, Task, User
from taskboard.board.permissions import (
    PermissionChecker,
    verify_department_access,
    verify_task_access,
)
from taskboard.board.schemas import (
    BoardActionsOut,
    BoardOut,
    ColumnOut,
    DepartmentCreate,
    TaskCreate,
    TaskMove,
)
from taskboard.board.services import DepartmentRegistry, TaskBoard
from taskboard.utils import translate_service_errors

router = APIRouter()


# -----------------------
# Department endpoints
# -----------------------
@router.post(
    "/departments",
    response_model=Department,
    status_code=status.HTTP_201_CREATED,
)
@translate_service_errors
async def create_department(
    payload: DepartmentCreate,
    current_user: User = Depends(get_current_user),
    registry: DepartmentRegistry = Depends(get_department_registry),
):
    """Create a department. Any logged-in user may; the creator manages it."""
    return registry.create_department(
        payload.name, payload.description, creator_id=current_user.id,
    )


@router.get("/departments", response_model=List[Department])
@translate_service_errors
async def list_departments(
    current_user: User = Depends(get_current_user),
    registry: DepartmentRegistry = Depends(get_department_registry),
):
    """List the departments the user can see."""
    return registry.list_visible_departments(current_user)


@router.get("/departments/{department_id}/members", response_model=List[User])
@translate_service_errors
async def list_department_members(
    department_id: str,
    current_user: User = Depends(get_current_user),
    registry: DepartmentRegistry = Depends(get_department_registry),
    auth_service: AuthService = Depends(get_auth_service),
):
    registry.get_department(department_id)
    verify_department_access(department_id, current_user)
    return await auth_service.get_department_members(department_id)


# -----------------------
# Board endpoints
# -----------------------
@router.get("/departments/{department_id}/board", response_model=BoardOut)
@translate_service_errors
async def get_board(
    department_id: str,
    current_user: User = Depends(get_current_user),
    registry: DepartmentRegistry = Depends(get_department_registry),
    board: TaskBoard = Depends(get_task_board),
):
    """The four columns, filtered to one department. Requires access."""
    registry.get_department(department_id)
    verify_department_access(department_id, current_user)
    columns = board.columns_for_department(department_id)
    return BoardOut(
        department_id=department_id,
        columns=[ColumnOut.from_column(c) for c in columns],
    )


@router.post(
    "/departments/{department_id}/tasks",
    response_model=Task,
    status_code=status.HTTP_201_CREATED,
)
@translate_service_errors
async def create_task(
    department_id: str,
    payload: TaskCreate,
    current_user: User = Depends(get_current_user),
    registry: DepartmentRegistry = Depends(get_department_registry),
    board: TaskBoard = Depends(get_task_board),
):
    """Create a task in the column named by ``status``. Requires access."""
    registry.get_department(department_id)
    verify_department_access(department_id, current_user)
    return board.create_task(payload, current_user.id, department_id, payload.status)


@router.post("/tasks/{task_id}/move", response_model=Task)
@translate_service_errors
async def move_task(
    task_id: str,
    payload: TaskMove,
    current_user: User = Depends(get_current_user),
    board: TaskBoard = Depends(get_task_board),
):
    """Drop a task onto a column."""
    verify_task_access(board, task_id, current_user)
    task = board.move_task(task_id, payload.status)
    if task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


@router.get("/board/actions", response_model=BoardActionsOut)
async def get_board_actions(
    department_id: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    registry: DepartmentRegistry = Depends(get_department_registry),
):
    """
    Toolbar state: which actions are enabled for the selected department.

    An unknown department counts as not selected.
    """
    selected = department_id if registry.has_department(department_id) else None
    return BoardActionsOut(
        department_id=department_id,
        can_view_department=(
            selected is not None
            and PermissionChecker.can_view_department(current_user, selected)
        ),
        can_create_task=PermissionChecker.can_create_task(current_user, selected),
        can_create_department=True,
        can_manage_users=PermissionChecker.can_manage_users(current_user),
    )
