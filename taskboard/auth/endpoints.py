from typing import List

from fastapi import APIRouter, Depends, status

from taskboard.auth.dependencies import get_auth_service, get_current_user
from taskboard.auth.schemas import LoginIn, RoleUpdate, UserCreate
from taskboard.auth.services import AuthService
from taskboard.board.dependencies import get_department_registry
from taskboard.board.models import User
from taskboard.board.permissions import require_admin
from taskboard.board.services import DepartmentRegistry
from taskboard.utils import translate_service_errors

router = APIRouter()
users_router = APIRouter()


# -----------------------
# Authentication endpoints
# -----------------------
@router.post("/login", response_model=User)
@translate_service_errors
async def login(
    payload: LoginIn,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Start a session. Answers 401 on invalid credentials."""
    return await auth_service.login(payload.email, payload.password)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
@translate_service_errors
async def logout(auth_service: AuthService = Depends(get_auth_service)):
    await auth_service.logout()


@router.post("/register", response_model=User, status_code=status.HTTP_201_CREATED)
@translate_service_errors
async def register(
    payload: UserCreate,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Public registration. The first user of an empty store becomes admin,
    and the new user is logged in when no session is active. A malformed
    email answers 400.
    """
    return await auth_service.register(
        payload.email, payload.password, payload.name, payload.role,
    )


@router.get("/me", response_model=User)
async def read_users_me(current_user: User = Depends(get_current_user)):
    """
    Protected endpoint to get the current session user.
    """
    return current_user


# -----------------------
# User management (admin only)
# -----------------------
@users_router.get("", response_model=List[User])
@translate_service_errors
async def list_users(
    _: User = Depends(require_admin),
    auth_service: AuthService = Depends(get_auth_service),
):
    return await auth_service.get_all_users()


@users_router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
@translate_service_errors
async def create_user(
    payload: UserCreate,
    _: User = Depends(require_admin),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Add a user from the admin panel; any rejection reads 'Failed to create user'."""
    return await auth_service.create_user(
        payload.email, payload.password, payload.name, payload.role,
    )


@users_router.patch("/{user_id}/role", response_model=User)
@translate_service_errors
async def update_user_role(
    user_id: str,
    payload: RoleUpdate,
    _: User = Depends(require_admin),
    auth_service: AuthService = Depends(get_auth_service),
):
    return await auth_service.update_user_role(user_id, payload.role)


@users_router.put("/{user_id}/departments/{department_id}", response_model=User)
@translate_service_errors
async def assign_to_department(
    user_id: str,
    department_id: str,
    _: User = Depends(require_admin),
    auth_service: AuthService = Depends(get_auth_service),
    registry: DepartmentRegistry = Depends(get_department_registry),
):
    registry.get_department(department_id)
    return await auth_service.assign_to_department(user_id, department_id)


@users_router.delete("/{user_id}/departments/{department_id}", response_model=User)
@translate_service_errors
async def remove_from_department(
    user_id: str,
    department_id: str,
    _: User = Depends(require_admin),
    auth_service: AuthService = Depends(get_auth_service),
):
    return await auth_service.remove_from_department(user_id, department_id)
