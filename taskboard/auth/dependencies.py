from fastapi import Depends, HTTPException, status
from starlette.requests import Request

from taskboard.auth.services import AuthService
from taskboard.board.models import User


def get_auth_service(request: Request) -> AuthService:
    """
    Auth service stored in the application's state during startup.
    """
    return request.app.state.auth_service


async def get_current_user(
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """
    Dependency that returns the session user, or rejects the request
    when nobody is logged in.
    """
    user = await auth_service.current_user()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user
