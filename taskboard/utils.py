# ---- Custom exceptions ----
from functools import wraps
from typing import Any, Callable, TypeVar, cast

from fastapi import HTTPException, status

F = TypeVar("F", bound=Callable[..., Any])


class ServiceError(Exception):
    """Base class for service errors."""


class NotFound(ServiceError):
    pass


class Conflict(ServiceError):
    pass


class InvalidCredentials(ServiceError):
    """Unknown email, or wrong password for the bootstrap admin."""


class DuplicateEmail(Conflict):
    pass


class InvalidEmail(ServiceError):
    pass


class OperationFailed(ServiceError):
    """Generic rejection surfaced to the user as an inline message."""


# ---- Utilities ----
def translate_service_errors(fn: F) -> F:
    """
    Decorator which translates service exceptions into HTTPExceptions while
    preserving the wrapped function's signature so FastAPI/OpenAPI behave correctly.
    """

    @wraps(fn)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await fn(*args, **kwargs)
        except InvalidCredentials as e:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
        except NotFound as e:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
        except Conflict as e:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
        except ServiceError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return cast(F, wrapper)
