from fastapi.routing import APIRouter

from taskboard.auth import endpoints as auth
from taskboard.board import endpoints as board
from taskboard.web.api import monitoring

api_router = APIRouter()
api_router.include_router(monitoring.router)
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(auth.users_router, prefix="/users", tags=["users"])
api_router.include_router(board.router, tags=["board"])
