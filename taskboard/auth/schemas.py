from __future__ import annotations

from pydantic import BaseModel, Field

from taskboard.board.enums import UserRole


class LoginIn(BaseModel):
    email: str
    password: str


class UserCreate(BaseModel):
    # validated and normalized by AuthService.register
    email: str
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    role: UserRole = UserRole.USER


class RoleUpdate(BaseModel):
    role: UserRole
