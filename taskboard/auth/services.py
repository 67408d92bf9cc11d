from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

from email_validator import EmailNotValidError
from loguru import logger

from taskboard.auth.store import UserStore, normalize_email
from taskboard.board.enums import UserRole
from taskboard.board.models import User
from taskboard.ids import IdGenerator
from taskboard.utils import (
    DuplicateEmail,
    InvalidCredentials,
    InvalidEmail,
    NotFound,
    OperationFailed,
    ServiceError,
)


class AuthService:
    """
    Login, registration and user administration over a ``UserStore``.

    None of these operations checks the caller's role; the HTTP layer gates
    the administrative ones behind ``require_admin``.

    The user list is read, modified and written back as a whole, so every
    access to it goes through ``_lock``.
    """

    def __init__(
        self,
        store: UserStore,
        id_generator: IdGenerator,
        *,
        bootstrap_admin_password: str,
    ):
        self.store = store
        self.id_generator = id_generator
        self.bootstrap_admin_password = bootstrap_admin_password
        self._lock = asyncio.Lock()

    # ---- Session ----
    async def current_user(self) -> Optional[User]:
        return await self.store.get_session()

    async def login(self, email: str, password: str) -> User:
        """
        Start a session for the user with this email.

        Only the bootstrap admin's password is compared. Every other account
        authenticates with any password; that gap is kept for compatibility
        with existing stores and is a known defect.
        """
        try:
            email = normalize_email(email)
        except EmailNotValidError as exc:
            raise InvalidCredentials("Invalid credentials") from exc

        async with self._lock:
            users = await self.store.load_users()
            user = next((u for u in users if u.email == email), None)
            is_bootstrap = email == self.store.bootstrap_admin_email
            if user is None or (is_bootstrap and password != self.bootstrap_admin_password):
                raise InvalidCredentials("Invalid credentials")
            if not is_bootstrap:
                logger.warning("login for {} accepted without password check", email)

            await self.store.set_session(user)
        logger.info("user {} logged in", user.id)
        return user

    async def logout(self) -> None:
        await self.store.clear_session()

    # ---- Users ----
    async def register(
        self,
        email: str,
        password: str,
        name: str,
        role: UserRole = UserRole.USER,
    ) -> User:
        """
        Create a user. The first user of an empty store is always an admin.
        Without an active session the new user is logged in.

        :raises InvalidEmail: for a malformed address.
        :raises DuplicateEmail: when the normalized address is taken.
        """
        try:
            email = normalize_email(email)
        except EmailNotValidError as exc:
            raise InvalidEmail(str(exc)) from exc

        async with self._lock:
            users = await self.store.load_users()
            if any(u.email == email for u in users):
                raise DuplicateEmail("Email already exists")

            user = User(
                id=self.id_generator(),
                email=email,
                name=name,
                role=UserRole.ADMIN if not users else role,
            )
            users.append(user)
            await self.store.save_users(users)
            logger.info("registered user {} ({}) as {}", user.id, email, user.role.value)

            if await self.store.get_session() is None:
                await self.store.set_session(user)
        return user

    async def create_user(
        self,
        email: str,
        password: str,
        name: str,
        role: UserRole = UserRole.USER,
    ) -> User:
        """Admin panel variant of ``register`` with a generic failure."""
        try:
            return await self.register(email, password, name, role)
        except ServiceError as exc:
            logger.info("user creation for {} rejected: {}", email, exc)
            raise OperationFailed("Failed to create user") from exc

    async def get_all_users(self) -> List[User]:
        async with self._lock:
            return await self.store.load_users()

    async def get_user(self, user_id: str) -> User:
        async with self._lock:
            users = await self.store.load_users()
        for user in users:
            if user.id == user_id:
                return user
        raise NotFound(f"User {user_id} not found")

    async def get_department_members(self, department_id: str) -> List[User]:
        async with self._lock:
            users = await self.store.load_users()
        return [u for u in users if department_id in u.department_ids]

    async def update_user_role(self, user_id: str, role: UserRole) -> User:
        """Update a user's global role"""
        return await self._update_user(user_id, lambda user: {"role": role})

    async def assign_to_department(self, user_id: str, department_id: str) -> User:
        def add(user: User) -> Dict[str, Any]:
            if department_id in user.department_ids:
                return {}
            return {"department_ids": [*user.department_ids, department_id]}

        return await self._update_user(user_id, add)

    async def remove_from_department(self, user_id: str, department_id: str) -> User:
        def remove(user: User) -> Dict[str, Any]:
            if department_id not in user.department_ids:
                return {}
            return {"department_ids": [d for d in user.department_ids if d != department_id]}

        return await self._update_user(user_id, remove)

    async def _update_user(
        self,
        user_id: str,
        change: Callable[[User], Dict[str, Any]],
    ) -> User:
        """
        Apply the fields returned by ``change`` to one stored user.

        ``change`` sees the user as currently stored; an empty result leaves
        the store untouched.
        """
        async with self._lock:
            users = await self.store.load_users()
            for index, user in enumerate(users):
                if user.id == user_id:
                    break
            else:
                raise NotFound(f"User {user_id} not found")

            patch = change(user)
            if not patch:
                return user
            updated = user.model_copy(update=patch)
            users[index] = updated
            await self.store.save_users(users)

            # keep the session copy in step with the stored user
            session_user = await self.store.get_session()
            if session_user is not None and session_user.id == user_id:
                await self.store.set_session(updated)
        logger.debug("updated user {}: {}", user_id, sorted(patch))
        return updated
