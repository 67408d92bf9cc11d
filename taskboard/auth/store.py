from __future__ import annotations

from typing import List, Optional

from email_validator import EmailNotValidError, validate_email
from loguru import logger
from pydantic import TypeAdapter

from taskboard.board.enums import UserRole
from taskboard.board.models import User
from taskboard.db.store import KeyValueStore

USERS_KEY = "users"
SESSION_KEY = "current_user"
BOOTSTRAP_ADMIN_ID = "1"

_users_adapter = TypeAdapter(List[User])


def encode_users(users: List[User]) -> str:
    return _users_adapter.dump_json(users, by_alias=True).decode()


def decode_users(raw: str) -> List[User]:
    return _users_adapter.validate_json(raw)


def normalize_email(email: str) -> str:
    """
    The form emails are stored and matched in: the domain is lowercased and
    unicode is NFC-normalized. The local part keeps its case.

    :raises EmailNotValidError: when the address is malformed.
    """
    return validate_email(email.strip(), check_deliverability=False).normalized


class UserStore:
    """
    Users and the current session, serialized into a key-value store.

    The first read of a store without a user list seeds the bootstrap admin
    (unless seeding is disabled). A stored empty list is left alone.
    """

    def __init__(
        self,
        kv: KeyValueStore,
        *,
        bootstrap_admin_email: str,
        seed_bootstrap_admin: bool = True,
    ):
        self.kv = kv
        try:
            bootstrap_admin_email = normalize_email(bootstrap_admin_email)
        except EmailNotValidError:
            logger.warning("bootstrap admin email {} is not a valid address", bootstrap_admin_email)
        self.bootstrap_admin_email = bootstrap_admin_email
        self.seed_bootstrap_admin = seed_bootstrap_admin

    def bootstrap_admin(self) -> User:
        return User(
            id=BOOTSTRAP_ADMIN_ID,
            email=self.bootstrap_admin_email,
            name="Admin",
            role=UserRole.ADMIN,
        )

    async def load_users(self) -> List[User]:
        raw = await self.kv.get(USERS_KEY)
        if raw is not None:
            return decode_users(raw)
        if not self.seed_bootstrap_admin:
            return []
        users = [self.bootstrap_admin()]
        await self.save_users(users)
        logger.info("seeded bootstrap admin {}", self.bootstrap_admin_email)
        return users

    async def save_users(self, users: List[User]) -> None:
        await self.kv.set(USERS_KEY, encode_users(users))

    async def get_session(self) -> Optional[User]:
        raw = await self.kv.get(SESSION_KEY)
        if raw is None:
            return None
        return User.model_validate_json(raw)

    async def set_session(self, user: User) -> None:
        await self.kv.set(SESSION_KEY, user.model_dump_json(by_alias=True))

    async def clear_session(self) -> None:
        await self.kv.delete(SESSION_KEY)
