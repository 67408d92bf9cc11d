from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from taskboard.auth.services import AuthService
from taskboard.auth.store import UserStore
from taskboard.board.services import DepartmentRegistry, TaskBoard
from taskboard.db.store import MemoryKeyValueStore
from taskboard.ids import CounterIdGenerator
from taskboard.settings import Settings
from taskboard.web.application import get_app
from taskboard.web.lifespan import setup_services


@pytest.fixture
def anyio_backend() -> str:
    """
    Backend for anyio pytest plugin.

    :return: backend name.
    """
    return "asyncio"


@pytest.fixture
def admin_email() -> str:
    return "root@example.com"


@pytest.fixture
def admin_password() -> str:
    return "s3cret"


@pytest.fixture
def test_settings(admin_email: str, admin_password: str) -> Settings:
    return Settings(
        bootstrap_admin_email=admin_email,
        bootstrap_admin_password=admin_password,
        seed_bootstrap_admin=True,
    )


@pytest.fixture
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore("test")


@pytest.fixture
def ids() -> CounterIdGenerator:
    return CounterIdGenerator(prefix="id-")


@pytest.fixture
def user_store(kv: MemoryKeyValueStore, admin_email: str) -> UserStore:
    return UserStore(kv, bootstrap_admin_email=admin_email)


@pytest.fixture
def auth_service(
    user_store: UserStore,
    ids: CounterIdGenerator,
    admin_password: str,
) -> AuthService:
    return AuthService(user_store, ids, bootstrap_admin_password=admin_password)


@pytest.fixture
def empty_auth_service(
    kv: MemoryKeyValueStore,
    ids: CounterIdGenerator,
    admin_email: str,
    admin_password: str,
) -> AuthService:
    """Auth service over a store that never seeds the bootstrap admin."""
    store = UserStore(kv, bootstrap_admin_email=admin_email, seed_bootstrap_admin=False)
    return AuthService(store, ids, bootstrap_admin_password=admin_password)


@pytest.fixture
def registry(ids: CounterIdGenerator) -> DepartmentRegistry:
    return DepartmentRegistry(ids)


@pytest.fixture
def board(ids: CounterIdGenerator) -> TaskBoard:
    return TaskBoard(ids)


@pytest.fixture
def fastapi_app(kv: MemoryKeyValueStore, test_settings: Settings) -> FastAPI:
    """
    Fixture for creating FastAPI app backed by an in-memory store.

    :return: fastapi app with services in its state.
    """
    application = get_app()
    setup_services(
        application,
        kv,
        config=test_settings,
        id_generator=CounterIdGenerator(prefix="id-"),
    )
    return application


@pytest.fixture
async def client(fastapi_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    Fixture that creates client for requesting server.

    :param fastapi_app: the application.
    :yield: client for the app.
    """
    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
