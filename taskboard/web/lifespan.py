from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from loguru import logger
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from taskboard.auth.services import AuthService
from taskboard.auth.store import UserStore
from taskboard.board.services import DepartmentRegistry, TaskBoard
from taskboard.db.meta import meta
from taskboard.db.models import load_all_models
from taskboard.db.store import KeyValueStore, SqlKeyValueStore
from taskboard.ids import IdGenerator, RandomIdGenerator
from taskboard.settings import Settings, settings


async def _setup_db(app: FastAPI) -> None:  # pragma: no cover
    """
    Creates connection to the database.

    This function creates SQLAlchemy engine instance,
    session_factory for creating sessions,
    creates the key-value table if it is missing
    and stores them in the application's state property.

    :param app: fastAPI application.
    """
    engine = create_async_engine(settings.db_url, echo=settings.db_echo)
    session_factory = async_sessionmaker(
        engine,
        expire_on_commit=False,
    )
    load_all_models()
    async with engine.begin() as connection:
        await connection.run_sync(meta.create_all)
    app.state.db_engine = engine
    app.state.db_session_factory = session_factory


def setup_services(
    app: FastAPI,
    kv: KeyValueStore,
    *,
    config: Settings = settings,
    id_generator: Optional[IdGenerator] = None,
) -> None:
    """
    Builds the user store, auth service, department registry and task board
    once per process and stores them in the application's state.

    :param app: fastAPI application.
    :param kv: key-value store backing users and the session.
    :param config: settings to read bootstrap admin values from.
    :param id_generator: identifier source shared by every service.
    """
    id_generator = id_generator or RandomIdGenerator()
    user_store = UserStore(
        kv,
        bootstrap_admin_email=config.bootstrap_admin_email,
        seed_bootstrap_admin=config.seed_bootstrap_admin,
    )
    app.state.auth_service = AuthService(
        user_store,
        id_generator,
        bootstrap_admin_password=config.bootstrap_admin_password,
    )
    app.state.department_registry = DepartmentRegistry(id_generator)
    app.state.task_board = TaskBoard(id_generator)


@asynccontextmanager
async def lifespan_setup(
    app: FastAPI,
) -> AsyncGenerator[None, None]:  # pragma: no cover
    """
    Actions to run on application startup.

    This function uses fastAPI app to store data
    in the state, such as db_engine.

    :param app: the fastAPI application.
    :return: function that actually performs actions.
    """

    app.middleware_stack = None
    await _setup_db(app)
    setup_services(
        app,
        SqlKeyValueStore(app.state.db_session_factory, settings.store_namespace),
    )
    logger.info("taskboard started with store {}", settings.db_url)
    app.middleware_stack = app.build_middleware_stack()

    yield
    await app.state.db_engine.dispose()
