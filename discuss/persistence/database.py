"""Engine and session plumbing for PostgreSQL (asyncpg)."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from discuss.config import DatabaseSettings


def create_engine(database: DatabaseSettings, echo: bool = False) -> AsyncEngine:
    """Create the async engine.

    Args:
        database: Connection and pool settings
        echo: Log every statement (debug mode)
    """
    server_settings = {"application_name": database.application_name}
    if database.statement_timeout_ms is not None:
        server_settings["statement_timeout"] = str(database.statement_timeout_ms)

    return create_async_engine(
        database.url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
        connect_args={"server_settings": server_settings},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory.

    Sessions never autoflush and keep loaded state after commit; every
    write goes through an explicit transaction.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@asynccontextmanager
async def transactional_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Open a short-lived session with one transaction around the block.

    Commits when the block exits cleanly and rolls back on error. Used for
    work that runs outside any request, such as notification delivery.
    """
    async with session_factory() as session:
        async with session.begin():
            yield session
