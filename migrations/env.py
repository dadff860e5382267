"""Alembic environment for the async PostgreSQL engine.

The database URL comes from Settings (DATABASE__URL), so credentials live
in one place.
"""

import asyncio

from alembic import context

from discuss.config import Settings
from discuss.persistence.database import create_engine
from discuss.persistence.tables import metadata
from discuss.util.logging import setup_logging
from discuss.util.observability import configure_logfire

config = context.config
settings = Settings()

configure_logfire(settings)
setup_logging(settings)

config.set_main_option("sqlalchemy.url", settings.database_url)

target_metadata = metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode (emit SQL without a connection)."""
    context.configure(
        url=settings.database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):
    context.configure(connection=connection, target_metadata=target_metadata)
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Run migrations through a sync wrapper over an async connection."""
    connectable = create_engine(settings.database, echo=settings.debug)

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
