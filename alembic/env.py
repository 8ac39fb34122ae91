"""
Alembic Migration Environment
=============================

Runs migrations for the users / fields / device_controllers schema.

Database URL, first match wins:
    1. `alembic -x url=sqlite+aiosqlite:///./fields.db upgrade head`
    2. DATABASE_URL via fieldmanager.config.settings

The async engine is bridged into Alembic's synchronous migration API with
AsyncConnection.run_sync(). SQLite runs in batch mode because it cannot
ALTER constraints in place.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine
from alembic import context

from fieldmanager.config import settings
from fieldmanager.database import Base

# Populates Base.metadata for --autogenerate
import fieldmanager.models  # noqa: F401

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)


def database_url() -> str:
    return context.get_x_argument(as_dictionary=True).get("url", settings.database_url)


def configure(**kwargs) -> None:
    url = kwargs.get("url") or database_url()
    context.configure(
        target_metadata=Base.metadata,
        render_as_batch=url.startswith("sqlite"),
        compare_type=True,
        **kwargs,
    )


def migrate_offline() -> None:
    """Print the SQL instead of executing it (`alembic upgrade head --sql`)."""
    configure(url=database_url(), literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def _migrate_on(connection: Connection) -> None:
    configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def migrate_online() -> None:
    migration_engine = create_async_engine(database_url(), poolclass=pool.NullPool)
    try:
        async with migration_engine.connect() as connection:
            await connection.run_sync(_migrate_on)
    finally:
        await migration_engine.dispose()


if context.is_offline_mode():
    migrate_offline()
else:
    asyncio.run(migrate_online())
