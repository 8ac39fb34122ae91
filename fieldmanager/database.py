"""
Field Manager Backend: Database Engine and Sessions
===================================================

What:  The async engine, the session factory, the declarative Base and the
       per-request session dependency.
Who:   PersistenceGateway (through get_gateway), Alembic, the health probe.
When:  The engine is built at import; each request opens its own session.

Connection Pooling:
    pool_size=20, max_overflow=10 for PostgreSQL (at most 30 connections).
    SQLite URLs skip pool sizing: aiosqlite picks its own pool class and
    in-memory databases must stay on a single connection.

Foreign Keys on SQLite:
    SQLite ignores REFERENCES clauses unless `PRAGMA foreign_keys=ON` is
    issued on every new connection. The fields.user_id ON DELETE CASCADE
    rule and the unknown-userId rejection on field update depend on it.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from fieldmanager.config import settings


def engine_options(database_url: str) -> Dict[str, Any]:
    """Keyword arguments for create_async_engine() appropriate to the backend."""
    options: Dict[str, Any] = {
        "pool_pre_ping": settings.db_pool_pre_ping,
        "echo": settings.log_level == "DEBUG",
    }
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_recycle=3600,
        )
    return options


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """Turn on foreign key enforcement for every new SQLite connection."""

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **engine_options(settings.database_url))

if settings.is_sqlite:
    enable_sqlite_foreign_keys(engine)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: entities stay readable after save() commits,
# response shaping happens after the commit.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Declarative base of the users, fields and device_controllers models.

    Shares one metadata object between the models, Alembic and
    create_tables().
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    One AsyncSession per request, closed when the request ends.

    How it works:
        1. Opens a session from async_session_factory
        2. Yields it to the request (wrapped in a PersistenceGateway)
        3. On success: commits anything the handler left pending
        4. On error: rolls back the transaction
        5. Always: closes it, handing the connection back to the pool

    Services persist through PersistenceGateway.save(), so the final commit
    here is normally a no-op.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_tables() -> None:
    """
    What:  Creates all tables known to Base.metadata (no-op for existing ones).
    When:  At startup when DB_CREATE_TABLES is set.
    """
    # Models register themselves on Base.metadata when imported
    import fieldmanager.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """
    What:  Closes every pooled connection.
    When:  Application shutdown (lifespan).
    """
    await engine.dispose()
