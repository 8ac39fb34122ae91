"""
Field Manager Backend: Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Inventory (all function-scoped):
    ├── mock_gateway: PersistenceGateway mock for service unit tests
    ├── saved_entities: ids assigned by mock_gateway.save()
    ├── db_engine: in-memory SQLite engine with the schema created
    ├── db_session: AsyncSession bound to db_engine
    ├── gateway: real PersistenceGateway over db_session
    └── test_client: HTTPX AsyncClient talking to the app, backed by db_engine
"""

import os

# Override settings for testing BEFORE any fieldmanager import reads them
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DB_CREATE_TABLES"] = "false"

from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

import fieldmanager.models  # noqa: E402,F401
from fieldmanager.database import Base, enable_sqlite_foreign_keys, get_db_session  # noqa: E402
from fieldmanager.persistence import PersistenceGateway  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Service Unit Test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_gateway():
    """
    A PersistenceGateway stand-in.

    spec= makes every async gateway method an AsyncMock and add() a plain
    MagicMock, so tests set return values exactly like the real API:

        mock_gateway.get_user.return_value = User(id=1, ...)
    """
    return MagicMock(spec=PersistenceGateway)


@pytest.fixture
def saved_entities(mock_gateway):
    """
    Make mock_gateway.save() behave like a flush: entities passed to add()
    get sequential ids starting at 1. Returns the list of added entities.
    """
    added = []
    mock_gateway.add.side_effect = added.append

    async def save():
        for next_id, entity in enumerate(added, start=1):
            if entity.id is None:
                entity.id = next_id

    mock_gateway.save.side_effect = save
    return added


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    Fresh in-memory database per test.

    StaticPool keeps every session on the one connection that holds the
    in-memory database; foreign keys are switched on as in production.
    """
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def gateway(db_session):
    return PersistenceGateway(db_session)


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient wired to the FastAPI app through ASGITransport.

    get_db_session is overridden so every request runs against the test
    database instead of the configured DATABASE_URL.
    """
    from fieldmanager.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def alice():
    return {"name": "Alice", "phoneNumber": "+15551234567", "email": "a@example.com"}
