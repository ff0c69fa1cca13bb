"""Service test fixtures — async DB, repositories, pinned clock, FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite database file (tmp_path)
    - get_db dependency overridden to use the test session factory
    - db_manager patched so the healthcheck and sweep_once use the test engine

Design Decisions:
    - File-backed SQLite over :memory:: sessions get separate connections, so
      version-conflict tests see real interleaved commits
    - FakeClock is a mutable callable: tests move "now" across the 24h / 7d boundaries
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from app.db.base import Base
from app.infrastructure.database import get_db, DatabaseSessionManager
from app.infrastructure.repositories import SqlUserRepository, SqlWeeklistRepository
from app.services.weeklist_lifecycle import WeeklistLifecycle
import app.infrastructure.database as db_module
import app.models  # noqa: F401
from app.main import app


class FakeClock:
    """Callable clock pinned to a settable instant."""

    def __init__(self, now: datetime | None = None):
        self.now = now or datetime.now(timezone.utc)

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'weeklist_test.db'}", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def weeklist_repo(test_db):
    return SqlWeeklistRepository(test_db)


@pytest.fixture
def lifecycle(weeklist_repo, clock):
    return WeeklistLifecycle(weeklist_repo, clock=clock)


async def _make_user(db, suffix: str):
    return await SqlUserRepository(db).insert(
        fullname=f"User {suffix}",
        email=f"user{suffix}@example.com",
        password_hash="not-a-real-hash",
        age=30,
        gender="female",
        mobile=f"90000000{suffix}",
    )


@pytest.fixture
async def owner(test_db):
    return await _make_user(test_db, "01")


@pytest.fixture
async def other_owner(test_db):
    return await _make_user(test_db, "02")


@pytest.fixture
def test_manager(test_engine, test_session_factory):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
async def client(test_session_factory, test_manager):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    db_module.db_manager = test_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


REGISTRATION = {
    "fullname": "Ada Lovelace",
    "email": "ada@example.com",
    "password": "analytical-engine",
    "age": 36,
    "gender": "female",
    "mobile": "9876543210",
}


@pytest.fixture
def registration():
    return dict(REGISTRATION)


@pytest.fixture
async def auth_headers(client, registration):
    """Register the default user and return a Bearer header for it."""
    res = await client.post("/register", json=registration)
    token = res.json()["data"]["jwtoken"]
    return {"Authorization": f"Bearer {token}"}
