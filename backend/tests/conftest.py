"""Pytest configuration and fixtures for Carobar tests.

Provides an isolated SQLite database per test, an in-memory Redis double
installed into the cache module, and JWT headers for each role.
"""

from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import carobar.models  # noqa: F401  register every table on Base.metadata
from carobar.auth.deps import AuthUser
from carobar.auth.jwt import create_access_token
from carobar.database import Base, get_db
from carobar.main import app
from carobar.utils import cache

COMPANY_A = "company-a"
COMPANY_B = "company-b"


# ── Test Database Setup ──────────────────────────────────────────

@pytest_asyncio.fixture
async def test_engine(tmp_path):
    """SQLite file database with SAVEPOINT support and foreign keys enforced."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'carobar_test.db'}")

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # SQLAlchemy emits BEGIN itself (below) so nested transactions work
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test database.

    Open short-lived sessions with it (`async with session_factory() as s`)
    so no test session holds a lock while the app writes.
    """
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Test client with the database dependency pointed at the test database."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ── Redis Fixtures ───────────────────────────────────────────────

class FakeRedis:
    """The subset of redis.asyncio.Redis the cache module uses."""

    def __init__(self):
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    async def get(self, key):
        return self.store.get(key)

    async def setex(self, key, ttl, value):
        self.store[key] = value
        self.ttls[key] = ttl
        return True

    async def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.store.pop(key, None) is not None:
                removed += 1
            self.ttls.pop(key, None)
        return removed

    async def ping(self):
        return True

    async def aclose(self):
        pass


@pytest.fixture(autouse=True)
def fake_redis(monkeypatch) -> FakeRedis:
    """Every test gets an empty in-memory Redis; no real server is contacted."""
    fake = FakeRedis()
    monkeypatch.setattr(cache, "_redis_client", fake)
    return fake


# ── Auth Fixtures ────────────────────────────────────────────────

@pytest.fixture
def make_headers() -> Callable[..., dict]:
    """Build Authorization headers for an arbitrary caller."""

    def _make(role_id: str = "CU", company_id: str = COMPANY_A, user_id: str = "staff-1") -> dict:
        token = create_access_token(user_id=user_id, company_id=company_id, role_id=role_id)
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def staff_headers(make_headers) -> dict:
    return make_headers(role_id="CU", user_id="staff-1")


@pytest.fixture
def manager_headers(make_headers) -> dict:
    return make_headers(role_id="CA", user_id="manager-1")


@pytest.fixture
def other_company_headers(make_headers) -> dict:
    return make_headers(role_id="CU", company_id=COMPANY_B, user_id="staff-b")


@pytest.fixture
def staff_user() -> AuthUser:
    """Caller identity for tests that drive a controller directly."""
    return AuthUser(user_id="staff-1", user_name="staff-1", company_id=COMPANY_A, role_id="CU")


# ── Test Markers ─────────────────────────────────────────────────

def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "cache: Tests touching the Redis cache layer")
