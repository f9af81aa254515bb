"""
Centralized Test Configuration.
"""

import pytest
from datetime import date, timedelta
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from fleetops.app.main import app
from fleetops.app.db.session import Base
from fleetops.app.db.store import EntityStore, get_store
from fleetops.app.core.jwt import create_access_token
from fleetops.app.core.redis_client import get_redis
from fleetops.app.models.enums import UserRole
from fleetops.app.models.fleet_enums import VehicleType
from fleetops.app.schemas.driver import DriverCreate
from fleetops.app.schemas.vehicle import VehicleCreate
from fleetops.app.services import driver_service, vehicle_service

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable foreign key constraints for SQLite."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# Mock Redis for reliability in CI/CD
class MockRedis:
    def __init__(self):
        self.store = {}
        self.expiry = {}

    async def ping(self):
        return True

    async def get(self, key):
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self.store[key] = value
        self.expiry[key] = ex
        return True

    async def delete(self, key):
        if key in self.store:
            del self.store[key]
            return 1
        return 0

    async def exists(self, key):
        return 1 if key in self.store else 0

    async def flushdb(self):
        self.store = {}
        self.expiry = {}


@pytest.fixture
async def engine():
    """Fresh in-memory database per test."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(test_engine.sync_engine, "connect", set_sqlite_pragma)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture
async def store(engine):
    return EntityStore(async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False))


@pytest.fixture
def redis_client():
    return MockRedis()


@pytest.fixture
async def client(store, redis_client):
    """Async client for testing, wired to the test database and mock Redis."""
    async def override_get_redis():
        return redis_client

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_redis] = override_get_redis

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}


def make_token(role, user_id="user-1"):
    """Mint an identity provider token for a role."""
    claims = {"sub": user_id}
    if role is not None:
        claims["role"] = role.value if isinstance(role, UserRole) else role
    return create_access_token(claims)


@pytest.fixture
def auth_headers():
    """Factory returning bearer headers for a role."""
    def _headers(role, user_id="user-1"):
        return {"Authorization": f"Bearer {make_token(role, user_id)}"}
    return _headers


# Shared fleet fixtures

@pytest.fixture
async def vehicle(store):
    """Van with 500 kg capacity, available."""
    return await vehicle_service.create_vehicle(store, VehicleCreate(
        license_plate="VAN-05",
        name="Van-05",
        model="Transit",
        type=VehicleType.VAN,
        max_capacity_kg=500,
        odometer=45000
    ))


@pytest.fixture
async def driver(store):
    """On-duty driver whose license is valid for another 90 days."""
    return await driver_service.create_driver(store, DriverCreate(
        name="Alex",
        license_number="DL-1001",
        license_expiry=date.today() + timedelta(days=90),
        safety_score=92,
        completion_rate=88
    ))
