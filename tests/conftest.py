"""
Pytest configuration and fixtures
"""

import httpx
import pytest
import pytest_asyncio
from unittest.mock import AsyncMock
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from typing import AsyncGenerator
import models  # noqa: F401  registers every table on Base.metadata
from models.base import Base
from api.main import create_app
from api.dependencies import get_db, get_identity_provider, get_payment_gateway
from core.config import Settings
from core.security import VerifiedIdentity

# In-memory database shared by every session of one test
TEST_DATABASE_URL = "sqlite+aiosqlite://"

OWNER_EMAIL = "owner@example.com"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def session_maker(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture(scope="function")
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for tests"""
    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def identity_provider():
    """Identity provider that accepts every token as OWNER_EMAIL"""
    provider = AsyncMock()
    provider.verify_token.return_value = VerifiedIdentity(uid="uid-owner", email=OWNER_EMAIL)
    return provider


@pytest.fixture
def payment_gateway():
    gateway = AsyncMock()
    gateway.create_payment_intent.return_value = "pi_123_secret_456"
    return gateway


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer test-token"}


@pytest.fixture
def app(session_maker, identity_provider, payment_gateway):
    """Application with database and collaborator overrides"""
    app = create_app(Settings(AUTO_CREATE_TABLES=False))

    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_provider] = lambda: identity_provider
    app.dependency_overrides[get_payment_gateway] = lambda: payment_gateway

    yield app

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app):
    """Async test client"""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture
def parcel_payload():
    """Parcel as the client form sends it"""
    return {
        "created_by": OWNER_EMAIL,
        "creation_date": "2024-01-15T10:00:00Z",
        "title": "Birthday gift",
        "type": "non-document",
        "weight": 2.5,
        "sender_region": "Dhaka",
        "receiver_region": "Sylhet",
        "cost": 150
    }
