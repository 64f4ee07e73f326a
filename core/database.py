"""
Database engine and session management with SQLAlchemy async
"""

from typing import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from core.config import Settings
import logging

logger = logging.getLogger(__name__)


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Build the shared async engine. The driver owns connection pooling."""
    return create_async_engine(
        settings.DATABASE_URL,
        echo=False,
        pool_pre_ping=not settings.DATABASE_URL.startswith("sqlite"),
        future=True
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker:
    """Create session factory bound to an engine"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create every table registered on the declarative base"""
    # Imported for side effects: registers all models on Base.metadata
    import models  # noqa: F401
    from models.base import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")


async def session_scope(session_maker: async_sessionmaker) -> AsyncIterator[AsyncSession]:
    """Yield one session per unit of work"""
    async with session_maker() as session:
        yield session
