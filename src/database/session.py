"""
Database session management.

Async SQLAlchemy engine and sessions for the yard database.
Supports SQLite (development) and PostgreSQL (production).
"""

import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

from .models import Base
from .repository import SqlSnapshotStore


_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def get_database_url() -> str:
    """
    Get database URL from DATABASE_URL or fall back to a local SQLite file.

    postgres:// and postgresql:// URLs are rewritten to the asyncpg driver.
    """
    db_url = os.getenv("DATABASE_URL")

    if db_url:
        for prefix in ("postgres://", "postgresql://"):
            if db_url.startswith(prefix):
                return db_url.replace(prefix, "postgresql+asyncpg://", 1)
        return db_url

    return "sqlite+aiosqlite:///./yard_capacity.db"


def create_engine_for_url(db_url: str) -> AsyncEngine:
    """Create an async engine with pooling suited to the backend."""
    if "sqlite" in db_url:
        if ":memory:" in db_url:
            # One shared connection, or every session sees an empty database
            return create_async_engine(
                db_url,
                echo=False,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        return create_async_engine(
            db_url,
            echo=False,
            connect_args={"check_same_thread": False},
        )

    return create_async_engine(
        db_url,
        echo=False,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
    )


def get_engine() -> AsyncEngine:
    """Get or create the process-wide async engine."""
    global _engine

    if _engine is None:
        _engine = create_engine_for_url(get_database_url())

    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get or create the session factory."""
    global _session_factory

    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    return _session_factory


async def init_db() -> None:
    """Create all tables. Call once at startup."""
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Dispose of the engine. Call at shutdown."""
    global _engine, _session_factory

    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_factory = None


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Get an async database session, committed on success.

    Usage:
        async with get_session() as session:
            result = await session.execute(query)
    """
    session = get_session_factory()()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


@asynccontextmanager
async def get_snapshot_store() -> AsyncGenerator[SqlSnapshotStore, None]:
    """
    Snapshot store bound to a fresh session.

    Usage:
        async with get_snapshot_store() as store:
            forecast = await YardCapacityForecastService(store).forecast(...)
    """
    async with get_session() as session:
        yield SqlSnapshotStore(session)
