"""Engine and session lifecycle for the blog database.

One engine per process, built on first use from the settings passed to
`configure_database` (or the environment). Requests get their own session
through `get_db_session`; scripts and startup seeding use `get_session`.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from blogapi.config import Settings, get_settings

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None
_settings: Settings | None = None


def configure_database(settings: Settings | None) -> None:
    """Use these settings, not the environment, for the next engine.

    Any engine built from earlier settings is dropped without being
    disposed; call `close_db` first if it holds open connections.
    """
    global _settings, _engine, _session_factory
    _settings = settings
    _engine = None
    _session_factory = None


def _enable_sqlite_constraints(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        # concurrent writers wait instead of failing with "database is locked"
        cursor.execute("PRAGMA busy_timeout=5000")
        cursor.close()


def _build_engine(settings: Settings) -> AsyncEngine:
    if settings.is_sqlite:
        engine = create_async_engine(
            settings.DATABASE_URL,
            echo=settings.DEBUG,
            connect_args={"check_same_thread": False},
        )
        _enable_sqlite_constraints(engine)
        return engine

    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
    )


def get_engine() -> AsyncEngine:
    global _engine

    if _engine is None:
        settings = _settings or get_settings()
        _engine = _build_engine(settings)
        # credentials stay out of the log
        logger.info(f"Database engine created: {settings.DATABASE_URL.split('@')[-1]}")

    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory

    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    return _session_factory


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """One unit of work: commit if the block succeeds, roll back if it raises.

    Examples:
        >>> async with get_session() as session:
        ...     await seed_database(session, settings)
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


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session for route dependencies."""
    async with get_session() as session:
        yield session


async def init_db() -> None:
    """Create the users and blogs tables if they do not exist."""
    from blogapi.models import Base

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables ready")


async def check_db_connection() -> bool:
    """True if a trivial query succeeds. Used by /health."""
    try:
        async with get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False


async def close_db() -> None:
    global _engine, _session_factory

    if _engine is None:
        return
    await _engine.dispose()
    _engine = None
    _session_factory = None
    logger.info("Database connections closed")
