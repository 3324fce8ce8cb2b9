"""Async database connection management.

Provides the async engine, session factory, and connection lifecycle.
Uses SQLAlchemy 2.0 async patterns with SQLModel.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel

from folio.config import settings

log = structlog.get_logger()

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


# =============================================================================
# Engine Configuration
# =============================================================================


def create_engine_for(url: str) -> AsyncEngine:
    """Create an async engine for a database URL.

    Pool sizing only applies to server databases; SQLite gets a busy
    timeout so concurrent writers wait instead of failing immediately.
    """
    if url.startswith("sqlite"):
        return create_async_engine(
            url,
            echo=settings.log_level == "DEBUG",
            connect_args={"timeout": 15},
        )
    return create_async_engine(
        url,
        echo=settings.log_level == "DEBUG",
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,  # Verify connections before use
        pool_recycle=3600,
    )


def configure_database(url: str | None = None) -> async_sessionmaker[AsyncSession]:
    """(Re)bind the module engine and session factory.

    Called lazily on first use with the configured URL; tests call it with a
    temporary database URL.
    """
    global _engine, _session_factory  # noqa: PLW0603
    _engine = create_engine_for(url or settings.database_url)
    _session_factory = async_sessionmaker(
        bind=_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    log.debug("database_configured", dialect=_engine.dialect.name)
    return _session_factory


def get_engine() -> AsyncEngine:
    if _engine is None:
        configure_database()
    assert _engine is not None
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the session factory, configuring the engine on first use."""
    if _session_factory is None:
        return configure_database()
    return _session_factory


# =============================================================================
# Connection Lifecycle
# =============================================================================


async def init_db() -> None:
    """Create all SQLModel tables that don't exist yet.

    Should be called once at application startup when Alembic is not used.
    """
    # Register tables on SQLModel.metadata
    from folio.db import models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    log.info("database_tables_initialized")


async def close_db() -> None:
    """Dispose of the engine and its pooled connections."""
    global _engine, _session_factory  # noqa: PLW0603
    if _engine is not None:
        await _engine.dispose()
        log.info("database_connections_closed")
    _engine = None
    _session_factory = None


# =============================================================================
# Session Management
# =============================================================================


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get an async database session.

    Usage:
        async with get_session() as session:
            result = await session.execute(select(Project))

    Yields:
        AsyncSession that commits on success and rolls back on exception.
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


# =============================================================================
# Health Check
# =============================================================================


async def check_database_health() -> dict[str, str | None]:
    """Check database connection health."""
    try:
        async with get_session() as session:
            await session.execute(text("SELECT 1"))
        return {"status": "healthy", "dialect": get_engine().dialect.name}
    except Exception as e:
        log.error("database_health_check_failed", error=str(e))  # noqa: TRY400
        return {"status": "unhealthy", "error": str(e)}
