"""
Async SQLAlchemy connection pool and database session management.

One pool is opened at application startup (see ``gallery.core.lifespan``),
the ``images`` schema is created if it does not exist, and the pool is handed
to request handlers through the application context. Nothing here is a
module-level global, so two applications (or a test) can hold separate pools.

Key Features:
    - Connection pool with configurable size and overflow
    - Pre-ping health checks to avoid stale connections
    - Relaxed TLS for managed Postgres (server certificate not validated)
    - Idempotent schema creation on connect
    - Automatic rollback on exceptions

Usage:
    pool = await AsyncDBPool.connect(url, config)

    async with pool.get_session() as session:
        result = await session.execute(select(Image))
        await session.commit()

    await pool.dispose()
"""

import ssl
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from gallery.main_config import DatabaseConfig
from gallery.models.base import Base

__all__ = ["AsyncDBPool", "relaxed_ssl_context"]

logger = structlog.get_logger(__name__)


def relaxed_ssl_context() -> ssl.SSLContext:
    """TLS context that encrypts but does not validate the server certificate."""
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


def _engine_kwargs(url: str, config: DatabaseConfig, reject_unauthorized: bool) -> dict[str, Any]:
    if url.startswith("sqlite"):
        # Single shared connection so an in-memory database survives across sessions
        return {"echo": config.echo, "poolclass": StaticPool}

    kwargs: dict[str, Any] = {
        "pool_size": config.pool_size,
        "max_overflow": config.max_overflow,
        "pool_timeout": config.pool_timeout,
        "pool_recycle": config.pool_recycle,
        "pool_pre_ping": config.pool_pre_ping,
        "echo": config.echo,
    }
    if "asyncpg" in url and not reject_unauthorized:
        kwargs["connect_args"] = {"ssl": relaxed_ssl_context()}
    return kwargs


class AsyncDBPool:
    """Async SQLAlchemy engine + session manager for the images database."""

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self._maker = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

    @classmethod
    async def connect(
        cls,
        url: str,
        config: DatabaseConfig,
        reject_unauthorized: bool = False,
    ) -> "AsyncDBPool":
        """Open the engine and make sure the schema exists.

        Args:
            url: SQLAlchemy async database URL
            config: Pool settings
            reject_unauthorized: Validate the server certificate when True

        Raises:
            Exception: Whatever the driver raised; the engine is disposed first.
        """
        engine = create_async_engine(url, **_engine_kwargs(url, config, reject_unauthorized))
        pool = cls(engine)
        try:
            await pool.create_schema()
        except Exception as exc:
            logger.error("database_initialization_failed", error=str(exc))
            await engine.dispose()
            raise
        logger.info("database_initialized", dialect=engine.dialect.name)
        return pool

    async def create_schema(self) -> None:
        """Create missing tables. Existing tables are left untouched."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()

    @asynccontextmanager
    async def get_session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session; rollback on exceptions.

        Usage:
            async with pool.get_session() as session:
                await session.execute(...)
                await session.commit()
        """
        async with self._maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
