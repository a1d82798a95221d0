"""
Database engine and unit-of-work sessions.

A session commits when its caller finishes and rolls back on any
exception, so every multi-row write is all-or-nothing.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.exc import ArgumentError, InvalidRequestError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from placement.config.settings import Settings, settings as default_settings
from placement.infrastructure.exceptions import ConfigurationError


logger = logging.getLogger(__name__)


class DatabaseManager:
    """Owns the pooled async engine; the engine is built on first use."""

    def __init__(self, config: Optional[Settings] = None):
        self._config = config or default_settings
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._build()
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            self._build()
        return self._session_factory

    def _build(self) -> None:
        """
        Create the engine and session factory from settings.

        Raises:
            ConfigurationError: DATABASE_URL is empty, unparseable or names
                a driver without asyncio support
        """
        url = self._config.database_url
        if not url:
            raise ConfigurationError(
                "Missing DATABASE_URL environment variable",
                missing_keys=["DATABASE_URL"],
            )

        try:
            engine = create_async_engine(
                url,
                echo=self._config.database_echo,
                pool_size=self._config.database_pool_size,
                max_overflow=self._config.database_max_overflow,
                pool_timeout=self._config.database_pool_timeout,
                pool_pre_ping=True,
            )
        except (ArgumentError, InvalidRequestError) as e:
            raise ConfigurationError(
                f"DATABASE_URL is not usable with the async engine: {e}",
                original_error=e,
            ) from e

        self._engine = engine
        self._session_factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.info(f"[DB] Engine ready for {engine.url.render_as_string(hide_password=True)}")

    async def close(self) -> None:
        """Dispose of the connection pool."""
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._session_factory = None


_db_manager: Optional[DatabaseManager] = None


def get_db_manager() -> DatabaseManager:
    """Process-wide database manager."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


@asynccontextmanager
async def get_session_context() -> AsyncGenerator[AsyncSession, None]:
    """
    Unit-of-work session for scripts and background jobs.

    Usage:
        async with get_session_context() as session:
            await CandidateRepository(session).create(...)
    """
    async with get_db_manager().session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one unit-of-work session per request."""
    async with get_session_context() as session:
        yield session


async def init_db() -> None:
    """Check connectivity on startup."""
    async with get_db_manager().session_factory() as session:
        await session.execute(text("SELECT 1"))


async def close_db() -> None:
    await get_db_manager().close()
