"""
Async SQLAlchemy engine, session factory, and DB lifecycle.

``Database`` is an explicit store handle: the API server receives one at
composition time, opens it at startup and closes it at shutdown. All data
access goes through ``Database.session()``, which yields an ``AsyncSession``
that commits on clean exit and rolls back on error.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from echonote.core.config import get_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


class Database:
    """Owns the async engine and session factory for the transcript store.

    Args:
        url: Database URL. Uses ``settings.database_url`` if not provided.
        echo: Log every SQL statement (debugging aid).
    """

    def __init__(self, url: str | None = None, echo: bool = False) -> None:
        self._url = url or get_settings().database_url
        self._echo = echo
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def url(self) -> str:
        return self._url

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        """The live engine; raises ``RuntimeError`` before ``open()``."""
        if self._engine is None:
            raise RuntimeError("Database is not open")
        return self._engine

    def _ensure_sqlite_dir(self) -> None:
        """Create the parent directory of a file-backed SQLite database."""
        url = make_url(self._url)
        if not url.drivername.startswith("sqlite"):
            return
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    async def open(self) -> None:
        """Create the engine and all tables. Calling it twice is a no-op."""
        if self._engine is not None:
            return
        self._ensure_sqlite_dir()
        self._engine = create_async_engine(self._url, echo=self._echo)
        self._session_factory = async_sessionmaker(self._engine, expire_on_commit=False)
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Transcript store opened (%s)", make_url(self._url).drivername)

    async def close(self) -> None:
        """Dispose the engine. Safe to call when already closed."""
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Transcript store closed")
        self._engine = None
        self._session_factory = None

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield an ``AsyncSession`` that commits on success, rolls back on error."""
        if self._session_factory is None:
            raise RuntimeError("Database is not open")
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
