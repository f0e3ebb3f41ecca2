"""
Database connection and session management.

Uses SQLite with aiosqlite for async support. A single Database handle is
created at startup, shared read-only by requests and disposed at shutdown.
"""

import os
import logging
from typing import AsyncGenerator, Optional
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from stockwatch.db.models import Base

logger = logging.getLogger(__name__)

# Default database location: <backend>/data/stockwatch.db
DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "data")


def sqlite_url(sqlite_path: Optional[str] = None) -> str:
    """Build the aiosqlite URL, creating the default data directory if needed."""
    if sqlite_path == ":memory:":
        return "sqlite+aiosqlite:///:memory:"
    if not sqlite_path:
        os.makedirs(DATA_DIR, exist_ok=True)
        sqlite_path = os.path.join(DATA_DIR, "stockwatch.db")
    return f"sqlite+aiosqlite:///{sqlite_path}"


class Database:
    """Owns the async engine and session factory."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        # Note: SQLite requires check_same_thread=False for async
        self.engine: AsyncEngine = create_async_engine(
            url,
            echo=echo,  # Set to True for SQL debugging
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,  # Recommended for SQLite
        )
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )

    @classmethod
    def from_path(cls, sqlite_path: Optional[str] = None, echo: bool = False) -> "Database":
        return cls(sqlite_url(sqlite_path), echo=echo)

    async def init(self) -> None:
        """
        Initialize the database - create all tables.
        Called on application startup.
        """
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info(f"Database initialized at: {self.url}")
        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            raise

    async def close(self) -> None:
        """
        Close database connections.
        Called on application shutdown.
        """
        await self.engine.dispose()
        logger.info("Database connections closed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Transactional session: commits on success, rolls back on error.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
