"""
database/session.py

Owns the SQLAlchemy asynchronous engine and session factory.

- Database: process-wide resource created at startup and disposed at shutdown
- get_db: FastAPI dependency yielding one session per request
- atomic: commits a block of writes together or rolls all of them back
"""

import logging
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from workhive.core.exceptions import APIError, InternalError
from workhive.database.base import Base

logger = logging.getLogger(__name__)


# -----------------------------------------------------
# Engine + Session Factory Lifecycle
# -----------------------------------------------------
class Database:
    """Async engine and session factory with an explicit lifecycle."""

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, echo=echo)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,  # Prevents auto-expiration of ORM objects after commit
        )

    async def create_all(self) -> None:
        """Create every table registered on the declarative metadata."""
        # Registers all models on Base.metadata
        import workhive.database.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("[DB] Tables created")

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("[DB] Engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as db:
            try:
                yield db
            except Exception:
                await db.rollback()
                raise


# -----------------------------------------------------
# Dependency: Get Async DB Session
# -----------------------------------------------------
async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency function for FastAPI endpoints to provide an async DB session.
    Yields a single session per request, rolls back on exceptions, and closes cleanly.
    """
    database: Database = request.app.state.database
    async with database.session() as db:
        yield db


# -----------------------------------------------------
# Unit of Work
# -----------------------------------------------------
@asynccontextmanager
async def atomic(db: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Commit every write made inside the block in one transaction.

    Domain errors roll the transaction back and propagate unchanged. Store
    failures are logged with their traceback and surface as an opaque
    InternalError.
    """
    try:
        yield db
        await db.commit()
    except APIError:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"[DB] Transaction failed and was rolled back: {e}", exc_info=True)
        raise InternalError() from e
    except BaseException:
        await db.rollback()
        raise
