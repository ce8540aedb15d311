"""Database connection and session management.

Provides async database engine and session factory for PostgreSQL.
"""

from contextlib import asynccontextmanager, contextmanager
from typing import AsyncGenerator, Iterator

from sqlalchemy import ColumnElement, func
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from huddle.config import Settings
from huddle.domain.error import TransientStoreError


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


@asynccontextmanager
async def get_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Open a short-lived session that commits on success.

    Used by repositories whose writes must not share the request
    transaction (and may run concurrently with it).

    Args:
        session_factory: Factory for creating sessions

    Yields:
        Database session
    """
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Translate connectivity failures into ``TransientStoreError``.

    Lost connections and unavailable servers are retryable; every other
    database error propagates unchanged.
    """
    try:
        yield
    except (OperationalError, InterfaceError) as e:
        raise TransientStoreError(f"{operation} failed: {e.orig}") from e
    except DBAPIError as e:
        if e.connection_invalidated:
            raise TransientStoreError(f"{operation} failed: connection lost") from e
        raise
    except (ConnectionError, TimeoutError) as e:
        raise TransientStoreError(f"{operation} failed: {e}") from e


def floored_increment(column: ColumnElement[int], delta: int) -> ColumnElement[int]:
    """``GREATEST(column + delta, 0)``, evaluated atomically by the database."""
    return func.greatest(column + delta, 0)
