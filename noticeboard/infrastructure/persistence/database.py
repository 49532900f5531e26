"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

Schema is managed by Alembic migrations (alembic upgrade head).

Engine and session factory are created lazily on first use (get_db /
get_db_transactional) so import does not trigger Settings validation.

Transient driver failures (connection refused, pool exhausted, statement
timeout, dropped connection) surface as StoreUnavailableException so the
HTTP layer answers 503 with retryable=true.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import exc as sa_exc
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from noticeboard.core.config import get_settings
from noticeboard.domain.exceptions import StoreUnavailableException

logger = logging.getLogger(__name__)

# Set by _ensure_engine() on first use; avoids get_settings() at import time.
engine: Any = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None

_TRANSIENT_ERRORS: tuple[type[BaseException], ...] = (
    sa_exc.OperationalError,
    sa_exc.InterfaceError,
    sa_exc.TimeoutError,
    ConnectionError,
    TimeoutError,
)


def _ensure_engine() -> None:
    """Create engine and AsyncSessionLocal on first use."""
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return
    settings = get_settings()
    engine_args: dict[str, Any] = {
        "echo": settings.database_echo,
        "pool_pre_ping": True,
    }
    connect_args: dict[str, Any] = {}
    if "postgresql" in settings.database_url:
        engine_args["pool_size"] = (
            settings.db_pool_size if settings.db_pool_size is not None else 10
        )
        engine_args["max_overflow"] = (
            settings.db_max_overflow if settings.db_max_overflow is not None else 20
        )
        engine_args["pool_timeout"] = (
            settings.db_pool_timeout if settings.db_pool_timeout is not None else 30
        )
        engine_args["pool_recycle"] = 3600
        connect_args["command_timeout"] = (
            settings.db_command_timeout if settings.db_command_timeout is not None else 30
        )
    engine = create_async_engine(
        settings.database_url,
        connect_args=connect_args,
        **engine_args,
    )
    AsyncSessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


@asynccontextmanager
async def translate_store_errors() -> AsyncIterator[None]:
    """Re-raise transient driver errors as StoreUnavailableException."""
    try:
        yield
    except StoreUnavailableException:
        raise
    except _TRANSIENT_ERRORS as e:
        logger.warning("Data store unavailable: %s", type(e).__name__)
        raise StoreUnavailableException(type(e).__name__) from e


def _session_factory() -> async_sessionmaker[AsyncSession]:
    _ensure_engine()
    assert AsyncSessionLocal is not None
    return AsyncSessionLocal


async def get_db():
    """Database session dependency for read operations.

    Does not commit; use get_db_transactional for writes.
    Yields a session and closes it on exit.
    """
    factory = _session_factory()
    async with translate_store_errors():
        async with factory() as session:
            yield session


async def get_db_transactional():
    """Database session dependency for write operations.

    Begins a transaction, commits on success, rolls back on exception.
    Use for POST, PUT, PATCH, DELETE endpoints.
    """
    factory = _session_factory()
    async with translate_store_errors():
        async with factory() as session:
            async with session.begin():
                yield session


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """Transactional session for scripts run outside a request."""
    factory = _session_factory()
    async with translate_store_errors():
        async with factory() as session:
            async with session.begin():
                yield session


async def dispose_engine() -> None:
    """Close pooled connections (called on shutdown)."""
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
    engine = None
    AsyncSessionLocal = None
