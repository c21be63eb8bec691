"""Async SQLAlchemy database setup."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.exc import InterfaceError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.config import settings
from app.core.db_retry import is_transient_connection_error

logger = logging.getLogger(__name__)

engine = create_async_engine(
    settings.database_url,
    pool_size=settings.database_pool_size,
    max_overflow=settings.database_max_overflow,
    echo=settings.database_echo,
    pool_pre_ping=True,
    pool_recycle=300,
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


def _has_pending_state(session: AsyncSession) -> bool:
    return bool(session.new or session.dirty or session.deleted)


async def _close_read_only_transaction(session: AsyncSession, *, context: str) -> None:
    # Commit, not rollback: rollback expires loaded campaigns still in use.
    if not session.in_transaction() or _has_pending_state(session):
        return
    try:
        await session.commit()
    except Exception as exc:
        if is_transient_connection_error(exc):
            logger.debug(
                "Ignoring transient commit failure for read-only transaction",
                extra={"context": context},
            )
            return
        raise


async def _finalize_session(session: AsyncSession, *, commit_on_exit: bool, context: str) -> None:
    if commit_on_exit:
        await session.commit()
        return

    if _has_pending_state(session):
        raise RuntimeError(
            "Session has pending ORM changes but commit_on_exit=False. "
            "Commit explicitly or use commit_on_exit=True."
        )
    await _close_read_only_transaction(session, context=context)


async def _rollback_quietly(session: AsyncSession) -> None:
    try:
        await session.rollback()
    except Exception:
        logger.warning("Rollback also failed (connection likely closed)")


@asynccontextmanager
async def _managed_session(*, commit_on_exit: bool, context: str) -> AsyncGenerator[AsyncSession, None]:
    async with async_session_maker() as session:
        try:
            yield session
            await _finalize_session(session, commit_on_exit=commit_on_exit, context=context)
        except InterfaceError as exc:
            if not session.in_transaction() and not _has_pending_state(session):
                logger.debug("Session connection already closed during cleanup, ignoring")
                return
            logger.warning(
                "Database interface error with active transaction, rolling back",
                extra={"context": context, "error": repr(exc)},
            )
            await _rollback_quietly(session)
            raise
        except Exception as exc:
            logger.warning(
                "Database session error, rolling back",
                extra={"context": context, "error": repr(exc)},
            )
            await _rollback_quietly(session)
            raise


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session for dependency injection."""
    async with _managed_session(commit_on_exit=True, context="get_session") as session:
        yield session


@asynccontextmanager
async def get_session_context(
    *,
    commit_on_exit: bool = True,
) -> AsyncGenerator[AsyncSession, None]:
    """Get database session as context manager for scripts and batch jobs."""
    async with _managed_session(
        commit_on_exit=commit_on_exit,
        context="get_session_context",
    ) as session:
        yield session


async def init_db() -> None:
    """Create the campaigns schema if it does not exist yet."""
    logger.info("Initializing database tables")
    from app.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Close database connections."""
    logger.info("Closing database connections")
    await engine.dispose()
