"""Database engine, session factory and liveness helpers."""
from __future__ import annotations

import asyncio
import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from user_service import models  # noqa: F401  registers tables on Base.metadata
from user_service.core.config import Settings
from user_service.core.exceptions import ConfigError, StorageError, StorageTimeoutError
from user_service.db.base import Base

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> AsyncEngine:
    try:
        return create_async_engine(
            settings.database_url, future=True, echo=settings.db_echo, pool_pre_ping=True
        )
    except (SQLAlchemyError, ImportError) as exc:
        # The URL may carry credentials, so only the error type is reported
        raise ConfigError(f"DATABASE_URL is not usable with an async driver ({type(exc).__name__})") from exc


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def ping(engine: AsyncEngine, timeout: float | None = None) -> None:
    """Verify the store is reachable with a single round trip."""

    async def _select_one() -> None:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    try:
        await asyncio.wait_for(_select_one(), timeout=timeout)
    except asyncio.TimeoutError as exc:
        logger.warning("Database ping timed out after %ss", timeout)
        raise StorageTimeoutError("ping", timeout=timeout) from exc
    except (SQLAlchemyError, OSError) as exc:
        logger.exception("Database ping failed")
        raise StorageError("ping", message=str(exc)) from exc
    logger.info("Database ping succeeded")


async def create_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
