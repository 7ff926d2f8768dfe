"""Persistence gateway for user rows.

Each method opens its own session and performs a single statement against the
``users`` table, so no transaction ever spans two calls. Every call is bounded
by a deadline; when it expires the in-flight round trip is cancelled and
:class:`StorageTimeoutError` is raised.
"""
from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from user_service.core.exceptions import ConflictError, StorageError, StorageTimeoutError, UserNotFoundError
from user_service.models.user import User

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNIQUE_VIOLATION_SQLSTATE = "23505"


def mask_email(email: str) -> str:
    """Reduce an address to its first character and domain for log lines."""
    local, _, domain = email.partition("@")
    if not domain:
        return "***"
    return f"{local[:1]}***@{domain}"


def _is_unique_violation(exc: IntegrityError) -> bool:
    if getattr(exc.orig, "sqlstate", None) == UNIQUE_VIOLATION_SQLSTATE:
        return True
    return "unique" in str(exc.orig).lower()


class UserRepository:
    """Data access for :class:`User` rows. Holds no business rules."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        default_timeout: float | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._default_timeout = default_timeout

    async def _run(
        self,
        operation: str,
        identifier: Any,
        call: Callable[[], Awaitable[T]],
        timeout: float | None,
    ) -> T:
        limit = timeout if timeout is not None else self._default_timeout
        try:
            return await asyncio.wait_for(call(), timeout=limit)
        except asyncio.TimeoutError as exc:
            logger.warning("User %s timed out after %ss (%s)", operation, limit, identifier)
            raise StorageTimeoutError(operation, identifier, limit) from exc
        except IntegrityError as exc:
            if _is_unique_violation(exc):
                logger.warning("User %s rejected by unique constraint (%s)", operation, identifier)
                raise ConflictError("email already in use") from exc
            logger.exception("User %s violated a constraint (%s)", operation, identifier)
            raise StorageError(operation, identifier, str(exc.orig)) from exc
        except (SQLAlchemyError, OSError) as exc:
            # Refused or dropped connections come out of the driver as OSError
            logger.exception("User %s failed (%s)", operation, identifier)
            raise StorageError(operation, identifier, str(exc)) from exc

    async def create(self, user: User, *, timeout: float | None = None) -> None:
        """Insert every column of ``user``. The password must already be hashed."""

        async def _insert() -> None:
            async with self._session_factory() as session:
                session.add(user)
                await session.commit()

        await self._run("create", user.id, _insert, timeout)

    async def list_all(self, *, timeout: float | None = None) -> list[User]:
        async def _select() -> list[User]:
            async with self._session_factory() as session:
                result = await session.execute(select(User))
                return list(result.scalars().all())

        return await self._run("list", None, _select, timeout)

    async def get_by_id(self, user_id: uuid.UUID, *, timeout: float | None = None) -> User:
        async def _select() -> User | None:
            async with self._session_factory() as session:
                return await session.get(User, user_id)

        user = await self._run("get", user_id, _select, timeout)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def get_by_email(self, email: str, *, timeout: float | None = None) -> User:
        async def _select() -> User | None:
            async with self._session_factory() as session:
                result = await session.execute(select(User).where(User.email == email))
                return result.scalar_one_or_none()

        user = await self._run("get_by_email", mask_email(email), _select, timeout)
        if user is None:
            raise UserNotFoundError(email)
        return user

    async def update(self, user: User, *, timeout: float | None = None) -> None:
        """Overwrite the full row identified by ``user.id``."""

        stmt = (
            update(User)
            .where(User.id == user.id)
            .values(
                name=user.name,
                email=user.email,
                password=user.password,
                role=user.role,
                is_active=user.is_active,
                updated_at=user.updated_at,
            )
            .execution_options(synchronize_session=False)
        )

        async def _update() -> int:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                await session.commit()
                return result.rowcount

        if await self._run("update", user.id, _update, timeout) == 0:
            raise UserNotFoundError(user.id)

    async def delete(self, user_id: uuid.UUID, *, timeout: float | None = None) -> None:
        stmt = delete(User).where(User.id == user_id).execution_options(synchronize_session=False)

        async def _delete() -> int:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                await session.commit()
                return result.rowcount

        if await self._run("delete", user_id, _delete, timeout) == 0:
            raise UserNotFoundError(user_id)
