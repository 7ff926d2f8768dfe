"""User use cases: create, update, read and delete."""
from __future__ import annotations

import logging
import uuid

from user_service.core.exceptions import ConflictError, UserNotFoundError, ValidationError
from user_service.core.security import PasswordHashing
from user_service.models.user import (
    User,
    UserRole,
    utcnow,
    validate_email,
    validate_name,
    validate_password,
    validate_role,
)
from user_service.repositories.users import UserRepository
from user_service.schemas.user import UserCreate, UserRead, UserUpdate

logger = logging.getLogger(__name__)


class CreateUser:
    """Validate input, enforce email uniqueness, hash the password and persist."""

    def __init__(self, repository: UserRepository, hasher: PasswordHashing) -> None:
        self.repository = repository
        self.hasher = hasher

    async def execute(self, data: UserCreate) -> UserRead:
        validate_name(data.name)
        validate_email(data.email)
        validate_password(data.password)
        validate_role(data.role)

        # Not atomic with the insert below; the unique index on email backs it up.
        try:
            await self.repository.get_by_email(data.email)
        except UserNotFoundError:
            pass
        else:
            raise ConflictError("email already in use")

        now = utcnow()
        user = User(
            id=uuid.uuid4(),
            name=data.name,
            email=data.email,
            password=self.hasher.hash(data.password),
            role=UserRole(data.role).value,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        await self.repository.create(user)
        logger.info("Created user %s with role %s", user.id, user.role)
        return UserRead.model_validate(user)


class UpdateUser:
    """Apply only the supplied fields to an existing user, validating each."""

    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository

    async def execute(self, user_id: uuid.UUID, data: UserUpdate) -> None:
        fields = data.present_fields()
        if not fields:
            raise ValidationError("no fields to update")

        user = await self.repository.get_by_id(user_id)

        if "name" in fields:
            validate_name(data.name)
            user.name = data.name
        if "email" in fields:
            validate_email(data.email)
            user.email = data.email
        if "role" in fields:
            validate_role(data.role)
            user.role = UserRole(data.role).value
        if "is_active" in fields:
            if not isinstance(data.is_active, bool):
                raise ValidationError("is_active must be a boolean", field="is_active")
            user.is_active = data.is_active

        user.updated_at = utcnow()
        await self.repository.update(user)
        logger.info("Updated user %s (%s)", user_id, ", ".join(fields))


class GetUser:
    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository

    async def execute(self, user_id: uuid.UUID) -> UserRead:
        return UserRead.model_validate(await self.repository.get_by_id(user_id))


class ListUsers:
    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository

    async def execute(self) -> list[UserRead]:
        users = await self.repository.list_all()
        return [UserRead.model_validate(user) for user in users]


class DeleteUser:
    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository

    async def execute(self, user_id: uuid.UUID) -> None:
        await self.repository.delete(user_id)
        logger.info("Deleted user %s", user_id)
