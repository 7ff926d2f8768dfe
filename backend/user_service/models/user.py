"""Database model and field rules for service users."""
from __future__ import annotations

import re
import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Boolean, DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from user_service.core.exceptions import ValidationError
from user_service.db.base import Base

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 100
PASSWORD_MIN_LENGTH = 8

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")


class UserRole(str, Enum):
    ADMIN = "admin"
    COMMON = "common"


VALID_ROLES = frozenset(role.value for role in UserRole)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """Application user with hashed password and role.

    ``password`` only ever holds the hash produced by the configured hasher.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=UserRole.COMMON.value)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    def __repr__(self) -> str:
        return f"User(id={self.id!s}, email={self.email!r}, role={self.role!r})"

    def validate(self) -> None:
        validate_name(self.name)
        validate_email(self.email)
        validate_role(self.role)

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def activate(self) -> None:
        self.is_active = True
        self.updated_at = utcnow()

    def deactivate(self) -> None:
        self.is_active = False
        self.updated_at = utcnow()


def validate_name(name: str | None) -> None:
    if not name:
        raise ValidationError("name cannot be empty", field="name")
    if not isinstance(name, str) or not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        raise ValidationError(
            f"name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters", field="name"
        )


def validate_email(email: str | None) -> None:
    if not email:
        raise ValidationError("email cannot be empty", field="email")
    if not isinstance(email, str) or not EMAIL_PATTERN.fullmatch(email):
        raise ValidationError("invalid email format", field="email")


def validate_password(password: str | None) -> None:
    if not password:
        raise ValidationError("password cannot be empty", field="password")
    if not isinstance(password, str) or len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(
            f"password must be at least {PASSWORD_MIN_LENGTH} characters", field="password"
        )


def validate_role(role: str | None) -> None:
    # str-valued enum members compare and hash like their values
    if role not in VALID_ROLES:
        raise ValidationError("invalid role: must be 'admin' or 'common'", field="role")
