"""Pydantic schemas for user operations."""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, StrictBool

UPDATABLE_FIELDS = ("name", "email", "role", "is_active")


class UserCreate(BaseModel):
    """Input for creating a user.

    Fields default to ``None`` so a missing value reaches the field rules in
    :mod:`user_service.models.user` and fails as a ``ValidationError`` naming
    the field, the same as an empty one. Only wrong JSON types are rejected by
    the schema itself.
    """

    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = None


class UserRead(BaseModel):
    """Projection of a user without the password hash."""

    id: uuid.UUID
    name: str
    email: str
    role: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserUpdate(BaseModel):
    """Partial update. A field is present only when the caller supplied it."""

    name: str | None = None
    email: str | None = None
    role: str | None = None
    # Strict so "yes" or 1 is a type error instead of silently becoming True
    is_active: StrictBool | None = None

    def present_fields(self) -> list[str]:
        return [name for name in UPDATABLE_FIELDS if name in self.model_fields_set]

    def has_changes(self) -> bool:
        return bool(self.present_fields())
