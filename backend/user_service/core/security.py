"""Password hashing capability used by the user use cases."""
from __future__ import annotations

from typing import Protocol

from passlib.context import CryptContext


class PasswordHashing(Protocol):
    """Anything able to hash a plaintext password and verify it later."""

    def hash(self, password: str) -> str: ...

    def verify(self, password: str, hashed: str) -> bool: ...


class PasswordHasher:
    """Hash and verify user passwords using Argon2id.

    The cost parameters are fixed by the crypt context and are not exposed to
    callers of the use cases.
    """

    def __init__(self, schemes: list[str] | None = None) -> None:
        self._context = CryptContext(schemes=schemes or ["argon2"], deprecated="auto")

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        return self._context.verify(password, hashed)
