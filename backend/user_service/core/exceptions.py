"""Error kinds raised by the user service layers."""
from __future__ import annotations

from typing import Any


class UserServiceError(Exception):
    """Base class for all user service errors."""


class ValidationError(UserServiceError):
    """A field value is empty, malformed, out of range or outside its enum."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        self.message = message
        super().__init__(message)


class ConflictError(UserServiceError):
    """The write would duplicate a value that must stay unique."""

    def __init__(self, message: str = "email already in use") -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(UserServiceError):
    """No row matches the requested identifier."""

    def __init__(self, resource: str, identifier: Any) -> None:
        self.resource = resource
        self.identifier = identifier
        self.message = f"{resource} with id {identifier} not found"
        super().__init__(self.message)


class UserNotFoundError(NotFoundError):
    def __init__(self, identifier: Any) -> None:
        super().__init__("user", identifier)


class StorageError(UserServiceError):
    """The backing store failed: connectivity, constraint or driver error."""

    def __init__(self, operation: str, identifier: Any = None, message: str | None = None) -> None:
        self.operation = operation
        self.identifier = identifier
        detail = f"storage error during {operation}"
        if identifier is not None:
            detail = f"{detail} ({identifier})"
        if message:
            detail = f"{detail}: {message}"
        self.message = detail
        super().__init__(detail)


class StorageTimeoutError(StorageError):
    """The round trip did not finish before its deadline and was aborted."""

    def __init__(self, operation: str, identifier: Any = None, timeout: float | None = None) -> None:
        self.timeout = timeout
        super().__init__(operation, identifier, f"deadline of {timeout}s exceeded")


class ConfigError(UserServiceError):
    """Required configuration is missing or invalid."""
