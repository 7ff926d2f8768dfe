"""SQLAlchemy models exposed for table creation and imports."""
from .user import (
    EMAIL_PATTERN,
    User,
    UserRole,
    validate_email,
    validate_name,
    validate_password,
    validate_role,
)

__all__ = [
    "EMAIL_PATTERN",
    "User",
    "UserRole",
    "validate_email",
    "validate_name",
    "validate_password",
    "validate_role",
]
