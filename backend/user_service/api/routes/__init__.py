"""Route modules for the user service API."""
from . import users

__all__ = ["users"]
