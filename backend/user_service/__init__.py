"""User management service: validated CRUD over a relational users table."""

__version__ = "0.1.0"
