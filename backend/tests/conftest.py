"""Shared fixtures: a throwaway SQLite database and a fast password hasher."""
import pytest

from user_service.core.config import Settings
from user_service.db.session import build_engine, build_session_factory, create_tables
from user_service.repositories.users import UserRepository
from user_service.schemas.user import UserCreate


class FakeHasher:
    """Reversible stand-in for the argon2 hasher so tests stay fast."""

    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


@pytest.fixture
def settings(tmp_path):
    return Settings(DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'users.db'}", db_timeout_seconds=5.0)


@pytest.fixture
async def engine(settings):
    engine = build_engine(settings)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def repository(engine, settings):
    return UserRepository(build_session_factory(engine), default_timeout=settings.db_timeout_seconds)


@pytest.fixture
def hasher():
    return FakeHasher()


@pytest.fixture
def alice():
    return UserCreate(name="Alice Doe", email="alice@example.com", password="secretpw", role="common")
