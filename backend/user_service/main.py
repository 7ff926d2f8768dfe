"""FastAPI application factory."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from user_service.api import api_router
from user_service.api.errors import register_exception_handlers
from user_service.core.config import Settings, get_settings
from user_service.core.security import PasswordHasher, PasswordHashing
from user_service.db.session import build_engine, build_session_factory, create_tables, ping
from user_service.repositories.users import UserRepository

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, hasher: PasswordHashing | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = build_engine(settings)
        try:
            # Startup fails here when the store is unreachable
            await ping(engine, timeout=settings.db_timeout_seconds)
            if settings.create_tables:
                await create_tables(engine)
            app.state.engine = engine
            app.state.user_repository = UserRepository(
                build_session_factory(engine), default_timeout=settings.db_timeout_seconds
            )
            app.state.password_hasher = hasher or PasswordHasher()
            logger.info("%s ready", settings.app_name)
            yield
        finally:
            await engine.dispose()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    register_exception_handlers(app)
    app.include_router(api_router)

    @app.get("/healthz")
    async def health() -> dict[str, str]:
        await ping(app.state.engine, timeout=settings.db_timeout_seconds)
        return {"status": "healthy"}

    return app
