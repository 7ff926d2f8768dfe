"""Process entry point: check configuration, verify the database, serve."""
from __future__ import annotations

import asyncio
import logging
import sys

from uvicorn import run

from user_service.core.config import Settings, get_settings
from user_service.core.exceptions import ConfigError, StorageError
from user_service.db.session import build_engine, ping
from user_service.main import create_app

logger = logging.getLogger("user_service")


async def verify_database(settings: Settings) -> None:
    engine = build_engine(settings)
    try:
        await ping(engine, timeout=settings.db_timeout_seconds)
    finally:
        await engine.dispose()


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        settings = get_settings()
    except ConfigError as exc:
        logger.critical("%s", exc)
        return 1
    logging.getLogger().setLevel(settings.log_level)

    try:
        asyncio.run(verify_database(settings))
    except (ConfigError, StorageError) as exc:
        logger.critical("failed to initialize database: %s", exc)
        return 1

    run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
