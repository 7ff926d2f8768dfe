"""Translate service errors into HTTP responses."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from user_service.core.exceptions import (
    ConflictError,
    NotFoundError,
    StorageError,
    StorageTimeoutError,
    UserServiceError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Checked in order, so subclasses come before their bases
STATUS_BY_ERROR: list[tuple[type[UserServiceError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (StorageTimeoutError, status.HTTP_504_GATEWAY_TIMEOUT),
    (StorageError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_for(exc: UserServiceError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def user_service_error_handler(request: Request, exc: UserServiceError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        # The repository already logged storage failures with their traceback
        if not isinstance(exc, StorageError):
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        content: dict[str, str] = {"detail": "internal storage error"}
        if isinstance(exc, StorageTimeoutError):
            content = {"detail": "storage deadline exceeded"}
    else:
        content = {"detail": str(exc)}
        if isinstance(exc, ValidationError) and exc.field:
            content["field"] = exc.field
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UserServiceError, user_service_error_handler)
