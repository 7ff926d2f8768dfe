"""API router aggregator."""
from fastapi import APIRouter

from user_service.api.routes import users

api_router = APIRouter(prefix="/api")
api_router.include_router(users.router)

__all__ = ["api_router"]
