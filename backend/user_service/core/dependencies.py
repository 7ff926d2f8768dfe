"""Reusable dependencies for FastAPI routes."""
from __future__ import annotations

from fastapi import Depends, Request

from user_service.core.security import PasswordHashing
from user_service.repositories.users import UserRepository
from user_service.services.users import CreateUser, DeleteUser, GetUser, ListUsers, UpdateUser


def get_repository(request: Request) -> UserRepository:
    return request.app.state.user_repository


def get_password_hasher(request: Request) -> PasswordHashing:
    return request.app.state.password_hasher


def get_create_user(
    repository: UserRepository = Depends(get_repository),
    hasher: PasswordHashing = Depends(get_password_hasher),
) -> CreateUser:
    return CreateUser(repository, hasher)


def get_update_user(repository: UserRepository = Depends(get_repository)) -> UpdateUser:
    return UpdateUser(repository)


def get_get_user(repository: UserRepository = Depends(get_repository)) -> GetUser:
    return GetUser(repository)


def get_list_users(repository: UserRepository = Depends(get_repository)) -> ListUsers:
    return ListUsers(repository)


def get_delete_user(repository: UserRepository = Depends(get_repository)) -> DeleteUser:
    return DeleteUser(repository)
