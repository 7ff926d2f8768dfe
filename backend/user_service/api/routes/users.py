"""User CRUD endpoints."""
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Response, status

from user_service.core.dependencies import (
    get_create_user,
    get_delete_user,
    get_get_user,
    get_list_users,
    get_update_user,
)
from user_service.schemas.user import UserCreate, UserRead, UserUpdate
from user_service.services.users import CreateUser, DeleteUser, GetUser, ListUsers, UpdateUser

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(payload: UserCreate, use_case: CreateUser = Depends(get_create_user)) -> UserRead:
    return await use_case.execute(payload)


@router.get("/", response_model=list[UserRead])
async def list_users(use_case: ListUsers = Depends(get_list_users)) -> list[UserRead]:
    return await use_case.execute()


@router.get("/{user_id}", response_model=UserRead)
async def get_user(user_id: uuid.UUID, use_case: GetUser = Depends(get_get_user)) -> UserRead:
    return await use_case.execute(user_id)


@router.patch("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_user(
    user_id: uuid.UUID,
    payload: UserUpdate,
    use_case: UpdateUser = Depends(get_update_user),
) -> Response:
    await use_case.execute(user_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: uuid.UUID, use_case: DeleteUser = Depends(get_delete_user)) -> Response:
    await use_case.execute(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
