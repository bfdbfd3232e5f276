"""User management endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from technotes.core.dependencies import get_store
from technotes.db.store import DocumentStore
from technotes.schemas.user import MessageResponse, UserCreate, UserDelete, UserRead, UserUpdate
from technotes.services import users as user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserRead])
async def list_users(store: DocumentStore = Depends(get_store)) -> list[UserRead]:
    users = await user_service.list_users(store)
    return [UserRead.model_validate(user) for user in users]


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_user(payload: UserCreate, store: DocumentStore = Depends(get_store)) -> MessageResponse:
    message = await user_service.create_user(store, payload.username, payload.password, payload.roles)
    return MessageResponse(message=message)


@router.patch("", response_model=MessageResponse)
async def update_user(payload: UserUpdate, store: DocumentStore = Depends(get_store)) -> MessageResponse:
    message = await user_service.update_user(
        store,
        payload.id,
        payload.username,
        payload.roles,
        payload.active,
        password=payload.password,
    )
    return MessageResponse(message=message)


@router.delete("", response_model=MessageResponse)
async def delete_user(payload: UserDelete, store: DocumentStore = Depends(get_store)) -> MessageResponse:
    message = await user_service.delete_user(store, payload.id)
    return MessageResponse(message=message)
