"""
User endpoints for API v1.

Thin HTTP layer over ``UserService``: path and body parsing is done by
FastAPI, the rules live in the service, and any ``ApiError`` raised
there is rendered by the handlers in ``app.api.error_handlers``.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from user_directory_api.app.api.deps import get_user_service
from user_directory_api.app.schemas.user import UserCreate, UserResponse, UsersResponse, UserUpdate
from user_directory_api.app.services.user_service import UserService

router = APIRouter()


@router.get("", response_model=UsersResponse)
async def list_users(service: UserService = Depends(get_user_service)) -> UsersResponse:
    """Return every user and the total count."""
    return await service.list_users()


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: UUID, service: UserService = Depends(get_user_service)) -> UserResponse:
    user = await service.get_user(user_id)
    return UserResponse(user=user)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserCreate,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Register a new user.

    Returns 400 for an empty name or malformed email and 409 when the
    (case‑insensitive) email is already registered.
    """
    user = await service.create_user(payload)
    return UserResponse(user=user)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    payload: UserUpdate,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Update a user's name and/or email.

    Fields missing from the body are left unchanged.
    """
    user = await service.update_user(user_id, payload)
    return UserResponse(user=user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: UUID, service: UserService = Depends(get_user_service)) -> None:
    await service.delete_user(user_id)
    return None
