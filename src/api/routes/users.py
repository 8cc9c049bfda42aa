"""
User endpoints. All require a bearer access token.
"""

import uuid

from fastapi import APIRouter, Query

from src.api.deps import CurrentUser, DbSession
from src.schemas.common import ApiResponse
from src.schemas.user import UserListResponse, UserResponse, UserUpdate
from src.kernel.identity.user_service import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, UserService

router = APIRouter()


@router.get("", response_model=ApiResponse[UserListResponse])
async def list_users(
    user: CurrentUser,
    db: DbSession,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
):
    """List users, newest first."""
    result = await UserService(db).find_all(page=page, limit=limit)

    return ApiResponse[UserListResponse](
        data=UserListResponse(
            users=[UserResponse.model_validate(u) for u in result.users],
            total=result.total,
            page=result.page,
            limit=result.limit,
            total_pages=result.total_pages,
        ),
    )


# Declared before /{user_id} so "profile" is not parsed as an ID
@router.get("/profile", response_model=ApiResponse[UserResponse])
async def get_profile(user: CurrentUser):
    """Get current user's profile."""
    return ApiResponse[UserResponse](data=UserResponse.model_validate(user))


@router.patch("/profile", response_model=ApiResponse[UserResponse])
async def update_profile(data: UserUpdate, user: CurrentUser, db: DbSession):
    """Update current user's profile."""
    updated = await UserService(db).update(
        user.id,
        first_name=data.first_name,
        last_name=data.last_name,
        email=data.email,
    )
    return ApiResponse[UserResponse](data=UserResponse.model_validate(updated))


@router.get("/{user_id}", response_model=ApiResponse[UserResponse])
async def get_user(user_id: uuid.UUID, user: CurrentUser, db: DbSession):
    """Get a user by ID."""
    found = await UserService(db).find_one(user_id)
    return ApiResponse[UserResponse](data=UserResponse.model_validate(found))


@router.patch("/{user_id}", response_model=ApiResponse[UserResponse])
async def update_user(
    user_id: uuid.UUID,
    data: UserUpdate,
    user: CurrentUser,
    db: DbSession,
):
    """Update a user by ID."""
    updated = await UserService(db).update(
        user_id,
        first_name=data.first_name,
        last_name=data.last_name,
        email=data.email,
    )
    return ApiResponse[UserResponse](data=UserResponse.model_validate(updated))


@router.delete("/{user_id}", response_model=ApiResponse[None])
async def delete_user(user_id: uuid.UUID, user: CurrentUser, db: DbSession):
    """Delete a user by ID."""
    await UserService(db).remove(user_id)
    return ApiResponse[None](message="User deleted successfully")
