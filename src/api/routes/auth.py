"""
Authentication endpoints.
"""

from fastapi import APIRouter, status

from src.api.deps import DbSession, RefreshPayload
from src.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    LoginResponse,
    AccessTokenResponse,
)
from src.schemas.common import ApiResponse
from src.schemas.user import UserResponse
from src.kernel.identity.auth_service import AuthService

router = APIRouter()


@router.post(
    "/register",
    response_model=ApiResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
async def register(data: RegisterRequest, db: DbSession):
    """
    Register a new user account.

    Does not log the user in; call /auth/login afterwards.
    """
    user = await AuthService(db).register(
        email=data.email,
        password=data.password,
        first_name=data.first_name,
        last_name=data.last_name,
    )
    return ApiResponse[UserResponse](
        data=UserResponse.model_validate(user),
        message="User registered successfully",
    )


@router.post("/login", response_model=ApiResponse[LoginResponse])
async def login(data: LoginRequest, db: DbSession):
    """Authenticate user and return an access/refresh token pair."""
    result = await AuthService(db).login(email=data.email, password=data.password)

    return ApiResponse[LoginResponse](
        data=LoginResponse(
            user=UserResponse.model_validate(result.user),
            access_token=result.tokens.access_token,
            refresh_token=result.tokens.refresh_token,
            token_type=result.tokens.token_type,
            expires_in=result.tokens.expires_in,
        ),
        message="Login successful",
    )


@router.post("/refresh", response_model=ApiResponse[AccessTokenResponse])
async def refresh(payload: RefreshPayload, db: DbSession):
    """
    Issue a new access token.

    Send the refresh token as ``Authorization: Bearer <refresh_token>``.
    The refresh token is not rotated.
    """
    result = await AuthService(db).refresh_token(payload.sub)

    return ApiResponse[AccessTokenResponse](
        data=AccessTokenResponse(
            access_token=result.access_token,
            token_type=result.token_type,
            expires_in=result.expires_in,
        ),
    )
