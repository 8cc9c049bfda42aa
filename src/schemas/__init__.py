"""
Pydantic schemas for API request/response validation.
"""

from src.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    RefreshTokenRequest,
    LoginResponse,
    AccessTokenResponse,
)
from src.schemas.user import (
    UserResponse,
    UserUpdate,
    UserListResponse,
)
from src.schemas.common import (
    ApiResponse,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    # Auth
    "RegisterRequest",
    "LoginRequest",
    "RefreshTokenRequest",
    "LoginResponse",
    "AccessTokenResponse",
    # User
    "UserResponse",
    "UserUpdate",
    "UserListResponse",
    # Common
    "ApiResponse",
    "ErrorResponse",
    "HealthResponse",
]
