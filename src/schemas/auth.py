"""
Authentication schemas.
"""

from typing import Optional

from pydantic import EmailStr, Field, field_validator

from src.schemas.common import CamelModel, RequestModel
from src.schemas.user import UserResponse, strip_name


def validate_password_strength(v: str) -> str:
    if not any(c.isupper() for c in v):
        raise ValueError("Password must contain at least one uppercase letter")
    if not any(c.islower() for c in v):
        raise ValueError("Password must contain at least one lowercase letter")
    if not any(c.isdigit() for c in v):
        raise ValueError("Password must contain at least one digit")
    return v


class RegisterRequest(RequestModel):
    """User registration request."""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    first_name: str = Field(..., min_length=2, max_length=100)
    last_name: str = Field(..., min_length=2, max_length=100)

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def strip_names(cls, v):
        return strip_name(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return validate_password_strength(v)


class LoginRequest(RequestModel):
    """User login request."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class RefreshTokenRequest(RequestModel):
    """Refresh token sent in the body instead of the Authorization header."""

    refresh_token: Optional[str] = None


class LoginResponse(CamelModel):
    """User plus issued token pair."""

    user: UserResponse
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


class AccessTokenResponse(CamelModel):
    """Newly minted access token."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
