"""
FastAPI dependencies for authentication and database sessions.
"""

from typing import Annotated, Optional

from fastapi import Body, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db
from src.kernel.models.user import User
from src.kernel.identity.auth_service import AuthService
from src.kernel.identity.jwt import RefreshTokenPayload, verify_access_token, verify_refresh_token
from src.schemas.auth import RefreshTokenRequest


# Security scheme
security = HTTPBearer(auto_error=False)

DbSession = Annotated[AsyncSession, Depends(get_db)]
BearerCredentials = Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(credentials: BearerCredentials, db: DbSession) -> User:
    """Resolve the user behind a bearer access token or raise 401."""
    if not credentials:
        raise _unauthorized("Not authenticated")

    payload = verify_access_token(credentials.credentials)
    if not payload:
        raise _unauthorized("Invalid or expired token")

    user = await AuthService(db).resolve_subject(payload.sub)
    if not user:
        raise _unauthorized("Invalid or expired token")

    return user


async def get_refresh_token_payload(
    credentials: BearerCredentials,
    data: Annotated[Optional[RefreshTokenRequest], Body()] = None,
) -> RefreshTokenPayload:
    """
    Verify the refresh token from the Authorization header.

    Falls back to a ``refreshToken`` body field when no header is sent.
    """
    if credentials:
        token = credentials.credentials
    elif data and data.refresh_token:
        token = data.refresh_token
    else:
        raise _unauthorized("Refresh token is required")

    payload = verify_refresh_token(token)
    if not payload:
        raise _unauthorized("Invalid or expired refresh token")
    return payload


CurrentUser = Annotated[User, Depends(get_current_user)]
RefreshPayload = Annotated[RefreshTokenPayload, Depends(get_refresh_token_payload)]
