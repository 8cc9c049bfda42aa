"""
JWT token management for authentication.

Access and refresh tokens are signed with different secrets and carry a
``type`` claim, so neither kind can stand in for the other.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from pydantic import BaseModel

from src.config import get_settings

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class AccessTokenPayload(BaseModel):
    """JWT access token payload."""

    sub: str  # User ID
    email: str
    exp: datetime
    iat: datetime
    type: str = ACCESS_TOKEN_TYPE


class RefreshTokenPayload(BaseModel):
    """JWT refresh token payload."""

    sub: str  # User ID
    exp: datetime
    iat: datetime
    type: str = REFRESH_TOKEN_TYPE


class TokenPair(BaseModel):
    """Access and refresh token pair."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int  # Seconds until access token expires


class JWTManager:
    """
    JWT token creation and verification.

    Handles access tokens (short-lived) and refresh tokens (long-lived).
    Holds no state beyond its configuration.
    """

    def __init__(
        self,
        access_secret: Optional[str] = None,
        refresh_secret: Optional[str] = None,
        algorithm: Optional[str] = None,
        access_token_expire_seconds: Optional[int] = None,
        refresh_token_expire_seconds: Optional[int] = None,
    ):
        settings = get_settings()
        self.access_secret = (
            settings.jwt_access_secret if access_secret is None else access_secret
        )
        self.refresh_secret = (
            settings.jwt_refresh_secret if refresh_secret is None else refresh_secret
        )
        self.algorithm = settings.jwt_algorithm if algorithm is None else algorithm
        self.access_token_expire_seconds = (
            settings.access_token_expire_seconds
            if access_token_expire_seconds is None
            else access_token_expire_seconds
        )
        self.refresh_token_expire_seconds = (
            settings.refresh_token_expire_seconds
            if refresh_token_expire_seconds is None
            else refresh_token_expire_seconds
        )

    def create_access_token(
        self,
        user_id: uuid.UUID,
        email: str,
        expires_delta: Optional[timedelta] = None,
    ) -> tuple[str, datetime]:
        """
        Create a new access token.

        Args:
            user_id: User's unique identifier
            email: User's email
            expires_delta: Optional custom lifetime

        Returns:
            Tuple of (token, expiration_datetime)
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(seconds=self.access_token_expire_seconds))

        payload = {
            "sub": str(user_id),
            "email": email,
            "type": ACCESS_TOKEN_TYPE,
            "iat": now,
            "exp": expire,
        }

        token = jwt.encode(payload, self.access_secret, algorithm=self.algorithm)
        return token, expire

    def create_refresh_token(
        self,
        user_id: uuid.UUID,
        expires_delta: Optional[timedelta] = None,
    ) -> tuple[str, datetime]:
        """
        Create a new refresh token.

        Args:
            user_id: User's unique identifier
            expires_delta: Optional custom lifetime

        Returns:
            Tuple of (token, expiration_datetime)
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(seconds=self.refresh_token_expire_seconds))

        payload = {
            "sub": str(user_id),
            "type": REFRESH_TOKEN_TYPE,
            "iat": now,
            "exp": expire,
        }

        token = jwt.encode(payload, self.refresh_secret, algorithm=self.algorithm)
        return token, expire

    def create_token_pair(self, user_id: uuid.UUID, email: str) -> TokenPair:
        """Create both access and refresh tokens for a user."""
        access_token, _ = self.create_access_token(user_id, email)
        refresh_token, _ = self.create_refresh_token(user_id)

        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=self.access_token_expire_seconds,
        )

    def _decode(self, token: str, secret: str, expected_type: str) -> Optional[dict]:
        try:
            payload = jwt.decode(token, secret, algorithms=[self.algorithm])
        except JWTError:
            return None

        if payload.get("type") != expected_type or not payload.get("sub"):
            return None
        return payload

    def verify_access_token(self, token: str) -> Optional[AccessTokenPayload]:
        """
        Verify and decode an access token.

        Returns:
            AccessTokenPayload if valid, None on bad signature, expiry or wrong type
        """
        payload = self._decode(token, self.access_secret, ACCESS_TOKEN_TYPE)
        if payload is None or "email" not in payload:
            return None

        return AccessTokenPayload(
            sub=payload["sub"],
            email=payload["email"],
            exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
        )

    def verify_refresh_token(self, token: str) -> Optional[RefreshTokenPayload]:
        """
        Verify and decode a refresh token.

        Returns:
            RefreshTokenPayload if valid, None on bad signature, expiry or wrong type
        """
        payload = self._decode(token, self.refresh_secret, REFRESH_TOKEN_TYPE)
        if payload is None:
            return None

        return RefreshTokenPayload(
            sub=payload["sub"],
            exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
        )


# Default manager instance
_jwt_manager: Optional[JWTManager] = None


def get_jwt_manager() -> JWTManager:
    """Get or create the default JWT manager."""
    global _jwt_manager
    if _jwt_manager is None:
        _jwt_manager = JWTManager()
    return _jwt_manager


def verify_access_token(token: str) -> Optional[AccessTokenPayload]:
    """Verify an access token with the default manager."""
    return get_jwt_manager().verify_access_token(token)


def verify_refresh_token(token: str) -> Optional[RefreshTokenPayload]:
    """Verify a refresh token with the default manager."""
    return get_jwt_manager().verify_refresh_token(token)
