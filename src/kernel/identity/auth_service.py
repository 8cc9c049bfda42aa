"""
Authentication flows: register, login, refresh.
"""

import uuid
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.kernel.errors import Conflict, Unauthorized
from src.kernel.identity.jwt import JWTManager, TokenPair, get_jwt_manager
from src.kernel.identity.password import PasswordHasher
from src.kernel.identity.user_repository import (
    EMAIL_EXISTS_MESSAGE,
    UserRepository,
    normalize_email,
)
from src.kernel.models.user import User
from src.logging_config import get_logger

logger = get_logger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"
INVALID_REFRESH_TOKEN_MESSAGE = "Invalid refresh token"


@dataclass
class LoginResult:
    """Authenticated user plus freshly issued tokens."""

    user: User
    tokens: TokenPair


@dataclass
class AccessTokenResult:
    access_token: str
    expires_in: int
    token_type: str = "bearer"


class AuthService:
    """
    Composes the user repository, password hasher and JWT manager.

    Usage:
        auth = AuthService(session)
        user = await auth.register("a@x.com", "Abc12345!", "Ann", "Bell")
        result = await auth.login("a@x.com", "Abc12345!")
    """

    def __init__(
        self,
        session: AsyncSession,
        jwt_manager: Optional[JWTManager] = None,
        users: Optional[UserRepository] = None,
    ):
        self.users = users or UserRepository(session)
        self.jwt_manager = jwt_manager or get_jwt_manager()

    async def register(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
    ) -> User:
        """
        Register a new user. No tokens are issued.

        Raises:
            Conflict: If the email is already registered
        """
        email = normalize_email(email)
        if await self.users.find_by_email(email):
            raise Conflict(EMAIL_EXISTS_MESSAGE)

        user = User(
            email=email,
            password_hash=PasswordHasher.hash(password),
            first_name=first_name,
            last_name=last_name,
        )
        # A racing insert for the same email surfaces here as Conflict
        user = await self.users.insert(user)

        logger.info("User registered", extra={"user_id": str(user.id)})
        return user

    async def login(self, email: str, password: str) -> LoginResult:
        """
        Check credentials and issue an access/refresh token pair.

        Raises:
            Unauthorized: If the email is unknown or the password is wrong
                (same message for both)
        """
        user = await self.users.find_by_email(email)

        if user is None or not PasswordHasher.verify(password, user.password_hash):
            logger.info("Failed login attempt")
            raise Unauthorized(INVALID_CREDENTIALS_MESSAGE)

        tokens = self.jwt_manager.create_token_pair(user_id=user.id, email=user.email)
        logger.info("User logged in", extra={"user_id": str(user.id)})
        return LoginResult(user=user, tokens=tokens)

    async def refresh_token(self, subject_id: str) -> AccessTokenResult:
        """
        Mint a new access token for the subject of a verified refresh token.

        The refresh token itself stays valid until it expires.

        Raises:
            Unauthorized: If the subject no longer exists
        """
        user = await self.resolve_subject(subject_id)
        if user is None:
            raise Unauthorized(INVALID_REFRESH_TOKEN_MESSAGE)

        access_token, _ = self.jwt_manager.create_access_token(user.id, user.email)
        return AccessTokenResult(
            access_token=access_token,
            expires_in=self.jwt_manager.access_token_expire_seconds,
        )

    async def resolve_subject(self, subject_id: str) -> Optional[User]:
        """Look up the user a token's ``sub`` claim points at."""
        try:
            user_id = uuid.UUID(str(subject_id))
        except ValueError:
            return None
        return await self.users.find_by_id(user_id)
