"""
Identity Core - password hashing, tokens and user management.
"""

from src.kernel.identity.password import PasswordHasher, verify_password, hash_password
from src.kernel.identity.jwt import (
    JWTManager,
    TokenPair,
    AccessTokenPayload,
    RefreshTokenPayload,
    get_jwt_manager,
    verify_access_token,
    verify_refresh_token,
)
from src.kernel.identity.user_repository import UserRepository
from src.kernel.identity.auth_service import AuthService, LoginResult, AccessTokenResult
from src.kernel.identity.user_service import UserService, UserPage

__all__ = [
    "PasswordHasher",
    "verify_password",
    "hash_password",
    "JWTManager",
    "TokenPair",
    "AccessTokenPayload",
    "RefreshTokenPayload",
    "get_jwt_manager",
    "verify_access_token",
    "verify_refresh_token",
    "UserRepository",
    "AuthService",
    "LoginResult",
    "AccessTokenResult",
    "UserService",
    "UserPage",
]
