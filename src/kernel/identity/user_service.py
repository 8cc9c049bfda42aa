"""
User management operations: paginated listing, lookup, update, delete.
"""

import math
import uuid
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.kernel.errors import Conflict, NotFound
from src.kernel.identity.user_repository import (
    EMAIL_EXISTS_MESSAGE,
    UserRepository,
    normalize_email,
)
from src.kernel.models.user import User
from src.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass
class UserPage:
    users: List[User]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


class UserService:
    """Service for user CRUD."""

    def __init__(self, session: AsyncSession, users: Optional[UserRepository] = None):
        self.users = users or UserRepository(session)

    async def find_all(self, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> UserPage:
        """List users, newest first."""
        page = max(page, 1)
        limit = min(max(limit, 1), MAX_PAGE_SIZE)

        users, total = await self.users.list_page(offset=(page - 1) * limit, limit=limit)
        return UserPage(users=list(users), total=total, page=page, limit=limit)

    async def find_one(self, user_id: uuid.UUID) -> User:
        """
        Get a user by ID.

        Raises:
            NotFound: If no such user exists
        """
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise NotFound(f"User with ID {user_id} not found")
        return user

    async def update(
        self,
        user_id: uuid.UUID,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> User:
        """
        Update a user's profile fields. Fields left as None are unchanged.

        Raises:
            NotFound: If no such user exists
            Conflict: If the new email belongs to another user
        """
        user = await self.find_one(user_id)

        if first_name is not None:
            user.first_name = first_name
        if last_name is not None:
            user.last_name = last_name
        if email is not None:
            new_email = normalize_email(email)
            if new_email != user.email:
                existing = await self.users.find_by_email(new_email)
                if existing and existing.id != user.id:
                    raise Conflict(EMAIL_EXISTS_MESSAGE)
                user.email = new_email

        return await self.users.update(user)

    async def remove(self, user_id: uuid.UUID) -> None:
        """
        Delete a user.

        Raises:
            NotFound: If no such user exists
        """
        user = await self.find_one(user_id)
        await self.users.delete(user)
        logger.info("User deleted", extra={"user_id": str(user_id)})
