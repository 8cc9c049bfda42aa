"""
Persistence for User records.

The only module that issues SQL against the users table. Callers get
User objects back; turning them into responses without the digest is
done by the response schemas.
"""

import uuid
from typing import Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.kernel.errors import Conflict
from src.kernel.models.user import User

EMAIL_EXISTS_MESSAGE = "Email already exists"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_email_conflict(exc: IntegrityError) -> bool:
    """True when the unique index on users.email rejected the row."""
    detail = str(exc.orig).lower()
    return "unique" in detail and "email" in detail


class UserRepository:
    """Users table access over an AsyncSession."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        """Get a user by ID."""
        return await self.session.get(User, user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Get a user by email (case-insensitive)."""
        query = select(User).where(User.email == normalize_email(email))
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def insert(self, user: User) -> User:
        """
        Persist a new user.

        Raises:
            Conflict: If the unique constraint on email rejects the row
        """
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            if is_email_conflict(e):
                raise Conflict(EMAIL_EXISTS_MESSAGE) from e
            raise
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """
        Flush pending changes on ``user`` and reload server-set columns.

        Raises:
            Conflict: If a changed email collides with another row
        """
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            if is_email_conflict(e):
                raise Conflict(EMAIL_EXISTS_MESSAGE) from e
            raise
        await self.session.refresh(user)
        return user

    async def delete(self, user: User) -> None:
        """Remove a user."""
        await self.session.delete(user)
        await self.session.flush()

    async def list_page(self, offset: int, limit: int) -> tuple[Sequence[User], int]:
        """
        Return one page of users, newest first, and the total count.
        """
        total = await self.session.scalar(select(func.count(User.id)))
        query = (
            select(User)
            .order_by(User.created_at.desc(), User.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return result.scalars().all(), total or 0
