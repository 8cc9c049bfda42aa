"""
User model - the credential store.
"""

import uuid

from sqlalchemy import CheckConstraint, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.kernel.models.base import Base, TimestampMixin, generate_uuid


class User(Base, TimestampMixin):
    """User account model."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("length(first_name) >= 2", name="CHK_users_first_name_length"),
        CheckConstraint("length(last_name) >= 2", name="CHK_users_last_name_length"),
        Index("idx_users_created_at", "created_at"),
        Index("idx_users_full_name", "first_name", "last_name"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=generate_uuid,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    first_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    last_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<User {self.email}>"
