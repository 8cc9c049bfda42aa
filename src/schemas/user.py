"""
User schemas.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field, field_validator

from src.schemas.common import CamelModel, RequestModel


def strip_name(v):
    """Trim surrounding whitespace so length limits apply to the stored value."""
    return v.strip() if isinstance(v, str) else v


class UserResponse(CamelModel):
    """Public view of a user. Never includes the password digest."""

    id: uuid.UUID
    email: str
    first_name: str
    last_name: str
    created_at: datetime
    updated_at: datetime


class UserUpdate(RequestModel):
    """Partial profile update."""

    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, min_length=2, max_length=100)
    last_name: Optional[str] = Field(None, min_length=2, max_length=100)

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def strip_names(cls, v):
        return strip_name(v)


class UserListResponse(CamelModel):
    """One page of users."""

    users: List[UserResponse]
    total: int
    page: int
    limit: int
    total_pages: int
