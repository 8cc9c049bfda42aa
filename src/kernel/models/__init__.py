"""
Kernel data models.
"""

from src.kernel.models.base import Base, TimestampMixin, generate_uuid
from src.kernel.models.user import User

__all__ = [
    "Base",
    "TimestampMixin",
    "generate_uuid",
    "User",
]
