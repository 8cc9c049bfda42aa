"""
Kernel layer: data models, identity services and application errors.

No FastAPI imports below this package; the HTTP layer lives in src.api.
"""

from src.kernel.models import User
from src.kernel.errors import (
    AppError,
    ValidationFailed,
    Unauthorized,
    NotFound,
    Conflict,
    InternalError,
)

__all__ = [
    "User",
    "AppError",
    "ValidationFailed",
    "Unauthorized",
    "NotFound",
    "Conflict",
    "InternalError",
]
