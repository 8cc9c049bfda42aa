"""
Application errors.

Services raise these to express failures the caller can act on. The
exception handler registered in src.main renders them into the standard
error envelope using ``status_code`` and ``message``.
"""

from typing import List, Union


class AppError(Exception):
    """Base class for errors that map to an HTTP status."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Union[str, List[str], None] = None):
        self.message = message or self.default_message
        super().__init__(self.message if isinstance(self.message, str) else "; ".join(self.message))

    @property
    def messages(self) -> List[str]:
        return list(self.message) if isinstance(self.message, list) else [self.message]


class ValidationFailed(AppError):
    """Malformed or missing input."""

    status_code = 400
    default_message = "Bad request"


class Unauthorized(AppError):
    """Bad credentials, or a missing/invalid/expired token."""

    status_code = 401
    default_message = "Unauthorized"


class NotFound(AppError):
    """Requested entity does not exist."""

    status_code = 404
    default_message = "Not found"


class Conflict(AppError):
    """Entity with the same unique key already exists."""

    status_code = 409
    default_message = "Conflict"


class InternalError(AppError):
    """Unexpected failure."""
