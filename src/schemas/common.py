"""
Common schema types used across the API.

JSON keys are camelCase on the wire; snake_case is accepted on input too.
"""

from datetime import datetime, timezone
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for API schemas: camelCase aliases, built from ORM objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RequestModel(CamelModel):
    """Base for request bodies: unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope for every successful response."""

    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None


class ErrorResponse(CamelModel):
    """Envelope for every error response."""

    success: bool = False
    status_code: int
    message: List[str]
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str
    database: str = "connected"
