"""Response envelope shared by every REST endpoint."""
from datetime import UTC, datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Envelope wrapping the payload of every API response."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str
    data: T | None = None
    status_code: int = Field(..., alias="statusCode")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def ok(cls, message: str, data: T | None = None, status_code: int = 200) -> "APIResponse[T]":
        """Build a successful response."""
        return cls(success=True, message=message, data=data, status_code=status_code)

    @classmethod
    def error(cls, message: str, status_code: int) -> "APIResponse[T]":
        """Build an error response with no payload."""
        return cls(success=False, message=message, data=None, status_code=status_code)
