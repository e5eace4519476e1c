"""Uniform response envelope applied to every API response."""

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, Field
from users_common.query import Pagination

T = TypeVar("T")


class ErrorDetail(BaseModel):
    """A single field-level violation."""

    field: str = Field(..., description="Offending field")
    message: str = Field(..., description="What is wrong with it")


class SuccessResponse(BaseModel, Generic[T]):
    """Successful outcome wrapping a payload."""

    success: Literal[True] = True
    data: T


class PaginatedResponse(SuccessResponse[list[T]], Generic[T]):
    """Successful list outcome with a pagination descriptor."""

    pagination: Pagination


class ErrorResponse(BaseModel):
    """Failed outcome with a short message and optional violations."""

    success: Literal[False] = False
    error: str
    details: list[ErrorDetail] | None = None


def error_body(message: str, details: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    """Build the JSON body for a failed outcome."""
    return ErrorResponse(error=message, details=details).model_dump(exclude_none=True)
