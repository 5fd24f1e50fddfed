"""Shared ToolResponse envelope, error and pagination schemas."""

from __future__ import annotations

import math
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ErrorDetail(BaseModel):
    """Structured error returned when a tool fails."""

    error_code: str
    message: str
    hint: str | None = None


class Meta(BaseModel):
    """Execution metadata attached to every response."""

    execution_ms: float = Field(..., description="Wall-clock milliseconds")
    row_count: int | None = Field(None, description="Number of rows returned")


class ToolResponse(BaseModel):
    """Standard envelope for every tool result."""

    tool: str
    ok: bool
    data: Any | None = None
    error: ErrorDetail | None = None
    meta: Meta


class Pagination(BaseModel):
    """Page/limit pagination block."""

    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, total_pages=math.ceil(total / limit))


class Paginated(BaseModel, Generic[T]):
    """One page of rows plus the pagination block."""

    data: list[T]
    pagination: Pagination
