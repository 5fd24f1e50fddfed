"""Ask-endpoint Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AskRequest(BaseModel):
    """Free-text revenue question with an optional display currency."""

    question: str = Field(..., min_length=1)
    currency: str | None = Field(None, description="Currency code, defaults to the base currency")


class AskAnswer(BaseModel):
    """Resolved answer plus the facts it was built from."""

    answer: str
    club: str
    year: int
    currency: str
    revenue: float | None = None
    yoy_percentage: float | None = None
