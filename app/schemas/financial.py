"""Financial-related Pydantic schemas."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict

# Raw amounts arrive as Decimal from the store, or as text such as "1,234,567".
RawAmount = Decimal | str | float | None


class FinancialRecord(BaseModel):
    """One stored club-season row, amounts untouched."""

    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    club_id: int
    year: int
    revenue: RawAmount = None
    revenue_yoy: RawAmount = None
    ebitda: RawAmount = None
    wages: RawAmount = None
    amortization: RawAmount = None
    other_expenses: RawAmount = None
    matchday_revenue: RawAmount = None
    commercial_revenue: RawAmount = None
    broadcasting_revenue: RawAmount = None


class FinancialMetric(BaseModel):
    """A season's figures annotated with year-over-year change.

    Built fresh on every derivation and never mutated.
    """

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    club_id: int
    year: int
    revenue: float
    ebitda: float
    wages: float | None = None
    yoy_change: float | None = None
    yoy_percentage: float | None = None


class ClubMetricsSummary(BaseModel):
    """Derived season series for one club plus revenue CAGR."""

    club_id: int
    club_name: str
    currency: str
    years_covered: int
    metrics: list[FinancialMetric]
    revenue_cagr: float | None = None
