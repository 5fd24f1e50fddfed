"""Pydantic response schemas."""

from app.schemas.ask import AskAnswer, AskRequest
from app.schemas.club import ClubBrief, ClubProfile
from app.schemas.common import ErrorDetail, Meta, Paginated, Pagination, ToolResponse
from app.schemas.financial import ClubMetricsSummary, FinancialMetric, FinancialRecord

__all__ = [
    "ToolResponse",
    "ErrorDetail",
    "Meta",
    "Paginated",
    "Pagination",
    "ClubBrief",
    "ClubProfile",
    "FinancialRecord",
    "FinancialMetric",
    "ClubMetricsSummary",
    "AskRequest",
    "AskAnswer",
]
