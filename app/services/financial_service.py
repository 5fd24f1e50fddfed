"""Financial query service.

Raw season rows come straight from the store.  Anything with YoY or CAGR is
recomputed from those rows on every call; nothing derived is persisted.
"""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.financial import Financial
from app.schemas.common import Paginated, Pagination
from app.schemas.financial import ClubMetricsSummary, FinancialMetric, FinancialRecord
from app.services import club_service
from app.services.currency import BASE_CURRENCY, convert_amount
from app.services.metrics import compute_cagr_from_metrics, derive_yoy, scale_metric


async def get_club_financials(
    session: AsyncSession,
    club_id: int,
    page: int | None = 1,
    limit: int | None = None,
) -> Paginated[FinancialRecord]:
    """Return one page of a club's stored seasons, oldest first."""
    page, limit = club_service.clamp_page(page, limit, settings.default_page_size_financials)

    stmt = (
        select(Financial)
        .where(Financial.club_id == club_id)
        .order_by(Financial.year)
        .limit(limit)
        .offset((page - 1) * limit)
    )
    result = await session.execute(stmt)
    rows = result.scalars().all()

    count_stmt = select(func.count()).select_from(Financial).where(Financial.club_id == club_id)
    total = (await session.execute(count_stmt)).scalar_one()

    return Paginated[FinancialRecord](
        data=[FinancialRecord.model_validate(r) for r in rows],
        pagination=Pagination.build(page, limit, total),
    )


async def fetch_club_financial_records(session: AsyncSession, club_id: int) -> list[Financial]:
    """Every stored season for a club, in no guaranteed order."""
    stmt = select(Financial).where(Financial.club_id == club_id)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_club_financial_by_year(
    session: AsyncSession, club_id: int, year: int
) -> FinancialRecord | None:
    stmt = select(Financial).where(Financial.club_id == club_id, Financial.year == year).limit(1)
    row = (await session.execute(stmt)).scalar_one_or_none()
    if row is None:
        return None
    return FinancialRecord.model_validate(row)


async def get_club_financials_with_yoy(
    session: AsyncSession, club_id: int
) -> list[FinancialMetric]:
    """Year-ordered metric series with YoY, in the base currency."""
    records = await fetch_club_financial_records(session, club_id)
    return derive_yoy(records)


async def get_club_metrics_summary(
    session: AsyncSession,
    club_id: int,
    currency: str | None = None,
) -> ClubMetricsSummary | None:
    """Derived series plus revenue CAGR, amounts converted for display.

    CAGR is computed on base-currency figures; a fixed-rate conversion does
    not change it.
    """
    club = await club_service.get_club_by_id(session, club_id)
    if club is None:
        return None

    currency = currency or BASE_CURRENCY
    metrics = await get_club_financials_with_yoy(session, club_id)
    revenue_cagr = compute_cagr_from_metrics(metrics)

    factor = convert_amount(1.0, BASE_CURRENCY, currency)
    if factor != 1.0:
        metrics = [scale_metric(m, factor) for m in metrics]

    return ClubMetricsSummary(
        club_id=club.id,
        club_name=club.name,
        currency=currency,
        years_covered=len(metrics),
        metrics=metrics,
        revenue_cagr=round(revenue_cagr, 6) if revenue_cagr is not None else None,
    )
