"""Club query service."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.club import Club
from app.schemas.club import ClubBrief, ClubProfile
from app.schemas.common import Paginated, Pagination


def clamp_page(page: int | None, limit: int | None, default_limit: int) -> tuple[int, int]:
    """Normalise page/limit: page >= 1, 1 <= limit <= max_page_size."""
    page = max(int(page or 1), 1)
    limit = min(max(int(limit or default_limit), 1), settings.max_page_size)
    return page, limit


def _escape_like(fragment: str) -> str:
    return fragment.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


async def list_clubs(
    session: AsyncSession,
    page: int | None = 1,
    limit: int | None = None,
) -> Paginated[ClubBrief]:
    """Return one page of clubs ordered by name, with the total count."""
    page, limit = clamp_page(page, limit, settings.default_page_size_clubs)

    stmt = select(Club).order_by(Club.name).limit(limit).offset((page - 1) * limit)
    result = await session.execute(stmt)
    rows = result.scalars().all()

    total = (await session.execute(select(func.count()).select_from(Club))).scalar_one()

    return Paginated[ClubBrief](
        data=[ClubBrief.model_validate(r) for r in rows],
        pagination=Pagination.build(page, limit, total),
    )


async def get_club_by_id(session: AsyncSession, club_id: int) -> ClubProfile | None:
    """Return full profile for a single club id."""
    row = await session.get(Club, club_id)
    if row is None:
        return None
    return ClubProfile.model_validate(row)


async def get_club_by_name(session: AsyncSession, fragment: str) -> ClubProfile | None:
    """Resolve a name fragment to a club (case-insensitive).

    An exact name match wins.  Otherwise the first club, by name, whose name
    contains the fragment is returned, so "Barcelona" finds "FC Barcelona".
    LIKE wildcards typed by the user are matched literally.
    """
    fragment = fragment.strip()
    if not fragment:
        return None

    exact_stmt = select(Club).where(func.lower(Club.name) == fragment.lower()).limit(1)
    row = (await session.execute(exact_stmt)).scalar_one_or_none()

    if row is None:
        pattern = f"%{_escape_like(fragment)}%"
        partial_stmt = (
            select(Club)
            .where(Club.name.ilike(pattern, escape="\\"))
            .order_by(Club.name)
            .limit(1)
        )
        row = (await session.execute(partial_stmt)).scalar_one_or_none()

    if row is None:
        return None
    return ClubProfile.model_validate(row)
