"""Shared pytest fixtures – uses async SQLite for fast in-memory tests."""

from __future__ import annotations

from unittest.mock import patch

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.middleware.rate_limit import rate_limiter
from app.models import Base, Club, Financial

# name -> {year: (revenue, ebitda, wages)}, amounts in GBP millions
SEED_CLUBS: dict[str, dict[int, tuple]] = {
    "Manchester United": {
        2021: (494.0, 120.5, 323.0),
        2022: (583.0, 145.2, 384.0),
        2023: (648.4, 158.0, 331.0),
    },
    "Real Madrid": {
        2021: (640.7, 170.0, 370.0),
        2022: (713.8, 192.0, 411.0),
        2023: (831.0, 225.0, 454.0),
    },
    "FC Barcelona": {
        2021: (631.0, 55.0, 560.0),
        2022: (582.0, 48.0, 470.0),
        2023: (800.0, 135.0, 520.0),
    },
    # Gap season and a missing wage figure
    "Manchester City": {
        2019: (535.2, 120.0, None),
        2022: (613.0, 160.0, 354.0),
    },
}


@pytest.fixture(autouse=True)
def _clear_rate_limits():
    """Tool handlers share one limiter; start every test with empty windows."""
    rate_limiter._requests.clear()
    yield
    rate_limiter._requests.clear()


@pytest_asyncio.fixture
async def engine():
    """Async SQLite engine, one in-memory database per test."""
    eng = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    """Empty session; changes are rolled back."""
    async with session_factory() as sess:
        async with sess.begin():
            yield sess


@pytest_asyncio.fixture
async def seeded_session(session_factory):
    """Session pre-loaded with the sample clubs."""
    async with session_factory() as sess:
        for name, seasons in SEED_CLUBS.items():
            club = Club(name=name, country="England" if "Manchester" in name else "Spain")
            sess.add(club)
            await sess.flush()
            for year, (revenue, ebitda, wages) in seasons.items():
                sess.add(
                    Financial(
                        club_id=club.id,
                        year=year,
                        revenue=revenue,
                        ebitda=ebitda,
                        wages=wages,
                    )
                )
        await sess.commit()
        yield sess


@pytest_asyncio.fixture
async def club_ids(seeded_session) -> dict[str, int]:
    """Map of seeded club name -> id."""
    from sqlalchemy import select

    result = await seeded_session.execute(select(Club.id, Club.name))
    return {row.name: row.id for row in result.all()}


@pytest.fixture
def tool_sessions(session_factory, seeded_session):
    """Point the MCP tool handlers at the seeded test database."""
    with patch("app.mcp.tools.async_session_factory", session_factory):
        yield session_factory
