"""Answer single-fact revenue questions ("What was X's revenue in 2022?").

The pipeline is linear and stops at the first failure:

1. pull a 20xx year out of the question;
2. pull a club-name fragment out using ``CLUB_NAME_RULES``;
3. resolve the fragment to a club;
4. find that season in the club's derived YoY series;
5. render the answer sentence in the requested currency.

Matching is literal pattern matching, not language understanding.  Failures
are raised as :class:`QueryError` subclasses; nothing is retried:
the same input always fails the same way.
"""

from __future__ import annotations

import logging
import re

from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas.ask import AskAnswer
from app.schemas.financial import FinancialMetric
from app.services import club_service, financial_service
from app.services.currency import (
    BASE_CURRENCY,
    convert_amount,
    currency_symbol,
    format_amount,
    format_percentage,
)
from app.services.metrics import derive_yoy

logger = logging.getLogger("app.ask")

# Only 2000-2099 is recognised; the dashboard covers recent seasons.
# ASCII semantics: only 0-9 digits, and CJK text next to the year is a boundary.
YEAR_PATTERN = re.compile(r"\b(20\d{2})\b", re.ASCII)

# Ranked rules, evaluated top to bottom; the first match wins.  The last rule
# is a catch-all that matches almost any text containing " revenue", so the
# more specific phrasings must stay above it.
CLUB_NAME_RULES: list[tuple[str, re.Pattern[str]]] = [
    ("what_was", re.compile(r"what was ([^']+)'s revenue", re.IGNORECASE)),
    ("tell_me_about", re.compile(r"tell me about ([^']+)'s revenue", re.IGNORECASE)),
    ("name_revenue", re.compile(r"([^']+) revenue", re.IGNORECASE)),
]

NO_PRIOR_YEAR = "N/A (no prior year data)"


class QueryError(Exception):
    """Base class for user-facing ask failures."""

    code = "QUERY_ERROR"
    status = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingYear(QueryError):
    code = "MISSING_YEAR"

    def __init__(self) -> None:
        super().__init__("Could not find a year in your question. Please include a year like 2022.")


class MissingClubName(QueryError):
    code = "MISSING_CLUB_NAME"

    def __init__(self) -> None:
        super().__init__("Could not identify the club name. Please mention the club clearly.")


class ClubNotFound(QueryError):
    code = "CLUB_NOT_FOUND"
    status = 404

    def __init__(self, name: str) -> None:
        super().__init__(f'Could not find club "{name}" in the database.')
        self.name = name


class YearDataNotFound(QueryError):
    code = "YEAR_DATA_NOT_FOUND"
    status = 404

    def __init__(self, club: str, year: int) -> None:
        super().__init__(f"No financial data found for {club} in {year}.")
        self.club = club
        self.year = year


class YoYCalculationUnavailable(QueryError):
    """A stored season went missing from its own derived series."""

    code = "YOY_UNAVAILABLE"
    status = 500

    def __init__(self) -> None:
        super().__init__("Could not calculate YoY change.")


def extract_year(question: str) -> int:
    match = YEAR_PATTERN.search(question)
    if match is None:
        raise MissingYear()
    return int(match.group(1))


def match_club_name(question: str) -> tuple[str, str] | None:
    """Return ``(rule_name, fragment)`` for the first matching rule."""
    for rule_name, pattern in CLUB_NAME_RULES:
        match = pattern.search(question)
        if match and match.group(1):
            return rule_name, match.group(1).strip()
    return None


def extract_club_name(question: str) -> str:
    matched = match_club_name(question)
    if matched is None or not matched[1]:
        raise MissingClubName()
    return matched[1]


def format_answer(club_name: str, metric: FinancialMetric, currency: str) -> str:
    revenue = convert_amount(metric.revenue, BASE_CURRENCY, currency)
    if metric.yoy_percentage is None:
        yoy_text = NO_PRIOR_YEAR
    else:
        yoy_text = format_percentage(metric.yoy_percentage)
    return (
        f"{club_name}'s revenue in {metric.year} was "
        f"{currency_symbol(currency)}{format_amount(revenue)}M ({currency}). "
        f"The year-over-year change was {yoy_text}."
    )


async def answer_question(
    session: AsyncSession,
    question: str,
    currency: str | None = None,
) -> AskAnswer:
    """Run the full pipeline for one question.

    Raises:
        QueryError: one of the subclasses above, carrying a user-facing message.
    """
    currency = currency or BASE_CURRENCY

    year = extract_year(question)
    fragment = extract_club_name(question)
    logger.debug("ask year=%d fragment=%r", year, fragment)

    club = await club_service.get_club_by_name(session, fragment)
    if club is None:
        raise ClubNotFound(fragment)

    records = await financial_service.fetch_club_financial_records(session, club.id)
    if not any(r.year == year for r in records):
        raise YearDataNotFound(club.name, year)

    metric = next((m for m in derive_yoy(records) if m.year == year), None)
    if metric is None:
        raise YoYCalculationUnavailable()

    return AskAnswer(
        answer=format_answer(club.name, metric, currency),
        club=club.name,
        year=year,
        currency=currency,
        revenue=convert_amount(metric.revenue, BASE_CURRENCY, currency),
        yoy_percentage=metric.yoy_percentage,
    )
