"""MCP tool handlers – the bridge between MCP protocol and service layer."""

from __future__ import annotations

import logging
import time

from app.db import async_session_factory
from app.middleware.rate_limit import rate_limiter, tool_limits
from app.schemas.common import ErrorDetail, Meta, ToolResponse
from app.services import ask_service, club_service, financial_service
from app.services.currency import BASE_CURRENCY, CURRENCIES, is_supported

logger = logging.getLogger("mcp.tools")

COMPARE_METRICS = {"revenue", "ebitda", "wages", "yoy_percentage", "revenue_cagr"}

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _elapsed(t0: float) -> float:
    return round((time.perf_counter() - t0) * 1000, 2)


def _club_not_found(tool: str, club: int | str, elapsed: float) -> dict:
    return ToolResponse(
        tool=tool,
        ok=False,
        data=None,
        error=ErrorDetail(
            error_code="CLUB_NOT_FOUND",
            message=f"No club found for '{club}'",
            hint="Use list_clubs to find valid club ids and names.",
        ),
        meta=Meta(execution_ms=elapsed, row_count=0),
    ).model_dump()


def _error_response(
    tool: str, code: str, message: str, elapsed: float, hint: str | None = None
) -> dict:
    return ToolResponse(
        tool=tool,
        ok=False,
        data=None,
        error=ErrorDetail(error_code=code, message=message, hint=hint),
        meta=Meta(execution_ms=elapsed, row_count=0),
    ).model_dump()


def _ok(tool: str, data, elapsed: float, row_count: int | None = None) -> dict:
    return ToolResponse(
        tool=tool,
        ok=True,
        data=data,
        error=None,
        meta=Meta(execution_ms=elapsed, row_count=row_count),
    ).model_dump()


async def _check_rate_limit(tool_name: str, t0: float) -> dict | None:
    """Check rate limit for a tool.  Returns an error dict if blocked, else None."""
    limits = tool_limits(tool_name)
    allowed, error_msg = await rate_limiter.check_rate_limit(
        tool_name,
        max_requests=limits.get("max_requests"),
        window_seconds=limits.get("window_seconds"),
    )
    if not allowed:
        return _error_response(
            tool_name,
            "RATE_LIMIT_EXCEEDED",
            error_msg or "Rate limit exceeded",
            _elapsed(t0),
            hint="Wait before retrying.",
        )
    return None


def _parse_club_id(value) -> int | None:
    try:
        club_id = int(value)
    except (TypeError, ValueError):
        return None
    return club_id if club_id > 0 else None


def _currency_error(tool: str, currency: str, t0: float) -> dict:
    return _error_response(
        tool,
        "INVALID_INPUT",
        f"Unsupported currency '{currency}'",
        _elapsed(t0),
        hint=f"Supported currencies: {sorted(CURRENCIES)}",
    )


# ---------------------------------------------------------------------------
# Tool implementations
# ---------------------------------------------------------------------------


async def handle_list_clubs(arguments: dict) -> dict:
    """List clubs ordered by name with page/limit pagination.

    Args:
        arguments: {"page": int (default 1), "limit": int (default 50)}
    """
    t0 = time.perf_counter()

    rate_error = await _check_rate_limit("list_clubs", t0)
    if rate_error:
        return rate_error

    try:
        page = int(arguments.get("page", 1))
        limit = int(arguments.get("limit", 50))
    except (TypeError, ValueError):
        return _error_response(
            "list_clubs", "INVALID_INPUT", "page and limit must be integers", _elapsed(t0)
        )

    async with async_session_factory() as session:
        result = await club_service.list_clubs(session, page, limit)

    elapsed = _elapsed(t0)
    logger.info("list_clubs page=%d results=%d ms=%.1f", page, len(result.data), elapsed)
    return _ok("list_clubs", result.model_dump(), elapsed, row_count=len(result.data))


async def handle_get_club_financials(arguments: dict) -> dict:
    """Return a club's stored seasons exactly as recorded, oldest first.

    Args:
        arguments: {"club_id": int, "page": int (default 1), "limit": int (default 100)}
    """
    t0 = time.perf_counter()

    rate_error = await _check_rate_limit("get_club_financials", t0)
    if rate_error:
        return rate_error

    club_id = _parse_club_id(arguments.get("club_id"))
    if club_id is None:
        return _error_response(
            "get_club_financials",
            "INVALID_INPUT",
            "club_id is required and must be a positive integer",
            _elapsed(t0),
        )
    try:
        page = int(arguments.get("page", 1))
        limit = int(arguments.get("limit", 100))
    except (TypeError, ValueError):
        return _error_response(
            "get_club_financials", "INVALID_INPUT", "page and limit must be integers", _elapsed(t0)
        )

    async with async_session_factory() as session:
        club = await club_service.get_club_by_id(session, club_id)
        if club is None:
            return _club_not_found("get_club_financials", club_id, _elapsed(t0))
        result = await financial_service.get_club_financials(session, club_id, page, limit)

    elapsed = _elapsed(t0)
    logger.info(
        "get_club_financials club_id=%d rows=%d ms=%.1f", club_id, len(result.data), elapsed
    )
    return _ok(
        "get_club_financials",
        result.model_dump(mode="json"),
        elapsed,
        row_count=len(result.data),
    )


async def handle_get_club_metrics(arguments: dict) -> dict:
    """Return the year-ordered YoY series and revenue CAGR for one club.

    Args:
        arguments: {"club_id": int, "currency": "GBP" | "EUR" (default base currency)}
    """
    t0 = time.perf_counter()

    rate_error = await _check_rate_limit("get_club_metrics", t0)
    if rate_error:
        return rate_error

    club_id = _parse_club_id(arguments.get("club_id"))
    currency = arguments.get("currency") or BASE_CURRENCY

    if club_id is None:
        return _error_response(
            "get_club_metrics",
            "INVALID_INPUT",
            "club_id is required and must be a positive integer",
            _elapsed(t0),
        )
    if not is_supported(currency):
        return _currency_error("get_club_metrics", currency, t0)

    async with async_session_factory() as session:
        summary = await financial_service.get_club_metrics_summary(session, club_id, currency)

    elapsed = _elapsed(t0)
    if summary is None:
        return _club_not_found("get_club_metrics", club_id, elapsed)

    logger.info("get_club_metrics club_id=%d currency=%s ms=%.1f", club_id, currency, elapsed)
    return _ok("get_club_metrics", summary.model_dump(), elapsed, row_count=summary.years_covered)


async def handle_compare_clubs(arguments: dict) -> dict:
    """Compare clubs by name on one metric for a season (latest by default).

    Args:
        arguments: {
            "clubs": [str],
            "metric": one of revenue|ebitda|wages|yoy_percentage|revenue_cagr,
            "year": int (optional),
            "currency": str (optional)
        }
    """
    t0 = time.perf_counter()

    rate_error = await _check_rate_limit("compare_clubs", t0)
    if rate_error:
        return rate_error

    names = arguments.get("clubs", [])
    metric = arguments.get("metric", "")
    year = arguments.get("year")
    currency = arguments.get("currency") or BASE_CURRENCY

    if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
        return _error_response(
            "compare_clubs", "INVALID_INPUT", "clubs must be a list of club names", _elapsed(t0)
        )
    if len(names) < 2:
        return _error_response(
            "compare_clubs", "INVALID_INPUT", "Provide at least 2 clubs", _elapsed(t0)
        )
    if year is not None:
        try:
            year = int(year)
        except (TypeError, ValueError):
            return _error_response(
                "compare_clubs", "INVALID_INPUT", "year must be an integer", _elapsed(t0)
            )
    if metric not in COMPARE_METRICS:
        return _error_response(
            "compare_clubs",
            "INVALID_INPUT",
            f"metric must be one of {sorted(COMPARE_METRICS)}",
            _elapsed(t0),
        )
    if not is_supported(currency):
        return _currency_error("compare_clubs", currency, t0)

    comparison: list[dict] = []
    async with async_session_factory() as session:
        for name in names:
            club = await club_service.get_club_by_name(session, name)
            if club is None:
                return _club_not_found("compare_clubs", name, _elapsed(t0))

            summary = await financial_service.get_club_metrics_summary(session, club.id, currency)
            value = None
            season = None
            if metric == "revenue_cagr":
                value = summary.revenue_cagr
            elif summary.metrics:
                row = (
                    summary.metrics[-1]
                    if year is None
                    else next((m for m in summary.metrics if m.year == year), None)
                )
                if row is not None:
                    value = getattr(row, metric)
                    season = row.year

            comparison.append(
                {"club": club.name, "metric": metric, "year": season, "value": value}
            )

    valid_entries = [e for e in comparison if e["value"] is not None]
    leader = max(valid_entries, key=lambda e: e["value"])["club"] if valid_entries else None

    elapsed = _elapsed(t0)
    explanation = (
        f"{leader} leads on {metric} among {[e['club'] for e in comparison]}."
        if leader
        else "Insufficient data to determine a leader."
    )

    logger.info("compare_clubs clubs=%s metric=%s ms=%.1f", names, metric, elapsed)
    return _ok(
        "compare_clubs",
        {
            "comparison": comparison,
            "leader": leader,
            "currency": currency,
            "explanation": explanation,
        },
        elapsed,
        row_count=len(comparison),
    )


async def handle_ask_question(arguments: dict) -> dict:
    """Answer a single-fact revenue question about one club and season.

    Args:
        arguments: {"question": str, "currency": str (optional)}
    """
    t0 = time.perf_counter()

    rate_error = await _check_rate_limit("ask_question", t0)
    if rate_error:
        return rate_error

    question = arguments.get("question")
    currency = arguments.get("currency") or BASE_CURRENCY

    if not isinstance(question, str) or not question.strip():
        return _error_response(
            "ask_question", "INVALID_INPUT", "question must be a non-empty string", _elapsed(t0)
        )
    if not is_supported(currency):
        return _currency_error("ask_question", currency, t0)

    try:
        async with async_session_factory() as session:
            answer = await ask_service.answer_question(session, question, currency)
    except ask_service.QueryError as exc:
        elapsed = _elapsed(t0)
        logger.info("ask_question failed code=%s ms=%.1f", exc.code, elapsed)
        return _error_response(
            "ask_question",
            exc.code,
            exc.message,
            elapsed,
            hint="Try: \"What was Manchester United's revenue in 2022?\"",
        )

    elapsed = _elapsed(t0)
    logger.info("ask_question club=%s year=%d ms=%.1f", answer.club, answer.year, elapsed)
    return _ok("ask_question", answer.model_dump(), elapsed, row_count=1)
