"""Tests for MCP tool handlers (the full handler path through tools.py).

These tests exercise the tool handler functions directly, which covers
input validation, rate limiting, session creation, and response
formatting layers that service-level tests do not.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from app.config import settings
from app.mcp.tools import (
    _club_not_found,
    _error_response,
    _ok,
    _parse_club_id,
    handle_ask_question,
    handle_compare_clubs,
    handle_get_club_financials,
    handle_get_club_metrics,
    handle_list_clubs,
)


# ---------------------------------------------------------------------------
# Helper tests
# ---------------------------------------------------------------------------


def test_error_response_shape():
    """_error_response should produce a well-formed ToolResponse dict."""
    resp = _error_response("test_tool", "TEST_ERR", "Something broke", 1.23, hint="Try again")
    assert resp["tool"] == "test_tool"
    assert resp["ok"] is False
    assert resp["data"] is None
    assert resp["error"]["error_code"] == "TEST_ERR"
    assert resp["error"]["hint"] == "Try again"
    assert resp["meta"]["execution_ms"] == 1.23


def test_ok_response_shape():
    resp = _ok("test_tool", {"foo": "bar"}, 2.34, row_count=5)
    assert resp["ok"] is True
    assert resp["error"] is None
    assert resp["data"] == {"foo": "bar"}
    assert resp["meta"]["row_count"] == 5


def test_club_not_found_shape():
    resp = _club_not_found("test_tool", "Atlantis FC", 0.5)
    assert resp["ok"] is False
    assert resp["error"]["error_code"] == "CLUB_NOT_FOUND"
    assert "Atlantis FC" in resp["error"]["message"]


@pytest.mark.parametrize(
    "value, expected",
    [(7, 7), ("12", 12), (None, None), ("abc", None), (0, None), (-3, None)],
)
def test_parse_club_id(value, expected):
    assert _parse_club_id(value) == expected


# ---------------------------------------------------------------------------
# Input validation (these run without a database by catching early returns)
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_list_clubs_non_integer_page():
    result = await handle_list_clubs({"page": "first"})
    assert result["ok"] is False
    assert result["error"]["error_code"] == "INVALID_INPUT"


@pytest.mark.asyncio
async def test_get_club_financials_missing_club_id():
    result = await handle_get_club_financials({})
    assert result["ok"] is False
    assert result["error"]["error_code"] == "INVALID_INPUT"
    assert "club_id" in result["error"]["message"]


@pytest.mark.asyncio
async def test_get_club_metrics_bad_club_id():
    result = await handle_get_club_metrics({"club_id": "united"})
    assert result["ok"] is False
    assert result["error"]["error_code"] == "INVALID_INPUT"


@pytest.mark.asyncio
async def test_get_club_metrics_unsupported_currency():
    result = await handle_get_club_metrics({"club_id": 1, "currency": "USD"})
    assert result["ok"] is False
    assert result["error"]["error_code"] == "INVALID_INPUT"
    assert "USD" in result["error"]["message"]


@pytest.mark.asyncio
async def test_compare_clubs_too_few_clubs():
    """Need at least 2 clubs."""
    result = await handle_compare_clubs({"clubs": ["Real Madrid"], "metric": "revenue"})
    assert result["ok"] is False
    assert "2 clubs" in result["error"]["message"]


@pytest.mark.asyncio
@pytest.mark.parametrize("clubs", ["Real Madrid", None, ["Real Madrid", 7]])
async def test_compare_clubs_clubs_must_be_list_of_names(clubs):
    """A bare string must not be split into single-character names."""
    result = await handle_compare_clubs({"clubs": clubs, "metric": "revenue"})
    assert result["ok"] is False
    assert result["error"]["error_code"] == "INVALID_INPUT"
    assert "list of club names" in result["error"]["message"]


@pytest.mark.asyncio
@pytest.mark.parametrize("year", ["last season", [2022]])
async def test_compare_clubs_non_integer_year(year):
    result = await handle_compare_clubs(
        {"clubs": ["Real Madrid", "FC Barcelona"], "metric": "revenue", "year": year}
    )
    assert result["ok"] is False
    assert result["error"]["error_code"] == "INVALID_INPUT"
    assert "year" in result["error"]["message"]


@pytest.mark.asyncio
async def test_compare_clubs_invalid_metric():
    result = await handle_compare_clubs(
        {"clubs": ["Real Madrid", "FC Barcelona"], "metric": "trophies"}
    )
    assert result["ok"] is False
    assert "metric must be one of" in result["error"]["message"]


@pytest.mark.asyncio
@pytest.mark.parametrize("question", ["", "   ", None, 2022])
async def test_ask_question_rejects_blank_or_non_string(question):
    result = await handle_ask_question({"question": question})
    assert result["ok"] is False
    assert result["error"]["error_code"] == "INVALID_INPUT"


@pytest.mark.asyncio
async def test_ask_question_unsupported_currency():
    result = await handle_ask_question(
        {"question": "What was Real Madrid's revenue in 2022?", "currency": "JPY"}
    )
    assert result["ok"] is False
    assert result["error"]["error_code"] == "INVALID_INPUT"


@pytest.mark.asyncio
async def test_ask_question_missing_year_is_reported_before_db():
    """Year extraction fails before any club lookup runs."""
    result = await handle_ask_question({"question": "What was Real Madrid's revenue?"})
    assert result["ok"] is False
    assert result["error"]["error_code"] == "MISSING_YEAR"
    assert result["error"]["hint"]


# ---------------------------------------------------------------------------
# Rate limiting integration in handlers
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_handler_returns_rate_limit_error():
    """When rate limiter says no, the handler should return RATE_LIMIT_EXCEEDED."""
    with patch("app.mcp.tools.rate_limiter") as mock_rl:
        mock_rl.check_rate_limit = AsyncMock(return_value=(False, "Rate limit exceeded"))
        result = await handle_list_clubs({})
        assert result["ok"] is False
        assert result["error"]["error_code"] == "RATE_LIMIT_EXCEEDED"


@pytest.mark.asyncio
async def test_heavy_tool_uses_lower_limit():
    with patch("app.mcp.tools.rate_limiter") as mock_rl:
        mock_rl.check_rate_limit = AsyncMock(return_value=(False, "Rate limit exceeded"))
        await handle_ask_question({"question": "What was Real Madrid's revenue in 2022?"})
        _, kwargs = mock_rl.check_rate_limit.call_args
        assert mock_rl.check_rate_limit.call_args.args[0] == "ask_question"
        assert kwargs["max_requests"] == settings.rate_limit_ask
        assert kwargs["window_seconds"] == 60
