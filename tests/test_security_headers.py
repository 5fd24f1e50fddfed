"""Tests for security headers middleware."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.middleware.security import (
    SECURITY_HEADERS,
    SecurityHeadersMiddleware,
    parse_cors_origins,
)
from app.web.server import app


@pytest.fixture
def client():
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


class TestSecurityHeadersMiddleware:
    """Test security headers are properly added to responses."""

    @pytest.mark.asyncio
    async def test_all_security_headers_present(self, client):
        async with client:
            response = await client.get("/health")

        for name, value in SECURITY_HEADERS.items():
            assert response.headers[name.lower()] == value

    @pytest.mark.asyncio
    async def test_request_id_header(self, client):
        """Test X-Request-ID header is present and is a valid UUID."""
        async with client:
            response = await client.get("/health")

        request_id = response.headers["x-request-id"]
        assert len(request_id) == 36
        assert request_id.count("-") == 4

    @pytest.mark.asyncio
    async def test_request_id_is_unique(self, client):
        async with client:
            response1 = await client.get("/health")
            response2 = await client.get("/health")

        assert response1.headers["x-request-id"] != response2.headers["x-request-id"]

    @pytest.mark.asyncio
    async def test_incoming_request_id_is_echoed(self, client):
        async with client:
            response = await client.get("/health", headers={"X-Request-ID": "trace-123"})

        assert response.headers["x-request-id"] == "trace-123"

    @pytest.mark.asyncio
    async def test_disabled_middleware_keeps_request_id_only(self):
        bare = FastAPI()
        bare.add_middleware(SecurityHeadersMiddleware, enabled=False)

        @bare.get("/ping")
        async def ping():
            return {"pong": True}

        async with AsyncClient(transport=ASGITransport(app=bare), base_url="http://test") as c:
            response = await c.get("/ping")

        assert "x-request-id" in response.headers
        assert "strict-transport-security" not in response.headers


class TestCORSMiddleware:
    """Test CORS headers are properly configured."""

    @pytest.mark.asyncio
    async def test_cors_preflight(self, client):
        async with client:
            response = await client.options(
                "/api/clubs",
                headers={
                    "Origin": "http://localhost:3000",
                    "Access-Control-Request-Method": "GET",
                },
            )

        assert "access-control-allow-origin" in response.headers

    @pytest.mark.asyncio
    async def test_cors_on_simple_request(self, client):
        async with client:
            response = await client.get("/health", headers={"Origin": "http://localhost:3000"})

        assert "access-control-allow-origin" in response.headers


class TestParseCorsOrigins:
    """Test CORS origins parsing utility."""

    def test_parse_wildcard(self):
        assert parse_cors_origins("*") == ["*"]

    def test_parse_single_origin(self):
        assert parse_cors_origins("https://example.com") == ["https://example.com"]

    def test_parse_strips_whitespace(self):
        result = parse_cors_origins("  https://app1.com  ,  https://app2.com  ")
        assert result == ["https://app1.com", "https://app2.com"]

    def test_parse_empty_string(self):
        assert parse_cors_origins("") == []

    def test_parse_with_empty_items(self):
        result = parse_cors_origins("https://app1.com,,https://app2.com")
        assert result == ["https://app1.com", "https://app2.com"]


def test_hsts_has_correct_values():
    hsts = SECURITY_HEADERS["Strict-Transport-Security"]
    assert "max-age=31536000" in hsts
    assert "includeSubDomains" in hsts
    assert "preload" in hsts
