"""MCP server bootstrap – registers tools, resources, prompts and runs stdio transport."""

from __future__ import annotations

import asyncio
import json
import logging

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Prompt, PromptArgument, PromptMessage, Resource, TextContent, Tool

from app.config import settings
from app.mcp.tools import (
    COMPARE_METRICS,
    handle_ask_question,
    handle_compare_clubs,
    handle_get_club_financials,
    handle_get_club_metrics,
    handle_list_clubs,
)
from app.services.currency import BASE_CURRENCY, CURRENCIES

logger = logging.getLogger("mcp.server")

_CURRENCY_PROPERTY = {
    "type": "string",
    "enum": sorted(CURRENCIES),
    "description": f"Display currency (defaults to {BASE_CURRENCY})",
}

# ---------------------------------------------------------------------------
# Tool registry
# ---------------------------------------------------------------------------

TOOL_DEFINITIONS: list[Tool] = [
    Tool(
        name="list_clubs",
        description="List clubs ordered by name with page/limit pagination.",
        inputSchema={
            "type": "object",
            "properties": {
                "page": {"type": "integer", "default": 1, "minimum": 1},
                "limit": {
                    "type": "integer",
                    "description": "Rows per page",
                    "default": settings.default_page_size_clubs,
                    "minimum": 1,
                    "maximum": settings.max_page_size,
                },
            },
            "required": [],
        },
    ),
    Tool(
        name="get_club_financials",
        description=(
            "Get a club's stored season financials (revenue, EBITDA, wages and the "
            "revenue breakdown) exactly as recorded, oldest season first."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "club_id": {"type": "integer", "description": "Club id from list_clubs"},
                "page": {"type": "integer", "default": 1, "minimum": 1},
                "limit": {
                    "type": "integer",
                    "default": settings.default_page_size_financials,
                    "minimum": 1,
                    "maximum": settings.max_page_size,
                },
            },
            "required": ["club_id"],
        },
    ),
    Tool(
        name="get_club_metrics",
        description=(
            "Get a club's season series with year-over-year revenue change and "
            "percentage, plus revenue CAGR across all recorded seasons."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "club_id": {"type": "integer", "description": "Club id from list_clubs"},
                "currency": _CURRENCY_PROPERTY,
            },
            "required": ["club_id"],
        },
    ),
    Tool(
        name="compare_clubs",
        description=(
            "Compare two or more clubs (by name) on one metric for a season. "
            "Returns a comparison table, the leader, and a short explanation."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "clubs": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Club names or name fragments (min 2)",
                },
                "metric": {
                    "type": "string",
                    "enum": sorted(COMPARE_METRICS),
                    "description": "Metric to compare",
                },
                "year": {
                    "type": "integer",
                    "description": "Season to compare (defaults to each club's latest)",
                },
                "currency": _CURRENCY_PROPERTY,
            },
            "required": ["clubs", "metric"],
        },
    ),
    Tool(
        name="ask_question",
        description=(
            "Answer a single revenue question such as "
            "\"What was Manchester United's revenue in 2022?\". "
            "The question must name one club and one year between 2000 and 2099."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "question": {"type": "string", "description": "Free-text question"},
                "currency": _CURRENCY_PROPERTY,
            },
            "required": ["question"],
        },
    ),
]

TOOL_HANDLERS = {
    "list_clubs": handle_list_clubs,
    "get_club_financials": handle_get_club_financials,
    "get_club_metrics": handle_get_club_metrics,
    "compare_clubs": handle_compare_clubs,
    "ask_question": handle_ask_question,
}

# ---------------------------------------------------------------------------
# Server factory
# ---------------------------------------------------------------------------


def create_mcp_server() -> Server:
    """Create and configure the MCP server instance."""
    server = Server(settings.mcp_server_name)

    # ── Tools ─────────────────────────────────────────────────────────────

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return TOOL_DEFINITIONS

    @server.call_tool()
    async def call_tool(name: str, arguments: dict | None) -> list[TextContent]:
        handler = TOOL_HANDLERS.get(name)
        if handler is None:
            error_payload = {
                "tool": name,
                "ok": False,
                "error": {
                    "error_code": "UNKNOWN_TOOL",
                    "message": f"Tool '{name}' is not registered",
                    "hint": f"Available tools: {list(TOOL_HANDLERS.keys())}",
                },
                "meta": {"execution_ms": 0, "row_count": 0},
            }
            return [TextContent(type="text", text=json.dumps(error_payload, default=str))]

        result = await handler(arguments or {})
        return [TextContent(type="text", text=json.dumps(result, default=str))]

    # ── Resources ─────────────────────────────────────────────────────────

    @server.list_resources()
    async def list_resources() -> list[Resource]:
        return [
            Resource(
                uri="finance://currencies",
                name="Supported Currencies",
                description="Display currencies with symbols and fixed conversion rates",
                mimeType="application/json",
            ),
        ]

    @server.read_resource()
    async def read_resource(uri: str) -> str:
        if str(uri) == "finance://currencies":
            return currencies_resource()
        raise ValueError(f"Unknown resource: {uri}")

    # ── Prompts ───────────────────────────────────────────────────────────

    @server.list_prompts()
    async def list_prompts() -> list[Prompt]:
        return [
            Prompt(
                name="club_revenue_trend",
                description="Summarise a club's revenue trend across recorded seasons",
                arguments=[
                    PromptArgument(
                        name="club",
                        description="Club name (e.g. Manchester United)",
                        required=True,
                    ),
                ],
            ),
        ]

    @server.get_prompt()
    async def get_prompt(name: str, arguments: dict | None = None) -> list[PromptMessage]:
        if name == "club_revenue_trend":
            return club_revenue_trend_prompt((arguments or {}).get("club", "Manchester United"))
        raise ValueError(f"Unknown prompt: {name}")

    return server


def currencies_resource() -> str:
    """JSON body for the ``finance://currencies`` resource."""
    return json.dumps(
        {
            "base_currency": BASE_CURRENCY,
            "currencies": [c.model_dump() for c in CURRENCIES.values()],
        },
        indent=2,
    )


def club_revenue_trend_prompt(club: str) -> list[PromptMessage]:
    return [
        PromptMessage(
            role="user",
            content=TextContent(
                type="text",
                text=(
                    f"Summarise the revenue trend for {club}:\n\n"
                    f"1. Use list_clubs to find the id of {club}\n"
                    "2. Call get_club_metrics for that id\n"
                    "3. Describe the year-over-year changes season by season\n"
                    "4. Quote the revenue CAGR and whether growth is accelerating\n\n"
                    "Amounts are in millions."
                ),
            ),
        )
    ]


# ---------------------------------------------------------------------------
# Entry-point: run MCP server over stdio
# ---------------------------------------------------------------------------


async def run_mcp_server() -> None:
    """Start the MCP server using stdio transport."""
    server = create_mcp_server()
    logger.info(
        "Starting MCP server '%s' v%s (stdio)",
        settings.mcp_server_name,
        settings.mcp_server_version,
    )

    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    """CLI entry-point."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    asyncio.run(run_mcp_server())


if __name__ == "__main__":
    main()
