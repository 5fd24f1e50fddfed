"""Rate limiting for MCP tools.

Sliding window per tool: standard tools allow ``settings.rate_limit_default``
requests per minute, the heavier ones (``ask_question``, ``compare_clubs``)
``settings.rate_limit_ask``.  Disabled entirely when
``settings.rate_limit_enabled`` is false.
"""

from __future__ import annotations

import asyncio
import time
from collections import defaultdict, deque
from typing import Deque, Dict

from app.config import settings


class RateLimiter:
    """Sliding-window rate limiter, one window per tool name.

    Safe for concurrent handlers via asyncio.Lock.
    """

    def __init__(
        self,
        default_max_requests: int = 60,
        default_window_seconds: int = 60,
        enabled: bool = True,
    ) -> None:
        self.default_max_requests = default_max_requests
        self.default_window_seconds = default_window_seconds
        self.enabled = enabled
        self._requests: Dict[str, Deque[float]] = defaultdict(deque)
        self._lock = asyncio.Lock()

    async def check_rate_limit(
        self,
        tool_name: str,
        max_requests: int | None = None,
        window_seconds: int | None = None,
    ) -> tuple[bool, str | None]:
        """Record a call to *tool_name* if it fits in the window.

        Returns:
            ``(True, None)`` when allowed, otherwise ``(False, message)`` with
            a retry hint.
        """
        if not self.enabled:
            return True, None

        max_req = max_requests or self.default_max_requests
        window = window_seconds or self.default_window_seconds

        async with self._lock:
            now = time.monotonic()
            timestamps = self._requests[tool_name]

            while timestamps and timestamps[0] <= now - window:
                timestamps.popleft()

            if len(timestamps) >= max_req:
                retry_after = int(timestamps[0] + window - now) + 1
                return False, (
                    f"Rate limit exceeded for '{tool_name}'. "
                    f"Max {max_req} requests per {window}s. "
                    f"Retry after {retry_after}s."
                )

            timestamps.append(now)
            return True, None

    async def reset(self, tool_name: str | None = None) -> None:
        """Reset counters.  If *tool_name* is ``None``, reset everything."""
        async with self._lock:
            if tool_name:
                self._requests.pop(tool_name, None)
            else:
                self._requests.clear()


HEAVY_TOOLS = frozenset({"ask_question", "compare_clubs"})


def tool_limits(tool_name: str) -> dict[str, int]:
    """Per-tool window settings."""
    max_requests = settings.rate_limit_ask if tool_name in HEAVY_TOOLS else settings.rate_limit_default
    return {"max_requests": max_requests, "window_seconds": 60}


# Module-level singleton used by tool handlers.
rate_limiter = RateLimiter(
    default_max_requests=settings.rate_limit_default,
    enabled=settings.rate_limit_enabled,
)
