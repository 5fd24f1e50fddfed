"""Performance benchmarks for the service layer.

Run against a seeded database:
    python -m scripts.benchmark
"""

from __future__ import annotations

import asyncio
import time

from app.db import async_session_factory
from app.services import ask_service, club_service, financial_service


async def _bench(label: str, coro_factory, iterations: int = 100):
    """Run a coroutine *iterations* times and print average wall-clock ms."""
    async with async_session_factory() as session:
        # Warm up
        await coro_factory(session)

        start = time.perf_counter()
        for _ in range(iterations):
            await coro_factory(session)
        elapsed = time.perf_counter() - start

    avg_ms = elapsed / iterations * 1000
    print(f"  {label}: {avg_ms:.2f} ms avg ({iterations} iterations)")
    return avg_ms


async def main():
    print("Running benchmarks …\n")

    async with async_session_factory() as session:
        club = await club_service.get_club_by_name(session, "Manchester United")
    if club is None:
        print("Seed the database first: python -m scripts.seed")
        return

    await _bench("list_clubs(page=1)", lambda s: club_service.list_clubs(s, 1, 50))
    await _bench(
        "get_club_by_name('united')",
        lambda s: club_service.get_club_by_name(s, "united"),
    )
    await _bench(
        f"get_club_metrics_summary({club.id}, EUR)",
        lambda s: financial_service.get_club_metrics_summary(s, club.id, "EUR"),
    )
    await _bench(
        "answer_question(Manchester United 2022)",
        lambda s: ask_service.answer_question(
            s, "What was Manchester United's revenue in 2022?"
        ),
    )

    print("\nDone.")


if __name__ == "__main__":
    asyncio.run(main())
