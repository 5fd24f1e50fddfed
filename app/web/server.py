"""HTTP API consumed by the dashboard front-end.

Run with:
    python -m app.web.server
    # → http://localhost:8000/health
    # → http://localhost:8000/docs  (Swagger UI)
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.db import get_session
from app.middleware.security import SecurityHeadersMiddleware, parse_cors_origins
from app.schemas.ask import AskAnswer, AskRequest
from app.schemas.club import ClubBrief
from app.schemas.common import Paginated
from app.schemas.financial import ClubMetricsSummary
from app.services import ask_service, club_service, financial_service
from app.services.currency import BASE_CURRENCY, CURRENCIES, is_supported

logger = logging.getLogger("app.web")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("HTTP API starting (env=%s)", settings.app_env)
    yield
    logger.info("HTTP API shutting down")


app = FastAPI(
    title="Club Finance Metrics API",
    description="Club season financials with year-over-year and CAGR metrics.",
    version=settings.mcp_server_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=parse_cors_origins(settings.allowed_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(SecurityHeadersMiddleware)


def _error(message: str, status_code: int, code: str | None = None) -> JSONResponse:
    body = {"error": message}
    if code:
        body["code"] = code
    return JSONResponse(status_code=status_code, content=body)


# ── Health ────────────────────────────────────────────────────────────────────


@app.get("/health")
async def health():
    return {"status": "ok", "version": settings.mcp_server_version}


# ── Clubs & financials ────────────────────────────────────────────────────────


@app.get("/api/clubs", response_model=Paginated[ClubBrief])
async def list_clubs(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size_clubs, ge=1, le=settings.max_page_size),
    session: AsyncSession = Depends(get_session),
):
    return await club_service.list_clubs(session, page, limit)


@app.get("/api/financials")
async def list_financials(
    club_id: str | None = Query(None, alias="clubId"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size_financials, ge=1, le=settings.max_page_size),
    session: AsyncSession = Depends(get_session),
):
    if not club_id or not club_id.strip().isdigit():
        return _error("clubId is required and must be a number", 400)

    result = await financial_service.get_club_financials(session, int(club_id), page, limit)
    return JSONResponse(content=result.model_dump(mode="json"))


@app.get("/api/clubs/{club_id}/metrics", response_model=ClubMetricsSummary)
async def club_metrics(
    club_id: int,
    currency: str = Query(BASE_CURRENCY),
    session: AsyncSession = Depends(get_session),
):
    if not is_supported(currency):
        return _error(
            f"Unsupported currency '{currency}'. Use one of {sorted(CURRENCIES)}.", 400
        )

    summary = await financial_service.get_club_metrics_summary(session, club_id, currency)
    if summary is None:
        return _error(f"No club found with id {club_id}", 404)
    return summary


# ── Ask ───────────────────────────────────────────────────────────────────────


@app.post("/api/ask", response_model=AskAnswer)
async def ask(request: Request, session: AsyncSession = Depends(get_session)):
    try:
        payload = AskRequest.model_validate(await request.json())
    except (ValueError, ValidationError):
        return _error("Invalid question", 400)

    currency = payload.currency or BASE_CURRENCY
    if not is_supported(currency):
        return _error(
            f"Unsupported currency '{currency}'. Use one of {sorted(CURRENCIES)}.", 400
        )

    try:
        return await ask_service.answer_question(session, payload.question, currency)
    except ask_service.QueryError as exc:
        logger.info("ask failed code=%s", exc.code)
        return _error(exc.message, exc.status, exc.code)
    except Exception:
        logger.exception("Ask API error")
        return _error("An error occurred processing your question.", 500)


# ── Run via uvicorn ───────────────────────────────────────────────────────────

if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    uvicorn.run(
        "app.web.server:app",
        host=settings.fastapi_host,
        port=settings.fastapi_port,
        reload=(settings.app_env == "development"),
    )
