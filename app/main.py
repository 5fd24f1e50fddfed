"""FastAPI application – HTTP entry-point.

The MCP server (``python -m app.mcp.server``) exposes the same operations to
MCP clients; this module re-exports the HTTP app for ``uvicorn app.main:app``.
See ``app.web.server`` for the routes.
"""

from app.web.server import app  # noqa: F401 – re-export for uvicorn

if __name__ == "__main__":
    import logging
    import uvicorn
    from app.config import settings

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    uvicorn.run(
        "app.main:app",
        host=settings.fastapi_host,
        port=settings.fastapi_port,
        reload=(settings.app_env == "development"),
    )
