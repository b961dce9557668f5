from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import build_api_router
from .config import settings

logger = logging.getLogger(__name__)


def create_app(context: Optional[Mapping[str, Any]] = None) -> FastAPI:
    """
    Build the HTTP API.

    `context` is forwarded to every route module under echobot/api/
    (normally {"client": <EchoBot>}); without it the stats routes report defaults.
    """
    app = FastAPI(
        title="Echo Bot API",
        version=settings.app_version,
    )

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Consistent error envelope ---
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request, exc):  # noqa: ANN001
        detail = getattr(exc, "detail", None) or "HTTP error"
        return JSONResponse(
            status_code=getattr(exc, "status_code", 500),
            content={"detail": detail},
            headers=getattr(exc, "headers", None),
        )

    # --- Health / meta ---
    @app.get("/health", tags=["meta"])
    def health() -> Dict[str, Any]:
        return {"ok": True, "env": settings.env}

    @app.get("/version", tags=["meta"])
    def version() -> Dict[str, Any]:
        return {"version": settings.app_version}

    # --- Auto-discovered route modules ---
    app.include_router(build_api_router(context), prefix=settings.api_prefix)

    return app


def build_server(app: FastAPI):
    """uvicorn server for `app`, configured from settings."""
    import uvicorn

    config = uvicorn.Config(
        app,
        host=settings.host,
        port=int(settings.api_port),
        log_level=settings.log_level.lower(),
    )
    return uvicorn.Server(config)


def run() -> None:
    """Serve the API alone (no Discord session in context)."""
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))
    server = build_server(create_app({"client": None}))
    logger.info("API listening on %s:%s%s", settings.host, settings.api_port, settings.api_prefix)
    server.run()
