# src/tunein_stage/main.py
"""Main entry point for the TUNE-IN application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from tunein_stage import __version__
from tunein_stage.api.v1 import (
    clubs_router,
    posts_router,
    profiles_router,
    votes_router,
)
from tunein_stage.core.errors import TuneInError
from tunein_stage.core.settings import settings

logger = logging.getLogger(__name__)

# Application object served by uvicorn
app = FastAPI(
    title="TUNE-IN API",
    description="Clubs, posts, votes and ranked feeds",
    version=__version__,
)

# The web client runs on another origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Feeds can be large
app.add_middleware(GZipMiddleware)

# Versioned JSON API
app.include_router(profiles_router, prefix="/api/v1")
app.include_router(clubs_router, prefix="/api/v1")
app.include_router(posts_router, prefix="/api/v1")
app.include_router(votes_router, prefix="/api/v1")


@app.exception_handler(TuneInError)
async def handle_domain_error(request: Request, exc: TuneInError) -> JSONResponse:
    """Translate service-layer errors into HTTP responses."""
    logger.debug("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.on_event("startup")
async def on_startup() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("%s %s starting", settings.app_name, settings.app_version)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Service name, version and where the docs live."""
    return {
        "name": "TUNE-IN API",
        "version": __version__,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("tunein_stage.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
