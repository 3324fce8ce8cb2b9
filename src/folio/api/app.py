"""FastAPI application factory.

Creates the REST API serving the public site data and the admin
content-management endpoints.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from folio import __version__
from folio.api.routes import admin_router, health_router, pages_router, uploads_router
from folio.cache import reset_cache
from folio.config import settings
from folio.db.connection import close_db, init_db

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Create tables on startup (when enabled) and release connections on shutdown."""
    if settings.auto_create_tables:
        try:
            await init_db()
        except Exception as e:
            log.warning("database_init_failed", error=str(e))
    yield
    await reset_cache()
    await close_db()


def create_api_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI app with all routes and middleware.
    """
    app = FastAPI(
        title="Folio API",
        description="Portfolio content API",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            *settings.cors_origins,
            f"http://localhost:{settings.server_port}",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(pages_router)
    app.include_router(admin_router)
    app.include_router(uploads_router)
    app.include_router(health_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """API root - basic info."""
        return {
            "name": "Folio API",
            "version": __version__,
            "docs": "/docs",
        }

    return app
