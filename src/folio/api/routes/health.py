"""Health endpoint."""

from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from folio import __version__
from folio.cache import get_cache
from folio.db.connection import check_database_health

router = APIRouter(tags=["health"])


@router.get("/health", summary="Service and database health")
async def health() -> JSONResponse:
    database = await check_database_health()
    healthy = database.get("status") == "healthy"
    body: dict[str, Any] = {
        "status": "healthy" if healthy else "unhealthy",
        "version": __version__,
        "database": database,
        "page_cache": {"size": get_cache().size, **get_cache().stats.to_dict()},
    }
    return JSONResponse(body, status_code=200 if healthy else 503)
