"""API route modules."""

from folio.api.routes.admin import router as admin_router
from folio.api.routes.health import router as health_router
from folio.api.routes.pages import router as pages_router
from folio.api.routes.uploads import router as uploads_router

__all__ = [
    "admin_router",
    "health_router",
    "pages_router",
    "uploads_router",
]
