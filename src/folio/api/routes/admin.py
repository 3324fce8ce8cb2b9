"""Admin content-management endpoints.

Every content kind gets the same five routes under ``/admin/{segment}``.
Bodies are raw form dicts; validation failures come back as 422 with
per-field messages in the envelope.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from folio.api.dependencies import get_content_service, get_query_service
from folio.api.responses import respond
from folio.api.schemas import BlogPostRead, ExperienceRead, ProjectRead, SettingsRead
from folio.models.entities import EntityKind, ExperienceType
from folio.services.mutations import ContentService
from folio.services.queries import QueryService

router = APIRouter(prefix="/admin", tags=["admin"])

ADMIN_SEGMENTS: dict[str, tuple[EntityKind, type[BaseModel]]] = {
    "projects": (EntityKind.PROJECT, ProjectRead),
    "blog": (EntityKind.BLOG_POST, BlogPostRead),
    "experiences": (EntityKind.EXPERIENCE, ExperienceRead),
}


def _register_kind(segment: str, kind: EntityKind, read_model: type[BaseModel]) -> None:
    """Attach list/create/get/update/delete routes for one content kind."""
    label = kind.label

    @router.get(f"/{segment}", name=f"list_{kind.value}", summary=f"List every {label}")
    async def list_all(queries: QueryService = Depends(get_query_service)) -> JSONResponse:
        return respond(await queries.list_all(kind), read_model)

    @router.post(f"/{segment}", name=f"create_{kind.value}", summary=f"Create a {label}")
    async def create(
        data: dict[str, Any] = Body(...),
        content: ContentService = Depends(get_content_service),
    ) -> JSONResponse:
        return respond(await content.create(kind, data), read_model, success_status=201)

    @router.get(f"/{segment}/{{entity_id}}", name=f"get_{kind.value}", summary=f"Get a {label}")
    async def get(
        entity_id: str, queries: QueryService = Depends(get_query_service)
    ) -> JSONResponse:
        return respond(await queries.get_by_id(kind, entity_id), read_model)

    @router.put(
        f"/{segment}/{{entity_id}}", name=f"update_{kind.value}", summary=f"Update a {label}"
    )
    async def update(
        entity_id: str,
        data: dict[str, Any] = Body(...),
        content: ContentService = Depends(get_content_service),
    ) -> JSONResponse:
        return respond(await content.update(kind, entity_id, data), read_model)

    @router.delete(
        f"/{segment}/{{entity_id}}", name=f"delete_{kind.value}", summary=f"Delete a {label}"
    )
    async def delete(
        entity_id: str, content: ContentService = Depends(get_content_service)
    ) -> JSONResponse:
        return respond(await content.delete(kind, entity_id))


# =============================================================================
# Kind-specific routes
# =============================================================================


@router.get("/experiences/by-type/{experience_type}", summary="List experience entries of a type")
async def list_experiences_by_type(
    experience_type: ExperienceType,
    queries: QueryService = Depends(get_query_service),
) -> JSONResponse:
    return respond(await queries.list_experiences_by_type(experience_type), ExperienceRead)


for _segment, (_kind, _read_model) in ADMIN_SEGMENTS.items():
    _register_kind(_segment, _kind, _read_model)


@router.get("/settings", summary="Get site settings")
async def get_settings(queries: QueryService = Depends(get_query_service)) -> JSONResponse:
    return respond(await queries.get_settings(), SettingsRead)


@router.put("/settings", summary="Save site settings")
async def save_settings(
    data: dict[str, Any] = Body(...),
    content: ContentService = Depends(get_content_service),
) -> JSONResponse:
    return respond(await content.save_settings(data), SettingsRead)

