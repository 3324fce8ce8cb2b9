"""Upload provider callback endpoints."""

from typing import Any

import structlog
from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from folio.api.dependencies import get_uploads, verify_upload_secret
from folio.errors import UnknownUploadRouteError
from folio.services.uploads import UploadRouter

log = structlog.get_logger()

router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.get("/routes", summary="Declared upload routes and their limits")
async def list_routes(uploads: UploadRouter = Depends(get_uploads)) -> dict[str, Any]:
    return {"success": True, "data": uploads.describe()}


@router.post(
    "/{route}/complete",
    summary="Storage provider completion callback",
    dependencies=[Depends(verify_upload_secret)],
)
async def upload_complete(
    route: str,
    payload: dict[str, Any] = Body(...),
    uploads: UploadRouter = Depends(get_uploads),
) -> JSONResponse:
    try:
        result = await uploads.on_upload_complete(route, payload)
    except UnknownUploadRouteError as e:
        log.warning("upload_route_unknown", route=route)
        return JSONResponse(
            {"success": False, "error": e.message, "error_type": e.error_type.value},
            status_code=404,
        )
    except ValidationError as e:
        log.warning("upload_callback_invalid", route=route, errors=e.error_count())
        return JSONResponse(
            {"success": False, "error": "Invalid upload callback", "error_type": "validation"},
            status_code=422,
        )
    return JSONResponse(
        {"success": True, "data": result.model_dump(exclude_none=True)},
    )
