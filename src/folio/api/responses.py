"""Result-to-HTTP mapping and page caching for API routes."""

from collections.abc import Awaitable, Callable
from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel

from folio.cache import get_cache
from folio.errors import ErrorType
from folio.services.results import ServiceResult

STATUS_BY_ERROR: dict[ErrorType, int] = {
    ErrorType.VALIDATION: 422,
    ErrorType.CONFLICT: 409,
    ErrorType.NOT_FOUND: 404,
    ErrorType.STORE: 500,
}

Payload = tuple[int, dict[str, Any]]


def serialize(data: Any, read_model: type[BaseModel] | None) -> Any:
    if data is None or read_model is None:
        return data
    if isinstance(data, list):
        return [read_model.model_validate(item).model_dump(mode="json") for item in data]
    return read_model.model_validate(data).model_dump(mode="json")


def envelope(
    result: ServiceResult,
    read_model: type[BaseModel] | None = None,
    success_status: int = 200,
) -> Payload:
    """Status code and JSON body for a service result."""
    if result.success:
        return success_status, {"success": True, "data": serialize(result.data, read_model)}
    body: dict[str, Any] = {
        "success": False,
        "error": result.error,
        "error_type": result.error_type.value if result.error_type else None,
        "field_errors": result.field_errors,
    }
    status = STATUS_BY_ERROR.get(result.error_type, 500) if result.error_type else 500
    return status, body


def respond(
    result: ServiceResult,
    read_model: type[BaseModel] | None = None,
    success_status: int = 200,
) -> JSONResponse:
    status, body = envelope(result, read_model, success_status)
    return JSONResponse(body, status_code=status)


async def cached_page(path: str, load: Callable[[], Awaitable[Payload]]) -> JSONResponse:
    """Serve a public page payload from the page cache, filling it on a miss.

    Only successful payloads are cached; `path` is the site route the
    payload renders, which is what mutations invalidate.
    """
    cache = get_cache()
    body = cache.get(path)
    if body is not None:
        return JSONResponse(body, headers={"x-cache": "hit"})

    status, body = await load()
    if status == 200:
        cache.set(path, body)
    return JSONResponse(body, status_code=status, headers={"x-cache": "miss"})
