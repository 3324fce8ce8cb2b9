"""Upload completion callbacks from the external file storage provider.

The provider enforces the size/count limits declared per route and calls
back once a file is stored. The handler is a pass-through: it maps the
callback to the `{url}` payload the admin UI keeps in the owning form's
image field until the form is saved.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import structlog
from pydantic import AliasChoices, BaseModel, Field

from folio.errors import UnknownUploadRouteError

log = structlog.get_logger()

MB = 1024 * 1024


@dataclass(frozen=True)
class UploadRoute:
    """A named upload endpoint and the limits the provider enforces for it."""

    name: str
    max_file_size: int
    max_file_count: int = 1
    accept: str = "image"
    report_uploader: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "accept": self.accept,
            "max_file_size": self.max_file_size,
            "max_file_count": self.max_file_count,
        }


UPLOAD_ROUTES: dict[str, UploadRoute] = {
    "profile_image": UploadRoute("profile_image", max_file_size=4 * MB, report_uploader=True),
    "project_image": UploadRoute("project_image", max_file_size=8 * MB),
    "blog_image": UploadRoute("blog_image", max_file_size=8 * MB),
}


class UploadedFile(BaseModel):
    """File description sent by the storage provider."""

    url: str = Field(validation_alias=AliasChoices("url", "ufs_url", "ufsUrl"))
    name: str = ""
    size: int = 0
    key: str | None = None
    type: str | None = None


class UploadCallback(BaseModel):
    """Callback body: the stored file plus metadata attached before upload."""

    file: UploadedFile
    metadata: dict[str, Any] = Field(default_factory=dict)


class UploadResult(BaseModel):
    """Payload handed back to the admin UI."""

    url: str
    uploaded_by: str | None = None


class UploadRouter:
    """Registry of upload routes and their completion handler."""

    def __init__(self, routes: Mapping[str, UploadRoute] | None = None) -> None:
        self._routes = dict(routes if routes is not None else UPLOAD_ROUTES)

    def route(self, name: str) -> UploadRoute:
        try:
            return self._routes[name]
        except KeyError:
            raise UnknownUploadRouteError(name) from None

    def describe(self) -> list[dict[str, Any]]:
        """Route limits, for configuring the client-side uploader."""
        return [route.to_dict() for route in self._routes.values()]

    async def on_upload_complete(
        self, route_name: str, payload: UploadCallback | Mapping[str, Any]
    ) -> UploadResult:
        """Map a completed upload to the URL the admin form stores.

        Raises:
            UnknownUploadRouteError: if the route is not declared.
        """
        route = self.route(route_name)
        callback = (
            payload if isinstance(payload, UploadCallback) else UploadCallback.model_validate(payload)
        )
        uploaded_by = str(callback.metadata.get("uploaded_by", "admin"))

        log.info(
            "upload_complete",
            route=route.name,
            url=callback.file.url,
            size=callback.file.size,
            uploaded_by=uploaded_by,
        )
        return UploadResult(
            url=callback.file.url,
            uploaded_by=uploaded_by if route.report_uploader else None,
        )


_router: UploadRouter | None = None


def get_upload_router() -> UploadRouter:
    global _router  # noqa: PLW0603
    if _router is None:
        _router = UploadRouter()
    return _router
