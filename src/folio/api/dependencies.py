"""FastAPI dependencies for the content services."""

import secrets

from fastapi import Header, HTTPException

from folio.config import settings
from folio.services.mutations import ContentService
from folio.services.queries import QueryService
from folio.services.uploads import UploadRouter, get_upload_router


def get_query_service() -> QueryService:
    return QueryService()


def get_content_service() -> ContentService:
    return ContentService()


def get_uploads() -> UploadRouter:
    return get_upload_router()


async def verify_upload_secret(
    x_upload_secret: str | None = Header(default=None),
) -> None:
    """Reject upload callbacks without the shared secret, when one is configured."""
    expected = settings.upload_callback_secret.get_secret_value()
    if not expected:
        return
    if not x_upload_secret or not secrets.compare_digest(x_upload_secret, expected):
        raise HTTPException(status_code=401, detail="Invalid upload callback secret")
