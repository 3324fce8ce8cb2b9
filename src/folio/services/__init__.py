"""Content services: mutations, queries and upload callbacks."""

from folio.services.mutations import ContentService, calculate_read_time
from folio.services.queries import QueryService
from folio.services.results import ServiceResult
from folio.services.uploads import UploadCallback, UploadResult, UploadRouter, get_upload_router

__all__ = [
    "ContentService",
    "QueryService",
    "ServiceResult",
    "UploadCallback",
    "UploadResult",
    "UploadRouter",
    "calculate_read_time",
    "get_upload_router",
]
