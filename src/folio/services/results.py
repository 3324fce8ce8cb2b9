"""Result envelope returned by the content services."""

from dataclasses import dataclass, field
from typing import Any

from folio.errors import ErrorType, FolioError, FormValidationError
from folio.models.entities import EntityKind


@dataclass
class ServiceResult:
    """Outcome of a service operation.

    Services never raise to their callers: failures come back with a short
    user-facing message, an error type for status mapping, and per-field
    messages for validation failures.
    """

    success: bool
    kind: EntityKind
    action: str
    data: Any = None
    error: str | None = None
    error_type: ErrorType | None = None
    field_errors: dict[str, str] = field(default_factory=dict)

    @classmethod
    def ok(cls, kind: EntityKind, action: str, data: Any = None) -> "ServiceResult":
        return cls(success=True, kind=kind, action=action, data=data)

    @classmethod
    def failed(cls, kind: EntityKind, action: str, exc: FolioError) -> "ServiceResult":
        field_errors = exc.field_errors if isinstance(exc, FormValidationError) else {}
        return cls(
            success=False,
            kind=kind,
            action=action,
            error=exc.message,
            error_type=exc.error_type,
            field_errors=dict(field_errors),
        )
