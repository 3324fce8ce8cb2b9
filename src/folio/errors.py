"""Custom exceptions for Folio."""

from enum import StrEnum


class ErrorType(StrEnum):
    """Failure categories surfaced to callers."""

    VALIDATION = "validation"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    STORE = "store"


class FolioError(Exception):
    """Base exception for all Folio errors."""

    error_type: ErrorType = ErrorType.STORE

    def __init__(self, message: str, *, details: dict[str, object] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class FormValidationError(FolioError):
    """Raised when form input fails schema rules."""

    error_type = ErrorType.VALIDATION

    def __init__(self, field_errors: dict[str, str]) -> None:
        first = next(iter(field_errors.values()), "Invalid input")
        super().__init__(first, details={"field_errors": field_errors})
        self.field_errors = field_errors


class SlugConflictError(FolioError):
    """Raised when another record of the same kind already holds a slug."""

    error_type = ErrorType.CONFLICT

    def __init__(self, label: str, slug: str) -> None:
        super().__init__(
            f"A {label} with this slug already exists",
            details={"slug": slug},
        )
        self.slug = slug


class EntityNotFoundError(FolioError):
    """Raised when a requested record does not exist (or is not public)."""

    error_type = ErrorType.NOT_FOUND

    def __init__(self, label: str, identifier: str) -> None:
        super().__init__(
            f"{label.capitalize()} not found",
            details={"entity": label, "identifier": identifier},
        )


class UnsupportedOperationError(FolioError):
    """Raised when an operation does not apply to an entity kind."""

    error_type = ErrorType.VALIDATION


class StoreError(FolioError):
    """Raised when the content store fails for a reason other than a slug conflict."""


class InvalidationError(FolioError):
    """Raised when stale pages could not be signalled."""


class UnknownUploadRouteError(FolioError):
    """Raised when an upload callback names a route that is not declared."""

    error_type = ErrorType.NOT_FOUND

    def __init__(self, route: str) -> None:
        super().__init__(f"Unknown upload route: {route}", details={"route": route})
