"""Form validation entry point.

Turns raw form input into a typed form, or a FormValidationError listing
one human-readable message per offending field.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from folio.errors import FormValidationError
from folio.models.entities import EntityKind
from folio.models.forms import (
    BlogPostForm,
    ContentForm,
    ExperienceForm,
    ProjectForm,
    SettingsForm,
)

FORMS: dict[EntityKind, type[ContentForm]] = {
    EntityKind.PROJECT: ProjectForm,
    EntityKind.BLOG_POST: BlogPostForm,
    EntityKind.EXPERIENCE: ExperienceForm,
    EntityKind.SETTINGS: SettingsForm,
}

_PYDANTIC_PREFIXES = ("Value error, ", "Assertion failed, ")


def validate_form(kind: EntityKind, data: Mapping[str, Any] | BaseModel) -> ContentForm:
    """Validate raw input for an entity kind.

    Raises:
        FormValidationError: with every field violation, write never attempted.
    """
    form_cls = FORMS[kind]
    raw = data.model_dump() if isinstance(data, BaseModel) else dict(data)
    try:
        return form_cls.model_validate(raw)
    except PydanticValidationError as e:
        raise FormValidationError(collect_field_errors(form_cls, e)) from e


def collect_field_errors(
    form_cls: type[ContentForm], error: PydanticValidationError
) -> dict[str, str]:
    """Map pydantic errors to {field: message}, first error per field wins."""
    field_errors: dict[str, str] = {}
    for err in error.errors():
        loc = err.get("loc") or ()
        field = str(loc[0]) if loc else "form"
        if field in field_errors:
            continue
        message = form_cls.messages.get(field, {}).get(err["type"])
        field_errors[field] = message or _clean_message(err["msg"])
    return field_errors


def _clean_message(message: str) -> str:
    for prefix in _PYDANTIC_PREFIXES:
        if message.startswith(prefix):
            return message[len(prefix) :]
    return message
