"""Pydantic models for Folio content."""

from folio.models.entities import (
    DEFAULT_TECH_STACK,
    SETTINGS_ID,
    EntityKind,
    ExperienceType,
)
from folio.models.forms import (
    BlogPostForm,
    ContentForm,
    ExperienceForm,
    ProjectForm,
    SettingsForm,
)

__all__ = [
    "DEFAULT_TECH_STACK",
    "SETTINGS_ID",
    "BlogPostForm",
    "ContentForm",
    "EntityKind",
    "ExperienceForm",
    "ExperienceType",
    "ProjectForm",
    "SettingsForm",
]
