"""Pydantic form models for admin input.

Each form normalizes raw form fields: strings are stripped, empty optional
fields become None, list fields drop blank items. `messages` maps a field
and pydantic error type to the message shown next to the input.
"""

from collections.abc import Iterable
from datetime import date, datetime
from typing import Annotated, Any, ClassVar

from pydantic import (
    AfterValidator,
    AliasChoices,
    AnyHttpUrl,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    TypeAdapter,
    ValidationInfo,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError

from folio.models.entities import DEFAULT_TECH_STACK, ExperienceType
from folio.slugs import is_valid_slug

_URL_ADAPTER = TypeAdapter(AnyHttpUrl)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _validate_url(value: str | None) -> str | None:
    if value is None:
        return None
    try:
        _URL_ADAPTER.validate_python(value)
    except PydanticValidationError as e:
        raise ValueError("Must be a valid URL") from e
    return value


def _clean_list(value: Any) -> Any:
    """Accept a list or a comma-separated string; strip items and drop blanks."""
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, Iterable):
        return value
    cleaned: list[str] = []
    for item in value:
        if not isinstance(item, str):
            return value  # let pydantic report the bad item
        item = item.strip()
        if item:
            cleaned.append(item)
    return cleaned


def _coerce_date(value: Any) -> Any:
    value = _blank_to_none(value)
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        try:
            return datetime.fromisoformat(value).date()
        except ValueError:
            return value
    return value


Url = Annotated[str, AfterValidator(_validate_url)]
OptionalUrl = Annotated[str | None, BeforeValidator(_blank_to_none), AfterValidator(_validate_url)]
OptionalText = Annotated[str | None, BeforeValidator(_blank_to_none)]
OptionalEmail = Annotated[EmailStr | None, BeforeValidator(_blank_to_none)]
StringList = Annotated[list[str], BeforeValidator(_clean_list)]
FormDate = Annotated[date, BeforeValidator(_coerce_date)]
OptionalFormDate = Annotated[date | None, BeforeValidator(_coerce_date)]


class ContentForm(BaseModel):
    """Base for all admin forms."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    messages: ClassVar[dict[str, dict[str, str]]] = {}


class SluggedForm(ContentForm):
    """Forms whose records are addressed by slug on the public site."""

    title: str = Field(min_length=1, max_length=200)
    slug: OptionalText = None

    @field_validator("slug")
    @classmethod
    def check_slug_format(cls, v: str | None) -> str | None:
        if v is not None and not is_valid_slug(v):
            raise ValueError("Slug must be lowercase with hyphens")
        return v


# =============================================================================
# Project
# =============================================================================


class ProjectForm(SluggedForm):
    """Admin form for a project."""

    description: str = Field(min_length=10)
    cover_image: Url
    tags: StringList = Field(min_length=1)
    demo_url: OptionalUrl = None
    repo_url: OptionalUrl = None
    content: OptionalText = None
    featured: bool = False
    order: int = 0
    published: bool = False

    messages: ClassVar[dict[str, dict[str, str]]] = {
        "title": {
            "missing": "Title is required",
            "string_too_short": "Title is required",
            "string_too_long": "Title is too long",
        },
        "description": {
            "missing": "Description is required",
            "string_too_short": "Description must be at least 10 characters",
        },
        "cover_image": {
            "missing": "Cover image is required",
            "value_error": "Cover image must be a valid URL",
        },
        "tags": {
            "missing": "At least one tag is required",
            "too_short": "At least one tag is required",
        },
        "demo_url": {"value_error": "Demo URL must be valid"},
        "repo_url": {"value_error": "Repo URL must be valid"},
    }


# =============================================================================
# BlogPost
# =============================================================================


class BlogPostForm(SluggedForm):
    """Admin form for a blog post. Read time is always computed."""

    excerpt: str = Field(min_length=10)
    content: str = Field(min_length=50)
    cover_image: OptionalUrl = None
    tags: StringList = Field(min_length=1)
    published: bool = False
    featured: bool = False

    messages: ClassVar[dict[str, dict[str, str]]] = {
        "title": {
            "missing": "Title is required",
            "string_too_short": "Title is required",
            "string_too_long": "Title is too long",
        },
        "excerpt": {
            "missing": "Excerpt is required",
            "string_too_short": "Excerpt must be at least 10 characters",
        },
        "content": {
            "missing": "Content is required",
            "string_too_short": "Content must be at least 50 characters",
        },
        "cover_image": {"value_error": "Cover image must be valid"},
        "tags": {
            "missing": "At least one tag is required",
            "too_short": "At least one tag is required",
        },
    }


# =============================================================================
# Experience
# =============================================================================


class ExperienceForm(ContentForm):
    """Admin form for an experience entry.

    `current` is declared before `end_date` so the end date validator can
    clear it for ongoing entries.
    """

    type: ExperienceType
    title: str = Field(min_length=1, max_length=200)
    organization: str = Field(
        min_length=1,
        max_length=200,
        validation_alias=AliasChoices("organization", "company"),
    )
    location: OptionalText = None
    description: OptionalText = None
    skills: StringList = Field(default_factory=list)
    start_date: FormDate
    current: bool = False
    end_date: OptionalFormDate = None
    order: int = 0

    messages: ClassVar[dict[str, dict[str, str]]] = {
        "type": {
            "missing": "Experience type is required",
            "enum": "Experience type must be work, education or volunteer",
        },
        "title": {"missing": "Title is required", "string_too_short": "Title is required"},
        "organization": {
            "missing": "Company/Institution is required",
            "string_too_short": "Company/Institution is required",
        },
        "start_date": {"missing": "Start date is required"},
    }

    @field_validator("end_date")
    @classmethod
    def check_end_date(cls, v: date | None, info: ValidationInfo) -> date | None:
        if info.data.get("current"):
            return None
        start = info.data.get("start_date")
        if v is not None and start is not None and v < start:
            raise ValueError("End date cannot be before start date")
        return v


# =============================================================================
# Settings
# =============================================================================


class SettingsForm(ContentForm):
    """Admin form for the site-wide settings record."""

    name: str = Field(min_length=1, max_length=100)
    tagline: str = Field(min_length=10)
    bio: str = Field(min_length=10)
    tech_stack: StringList = Field(
        default_factory=lambda: list(DEFAULT_TECH_STACK),
        min_length=1,
    )
    email: OptionalEmail = None
    location: OptionalText = None
    github: OptionalUrl = None
    linkedin: OptionalUrl = None
    twitter: OptionalUrl = None
    profile_image: OptionalUrl = None

    messages: ClassVar[dict[str, dict[str, str]]] = {
        "name": {
            "missing": "Name is required",
            "string_too_short": "Name is required",
            "string_too_long": "Name is too long",
        },
        "tagline": {
            "missing": "Tagline is required",
            "string_too_short": "Tagline must be at least 10 characters",
        },
        "bio": {
            "missing": "Bio is required",
            "string_too_short": "Bio must be at least 10 characters",
        },
        "tech_stack": {"too_short": "Add at least one technology"},
        "email": {"value_error": "Invalid email address"},
        "github": {"value_error": "Invalid URL"},
        "linkedin": {"value_error": "Invalid URL"},
        "twitter": {"value_error": "Invalid URL"},
        "profile_image": {"value_error": "Invalid URL"},
    }
