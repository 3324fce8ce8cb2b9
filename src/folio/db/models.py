"""SQLModel tables for portfolio content.

Architecture:
- Project: showcased work, public once published
- BlogPost: articles with computed read time and a view counter
- Experience: work/education/volunteer timeline entries
- SiteSettings: singleton profile record keyed by "default"

Slugs carry a unique index per table; the mutation service pre-checks them
for a friendly error, the index is what guarantees uniqueness.
"""

from datetime import UTC, date, datetime
from uuid import UUID, uuid4

from sqlalchemy import JSON, String, Text
from sqlmodel import Field, SQLModel

from folio.models.entities import SETTINGS_ID, ExperienceType


def utcnow_naive() -> datetime:
    """Get current UTC time as naive datetime (for TIMESTAMP WITHOUT TIME ZONE)."""
    return datetime.now(UTC).replace(tzinfo=None)


class TimestampMixin(SQLModel):
    """Mixin for created/updated timestamps."""

    created_at: datetime = Field(
        default_factory=utcnow_naive,
        description="When this record was created",
    )
    updated_at: datetime = Field(
        default_factory=utcnow_naive,
        description="When this record was last updated",
        sa_column_kwargs={"onupdate": utcnow_naive},
    )


# =============================================================================
# Project
# =============================================================================


class Project(TimestampMixin, table=True):
    """A portfolio project."""

    __tablename__ = "projects"  # type: ignore[assignment]

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    slug: str = Field(max_length=200, unique=True, index=True, description="URL identifier")
    title: str = Field(max_length=200)
    description: str = Field(sa_type=Text)
    cover_image: str = Field(max_length=2048, description="Cover image URL")
    tags: list[str] = Field(default_factory=list, sa_type=JSON)
    demo_url: str | None = Field(default=None, max_length=2048)
    repo_url: str | None = Field(default=None, max_length=2048)
    content: str | None = Field(default=None, sa_type=Text, description="Long-form write-up")

    published: bool = Field(default=False, index=True)
    featured: bool = Field(default=False)
    order: int = Field(default=0, description="Display order, ascending")
    published_at: datetime | None = Field(default=None, description="First publication time")

    def __repr__(self) -> str:
        return f"<Project {self.slug}>"


# =============================================================================
# BlogPost
# =============================================================================


class BlogPost(TimestampMixin, table=True):
    """A blog article."""

    __tablename__ = "blog_posts"  # type: ignore[assignment]

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    slug: str = Field(max_length=200, unique=True, index=True, description="URL identifier")
    title: str = Field(max_length=200)
    excerpt: str = Field(sa_type=Text)
    content: str = Field(sa_type=Text)
    cover_image: str | None = Field(default=None, max_length=2048)
    tags: list[str] = Field(default_factory=list, sa_type=JSON)

    published: bool = Field(default=False, index=True)
    featured: bool = Field(default=False)
    read_time: int = Field(default=1, ge=0, description="Estimated minutes to read")
    views: int = Field(default=0, ge=0, description="Public view counter")
    published_at: datetime | None = Field(default=None, description="First publication time")

    def __repr__(self) -> str:
        return f"<BlogPost {self.slug}>"


# =============================================================================
# Experience
# =============================================================================


class Experience(TimestampMixin, table=True):
    """A timeline entry on the about page."""

    __tablename__ = "experiences"  # type: ignore[assignment]

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    type: ExperienceType = Field(sa_type=String(20), index=True)
    title: str = Field(max_length=200)
    organization: str = Field(max_length=200, description="Company or institution")
    location: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, sa_type=Text)
    skills: list[str] = Field(default_factory=list, sa_type=JSON)
    start_date: date
    end_date: date | None = Field(default=None)
    current: bool = Field(default=False, description="Ongoing; implies no end date")
    order: int = Field(default=0, description="Display order, ascending")

    def __repr__(self) -> str:
        return f"<Experience {self.type}: {self.title} @ {self.organization}>"


# =============================================================================
# SiteSettings
# =============================================================================


class SiteSettings(TimestampMixin, table=True):
    """Site-wide profile settings. Exactly one row, id "default"."""

    __tablename__ = "site_settings"  # type: ignore[assignment]

    id: str = Field(default=SETTINGS_ID, primary_key=True, max_length=32)
    name: str = Field(max_length=100)
    tagline: str = Field(sa_type=Text)
    bio: str = Field(sa_type=Text)
    tech_stack: list[str] = Field(default_factory=list, sa_type=JSON)
    email: str | None = Field(default=None, max_length=255)
    location: str | None = Field(default=None, max_length=200)
    github: str | None = Field(default=None, max_length=2048)
    linkedin: str | None = Field(default=None, max_length=2048)
    twitter: str | None = Field(default=None, max_length=2048)
    profile_image: str | None = Field(default=None, max_length=2048)

    def __repr__(self) -> str:
        return f"<SiteSettings {self.name}>"
