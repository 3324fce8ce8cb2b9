"""Pydantic schemas for API responses.

Request bodies are taken as raw form dicts and validated by the content
services, so field errors come back inside the result envelope.
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from folio.models.entities import ExperienceType


class RecordRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class ProjectRead(RecordRead):
    id: UUID
    slug: str
    title: str
    description: str
    cover_image: str
    tags: list[str]
    demo_url: str | None = None
    repo_url: str | None = None
    content: str | None = None
    published: bool
    featured: bool
    order: int
    created_at: datetime
    updated_at: datetime
    published_at: datetime | None = None


class BlogPostRead(RecordRead):
    id: UUID
    slug: str
    title: str
    excerpt: str
    content: str
    cover_image: str | None = None
    tags: list[str]
    published: bool
    featured: bool
    read_time: int
    views: int
    created_at: datetime
    updated_at: datetime
    published_at: datetime | None = None


class BlogPostSummary(RecordRead):
    """Listing view of a post, without the body."""

    id: UUID
    slug: str
    title: str
    excerpt: str
    cover_image: str | None = None
    tags: list[str]
    featured: bool
    read_time: int
    views: int
    published_at: datetime | None = None


class ExperienceRead(RecordRead):
    id: UUID
    type: ExperienceType
    title: str
    organization: str
    location: str | None = None
    description: str | None = None
    skills: list[str]
    start_date: date
    end_date: date | None = None
    current: bool
    order: int


class SettingsRead(RecordRead):
    name: str
    tagline: str
    bio: str
    tech_stack: list[str]
    email: str | None = None
    location: str | None = None
    github: str | None = None
    linkedin: str | None = None
    twitter: str | None = None
    profile_image: str | None = None
    updated_at: datetime

