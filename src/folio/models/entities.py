"""Content kinds and shared enums."""

from enum import StrEnum


class EntityKind(StrEnum):
    """Kinds of content managed by Folio."""

    PROJECT = "project"
    BLOG_POST = "blog_post"
    EXPERIENCE = "experience"
    SETTINGS = "settings"

    @property
    def label(self) -> str:
        """Human-readable name used in messages."""
        return self.value.replace("_", " ")

    @property
    def has_slug(self) -> bool:
        return self in (EntityKind.PROJECT, EntityKind.BLOG_POST)


class ExperienceType(StrEnum):
    """Closed set of experience entry types."""

    WORK = "work"
    EDUCATION = "education"
    VOLUNTEER = "volunteer"


SETTINGS_ID = "default"

DEFAULT_TECH_STACK: tuple[str, ...] = (
    "Next.js",
    "React",
    "TypeScript",
    "Node.js",
    "PostgreSQL",
    "Prisma",
    "TailwindCSS",
    "GraphQL",
)
