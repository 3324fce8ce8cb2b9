"""Sample content for a fresh portfolio database.

Seeding goes through ContentService so the data passes the same validation
as admin input. Re-running is safe: settings are only written when absent,
projects and posts are skipped when their slug exists, and experience
entries when an entry with the same title and organization exists.
"""

from dataclasses import dataclass, field
from typing import Any

import structlog
from sqlalchemy import func
from sqlmodel import select

from folio.db.connection import get_session_factory
from folio.db.models import BlogPost, Experience, Project, SiteSettings
from folio.models.entities import SETTINGS_ID, EntityKind
from folio.services.mutations import ContentService

log = structlog.get_logger()

SEED_SETTINGS: dict[str, Any] = {
    "name": "Your Name",
    "tagline": (
        "Full Stack Developer specializing in Next.js, React, and TypeScript. "
        "Building modern web applications and experiences."
    ),
    "bio": (
        "I'm a passionate developer who loves building amazing web applications. "
        "This portfolio showcases my work in full-stack development, focusing on "
        "modern technologies like Next.js, React, and TypeScript."
    ),
    "email": "hello@example.com",
    "location": "San Francisco, CA",
}

SEED_PROJECTS: list[dict[str, Any]] = [
    {
        "title": "E-Commerce Platform",
        "slug": "ecommerce-platform",
        "description": (
            "A full-featured e-commerce platform built with Next.js, featuring real-time "
            "inventory, Stripe payments, and admin dashboard."
        ),
        "cover_image": "https://images.unsplash.com/photo-1556742049-0cfed4f6a45d?w=800&q=80",
        "tags": ["Next.js", "TypeScript", "Prisma", "Stripe", "Tailwind CSS"],
        "demo_url": "https://example.com/demo",
        "repo_url": "https://github.com/username/ecommerce",
        "featured": True,
        "published": True,
        "order": 1,
    },
    {
        "title": "Task Management App",
        "slug": "task-management-app",
        "description": (
            "A Kanban-style task management application with drag-and-drop, real-time "
            "collaboration, and team workspaces."
        ),
        "cover_image": "https://images.unsplash.com/photo-1611224923853-80b023f02d71?w=800&q=80",
        "tags": ["React", "Node.js", "Socket.io", "MongoDB"],
        "demo_url": "https://example.com/tasks",
        "repo_url": "https://github.com/username/taskapp",
        "featured": True,
        "published": True,
        "order": 2,
    },
    {
        "title": "AI Chat Assistant",
        "slug": "ai-chat-assistant",
        "description": (
            "An intelligent chat assistant powered by OpenAI GPT-4, featuring conversation "
            "history, custom personas, and markdown rendering."
        ),
        "cover_image": "https://images.unsplash.com/photo-1677442136019-21780ecad995?w=800&q=80",
        "tags": ["Python", "FastAPI", "OpenAI", "React", "WebSocket"],
        "demo_url": "https://example.com/chat",
        "repo_url": "https://github.com/username/ai-chat",
        "featured": False,
        "published": True,
        "order": 3,
    },
]

SEED_EXPERIENCES: list[dict[str, Any]] = [
    {
        "type": "work",
        "title": "Senior Full Stack Developer",
        "organization": "Tech Company Inc.",
        "location": "San Francisco, CA (Remote)",
        "description": (
            "Led development of multiple client projects using Next.js and React. "
            "Mentored junior developers and established coding standards."
        ),
        "skills": ["Next.js", "React", "TypeScript", "PostgreSQL", "AWS"],
        "start_date": "2022-01-01",
        "current": True,
        "order": 1,
    },
    {
        "type": "work",
        "title": "Full Stack Developer",
        "organization": "Startup Labs",
        "location": "New York, NY",
        "description": (
            "Built and maintained SaaS applications serving 10,000+ users. "
            "Implemented CI/CD pipelines and automated testing."
        ),
        "skills": ["React", "Node.js", "MongoDB", "Docker", "GitHub Actions"],
        "start_date": "2020-03-01",
        "end_date": "2021-12-31",
        "current": False,
        "order": 2,
    },
    {
        "type": "education",
        "title": "Bachelor of Science in Computer Science",
        "organization": "University of Technology",
        "location": "Boston, MA",
        "description": (
            "Graduated with honors. Focus on software engineering and machine learning."
        ),
        "skills": ["Algorithms", "Data Structures", "Machine Learning", "Software Engineering"],
        "start_date": "2016-09-01",
        "end_date": "2020-05-31",
        "current": False,
        "order": 3,
    },
]

SEED_POSTS: list[dict[str, Any]] = [
    {
        "title": "Hello, World",
        "slug": "hello-world",
        "excerpt": "Why this site exists and what you can expect to find here.",
        "content": (
            "Welcome to the blog. This is where I write about the projects on this site, "
            "the tools I use to build them, and the things I learn along the way. "
            "Edit or delete this post from the admin dashboard."
        ),
        "tags": ["Meta"],
        "published": True,
        "featured": False,
    },
]


@dataclass
class SeedReport:
    """What a seed run created and skipped."""

    created: dict[str, int] = field(default_factory=dict)
    skipped: dict[str, int] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    def _count(self, bucket: dict[str, int], kind: EntityKind) -> None:
        bucket[kind.value] = bucket.get(kind.value, 0) + 1

    def add_created(self, kind: EntityKind) -> None:
        self._count(self.created, kind)

    def add_skipped(self, kind: EntityKind) -> None:
        self._count(self.skipped, kind)


async def seed_database(content: ContentService | None = None) -> SeedReport:
    """Insert the sample content that is not already present."""
    content = content or ContentService()
    report = SeedReport()
    session_factory = get_session_factory()

    async with session_factory() as session:
        has_settings = await session.get(SiteSettings, SETTINGS_ID) is not None
        project_slugs = set((await session.execute(select(Project.slug))).scalars().all())
        post_slugs = set((await session.execute(select(BlogPost.slug))).scalars().all())
        experience_keys = {
            (row.title, row.organization)
            for row in (
                await session.execute(select(Experience.title, Experience.organization))
            ).all()
        }

    pending: list[tuple[EntityKind, dict[str, Any]]] = []
    if has_settings:
        report.add_skipped(EntityKind.SETTINGS)
    else:
        pending.append((EntityKind.SETTINGS, SEED_SETTINGS))
    for project in SEED_PROJECTS:
        if project["slug"] in project_slugs:
            report.add_skipped(EntityKind.PROJECT)
        else:
            pending.append((EntityKind.PROJECT, project))
    for experience in SEED_EXPERIENCES:
        if (experience["title"], experience["organization"]) in experience_keys:
            report.add_skipped(EntityKind.EXPERIENCE)
        else:
            pending.append((EntityKind.EXPERIENCE, experience))
    for post in SEED_POSTS:
        if post["slug"] in post_slugs:
            report.add_skipped(EntityKind.BLOG_POST)
        else:
            pending.append((EntityKind.BLOG_POST, post))

    for kind, data in pending:
        result = await content.create(kind, data)
        if result.success:
            report.add_created(kind)
        else:
            report.errors.append(f"{kind.label}: {result.error}")

    log.info(
        "database_seeded",
        created=report.created,
        skipped=report.skipped,
        errors=len(report.errors),
    )
    return report


async def count_records() -> dict[str, int]:
    """Row counts per content kind."""
    async with get_session_factory()() as session:
        counts: dict[str, int] = {}
        for kind, model in (
            (EntityKind.PROJECT, Project),
            (EntityKind.BLOG_POST, BlogPost),
            (EntityKind.EXPERIENCE, Experience),
        ):
            counts[kind.value] = (
                await session.execute(select(func.count()).select_from(model))
            ).scalar_one()
    return counts
