"""Shared fixtures: a temporary SQLite database per test, services and sample forms."""

from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from folio.cache import PageCache, get_cache, reset_cache
from folio.db.connection import close_db, configure_database, init_db
from folio.services.mutations import ContentService
from folio.services.queries import QueryService

# =============================================================================
# Database
# =============================================================================


@pytest_asyncio.fixture
async def database(tmp_path: Path) -> AsyncGenerator[async_sessionmaker[AsyncSession]]:
    """Fresh SQLite file with all tables, bound as the module-level database."""
    factory = configure_database(f"sqlite+aiosqlite:///{tmp_path / 'folio.db'}")
    await init_db()
    yield factory
    await reset_cache()
    await close_db()


@pytest.fixture
def page_cache(database: async_sessionmaker[AsyncSession]) -> PageCache:
    return get_cache()


@pytest.fixture
def content(database: async_sessionmaker[AsyncSession]) -> ContentService:
    return ContentService()


@pytest.fixture
def queries(database: async_sessionmaker[AsyncSession]) -> QueryService:
    return QueryService()


@pytest_asyncio.fixture
async def client(database: async_sessionmaker[AsyncSession]) -> AsyncGenerator[httpx.AsyncClient]:
    """HTTP client bound to the API app in-process."""
    from folio.api.app import create_api_app

    transport = httpx.ASGITransport(app=create_api_app())
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as api_client:
        yield api_client


# =============================================================================
# Sample form input
# =============================================================================


@pytest.fixture
def project_data() -> dict[str, Any]:
    return {
        "title": "My Project",
        "description": "A project that does useful things.",
        "cover_image": "https://example.com/cover.png",
        "tags": ["python", "fastapi"],
        "demo_url": "",
        "repo_url": "https://github.com/example/my-project",
        "published": True,
    }


@pytest.fixture
def post_data() -> dict[str, Any]:
    return {
        "title": "Writing Async Python",
        "excerpt": "Notes on structuring async services.",
        "content": " ".join(["word"] * 120),
        "tags": ["python"],
        "published": True,
    }


@pytest.fixture
def experience_data() -> dict[str, Any]:
    return {
        "type": "work",
        "title": "Backend Engineer",
        "organization": "Example Corp",
        "start_date": "2021-03-01",
        "end_date": "2023-06-30",
        "skills": ["Python", "PostgreSQL"],
    }


@pytest.fixture
def settings_data() -> dict[str, Any]:
    return {
        "name": "Ada Example",
        "tagline": "Building dependable web services.",
        "bio": "Engineer focused on backend systems and developer tooling.",
        "tech_stack": ["Python", "PostgreSQL"],
        "email": "ada@example.com",
        "github": "https://github.com/ada",
    }
