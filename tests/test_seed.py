"""Tests for sample content seeding."""

from typing import Any

import pytest

from folio.models.entities import EntityKind
from folio.seed import (
    SEED_EXPERIENCES,
    SEED_POSTS,
    SEED_PROJECTS,
    count_records,
    seed_database,
)
from folio.services.mutations import ContentService
from folio.services.queries import QueryService

EXPECTED = {
    EntityKind.SETTINGS.value: 1,
    EntityKind.PROJECT.value: len(SEED_PROJECTS),
    EntityKind.EXPERIENCE.value: len(SEED_EXPERIENCES),
    EntityKind.BLOG_POST.value: len(SEED_POSTS),
}


class TestSeedDatabase:
    """Tests for seed_database."""

    @pytest.mark.asyncio
    async def test_fresh_database(self, database: Any) -> None:
        report = await seed_database()

        assert report.errors == []
        assert report.created == EXPECTED
        assert report.skipped == {}

    @pytest.mark.asyncio
    async def test_second_run_creates_nothing(self, database: Any) -> None:
        await seed_database()

        report = await seed_database()

        assert report.errors == []
        assert report.created == {}
        assert report.skipped == EXPECTED
        assert await count_records() == {
            EntityKind.PROJECT.value: len(SEED_PROJECTS),
            EntityKind.BLOG_POST.value: len(SEED_POSTS),
            EntityKind.EXPERIENCE.value: len(SEED_EXPERIENCES),
        }

    @pytest.mark.asyncio
    async def test_existing_records_are_left_alone(
        self,
        content: ContentService,
        queries: QueryService,
        project_data: dict[str, Any],
        settings_data: dict[str, Any],
    ) -> None:
        """A project that already uses a sample slug keeps its own content."""
        await content.save_settings(settings_data)
        await content.create(EntityKind.PROJECT, {**project_data, "slug": "ai-chat-assistant"})

        report = await seed_database()

        assert report.skipped == {EntityKind.SETTINGS.value: 1, EntityKind.PROJECT.value: 1}
        assert report.created[EntityKind.PROJECT.value] == len(SEED_PROJECTS) - 1
        project = await queries.get_by_slug(EntityKind.PROJECT, "ai-chat-assistant")
        assert project.data.title == project_data["title"]
        settings = await queries.get_settings()
        assert settings.data.name == settings_data["name"]

    @pytest.mark.asyncio
    async def test_seeded_content_is_public(self, queries: QueryService) -> None:
        await seed_database()

        featured = await queries.list_featured(EntityKind.PROJECT)
        post = await queries.get_by_slug(EntityKind.BLOG_POST, "hello-world")

        assert [p.slug for p in featured.data] == ["ecommerce-platform", "task-management-app"]
        assert post.success is True


class TestCountRecords:
    """Tests for count_records."""

    @pytest.mark.asyncio
    async def test_empty(self, database: Any) -> None:
        assert await count_records() == {
            EntityKind.PROJECT.value: 0,
            EntityKind.BLOG_POST.value: 0,
            EntityKind.EXPERIENCE.value: 0,
        }
