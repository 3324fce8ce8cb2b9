"""Content mutation service.

The only path through which content is created, updated or deleted. Each
write runs the same sequence:

1. validate the form input
2. check slug uniqueness (excluding the record itself on update)
3. normalize empty optional fields to None
4. derive computed fields (read time, first publication time)
5. write the single record
6. invalidate every cached page that could show it

The pre-check in step 2 exists for a friendly message; the unique index on
the slug column is what guarantees uniqueness, and a violation raised at
commit time is reported the same way.
"""

import math
from collections.abc import Mapping
from datetime import datetime
from typing import Any
from uuid import UUID

import structlog
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import SQLModel, col, select

from folio.cache import CacheInvalidator, get_invalidator
from folio.db.connection import get_session_factory
from folio.db.models import BlogPost, Experience, Project, SiteSettings, utcnow_naive
from folio.errors import (
    EntityNotFoundError,
    FolioError,
    FormValidationError,
    SlugConflictError,
    StoreError,
    UnsupportedOperationError,
)
from folio.models.entities import SETTINGS_ID, EntityKind
from folio.models.forms import BlogPostForm, ContentForm, SluggedForm
from folio.services.results import ServiceResult
from folio.slugs import is_valid_slug, slugify
from folio.validation import validate_form

log = structlog.get_logger()

WORDS_PER_MINUTE = 200

MODELS: dict[EntityKind, type[SQLModel]] = {
    EntityKind.PROJECT: Project,
    EntityKind.BLOG_POST: BlogPost,
    EntityKind.EXPERIENCE: Experience,
}

FormInput = Mapping[str, Any] | BaseModel


def calculate_read_time(content: str) -> int:
    """Minutes to read at 200 words per minute, rounded up."""
    words = len(content.split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def parse_id(entity_id: str | UUID) -> UUID | None:
    """Parse a record id; None when it cannot name any record."""
    if isinstance(entity_id, UUID):
        return entity_id
    try:
        return UUID(str(entity_id))
    except ValueError:
        return None


def _first_published_at(published: bool, current: datetime | None) -> datetime | None:
    # published_at marks first publication: kept once set, set on first publish
    if current is not None:
        return current
    return utcnow_naive() if published else None


def _is_slug_violation(error: IntegrityError) -> bool:
    return "slug" in str(error.orig).lower()


class ContentService:
    """Create, update and delete portfolio content."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        invalidator: CacheInvalidator | None = None,
    ) -> None:
        self._session_factory = session_factory or get_session_factory()
        self._invalidator = invalidator or get_invalidator()

    # -------------------------------------------------------------------------
    # Create / Update / Delete
    # -------------------------------------------------------------------------

    async def create(self, kind: EntityKind, data: FormInput) -> ServiceResult:
        """Create a record. Settings are saved through save_settings."""
        if kind is EntityKind.SETTINGS:
            return await self.save_settings(data)

        try:
            form = validate_form(kind, data)
            values = self._prepare(kind, form, existing=None)
            slug = values.get("slug")
            async with self._session_factory() as session:
                if slug is not None:
                    await self._ensure_slug_available(session, kind, slug)
                record = MODELS[kind](**values)
                session.add(record)
                await self._commit(session, kind, slug)
        except FolioError as e:
            return self._failure(kind, "create", e)
        except SQLAlchemyError as e:
            return self._store_failure(kind, "create", e)

        log.info("content_created", kind=kind.value, id=str(record.id), slug=slug)  # type: ignore[attr-defined]
        await self._invalidate(kind, slug=slug)
        return ServiceResult.ok(kind, "create", record)

    async def update(self, kind: EntityKind, entity_id: str | UUID, data: FormInput) -> ServiceResult:
        """Replace a record's fields. A missing slug keeps the stored one."""
        if kind is EntityKind.SETTINGS:
            return await self.save_settings(data)

        try:
            form = validate_form(kind, data)
            async with self._session_factory() as session:
                record = await self._load(session, kind, entity_id)
                previous_slug = getattr(record, "slug", None)
                values = self._prepare(kind, form, existing=record)
                slug = values.get("slug")
                if slug is not None:
                    await self._ensure_slug_available(session, kind, slug, exclude_id=record.id)  # type: ignore[attr-defined]
                for key, value in values.items():
                    setattr(record, key, value)
                record.updated_at = utcnow_naive()  # type: ignore[attr-defined]
                await self._commit(session, kind, slug, entity_id)
        except FolioError as e:
            return self._failure(kind, "update", e)
        except SQLAlchemyError as e:
            return self._store_failure(kind, "update", e)

        log.info("content_updated", kind=kind.value, id=str(entity_id), slug=slug)
        await self._invalidate(
            kind,
            slug=slug,
            previous_slug=previous_slug if previous_slug != slug else None,
        )
        return ServiceResult.ok(kind, "update", record)

    async def delete(self, kind: EntityKind, entity_id: str | UUID) -> ServiceResult:
        """Delete a record by id. Unknown ids are reported, not ignored."""
        try:
            if kind is EntityKind.SETTINGS:
                raise UnsupportedOperationError("Settings cannot be deleted")
            async with self._session_factory() as session:
                record = await self._load(session, kind, entity_id)
                slug = getattr(record, "slug", None)
                await session.delete(record)
                await session.commit()
        except FolioError as e:
            return self._failure(kind, "delete", e)
        except SQLAlchemyError as e:
            return self._store_failure(kind, "delete", e)

        log.info("content_deleted", kind=kind.value, id=str(entity_id), slug=slug)
        await self._invalidate(kind, slug=slug)
        return ServiceResult.ok(kind, "delete")

    async def save_settings(self, data: FormInput) -> ServiceResult:
        """Upsert the singleton settings record."""
        kind = EntityKind.SETTINGS
        try:
            form = validate_form(kind, data)
            values = form.model_dump()
            try:
                record = await self._write_settings(values)
            except IntegrityError:
                # Another request created the row between our read and insert
                log.info("settings_created_concurrently")
                record = await self._write_settings(values)
        except FolioError as e:
            return self._failure(kind, "update", e)
        except SQLAlchemyError as e:
            return self._store_failure(kind, "update", e)

        log.info("settings_saved", name=record.name)
        await self._invalidate(kind)
        return ServiceResult.ok(kind, "update", record)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _prepare(
        self, kind: EntityKind, form: ContentForm, existing: SQLModel | None
    ) -> dict[str, Any]:
        """Column values for a validated form, including computed fields."""
        values = form.model_dump()

        if isinstance(form, SluggedForm):
            if form.slug:
                slug = form.slug
            elif existing is not None:
                # Never re-derive on edit; that would silently break links
                slug = existing.slug  # type: ignore[attr-defined]
            else:
                slug = slugify(form.title)
                if not is_valid_slug(slug):
                    raise FormValidationError(
                        {"slug": "Slug is required when the title has no letters or digits"}
                    )
            values["slug"] = slug

        if kind in (EntityKind.PROJECT, EntityKind.BLOG_POST):
            current = existing.published_at if existing is not None else None  # type: ignore[attr-defined]
            values["published_at"] = _first_published_at(values["published"], current)

        if isinstance(form, BlogPostForm):
            values["read_time"] = calculate_read_time(form.content)

        if kind is EntityKind.EXPERIENCE and values.get("current"):
            values["end_date"] = None

        return values

    async def _load(self, session: AsyncSession, kind: EntityKind, entity_id: str | UUID) -> Any:
        parsed = parse_id(entity_id)
        record = await session.get(MODELS[kind], parsed) if parsed is not None else None
        if record is None:
            raise EntityNotFoundError(kind.label, str(entity_id))
        return record

    async def _ensure_slug_available(
        self,
        session: AsyncSession,
        kind: EntityKind,
        slug: str,
        exclude_id: UUID | None = None,
    ) -> None:
        model: Any = MODELS[kind]
        stmt = select(model.id).where(col(model.slug) == slug)
        if exclude_id is not None:
            stmt = stmt.where(col(model.id) != exclude_id)
        result = await session.execute(stmt)
        if result.first() is not None:
            raise SlugConflictError(kind.label, slug)

    async def _commit(
        self,
        session: AsyncSession,
        kind: EntityKind,
        slug: str | None,
        entity_id: str | UUID | None = None,
    ) -> None:
        try:
            await session.commit()
        except StaleDataError as e:
            # The row was deleted between load and write
            await session.rollback()
            raise EntityNotFoundError(kind.label, str(entity_id)) from e
        except IntegrityError as e:
            await session.rollback()
            if slug is not None and _is_slug_violation(e):
                log.warning("slug_conflict_on_write", kind=kind.value, slug=slug)
                raise SlugConflictError(kind.label, slug) from e
            raise

    async def _write_settings(self, values: dict[str, Any]) -> SiteSettings:
        async with self._session_factory() as session:
            record = await session.get(SiteSettings, SETTINGS_ID)
            if record is None:
                record = SiteSettings(id=SETTINGS_ID, **values)
                session.add(record)
            else:
                for key, value in values.items():
                    setattr(record, key, value)
                record.updated_at = utcnow_naive()
            try:
                await session.commit()
            except IntegrityError:
                await session.rollback()
                raise
            return record

    async def _invalidate(
        self,
        kind: EntityKind,
        slug: str | None = None,
        previous_slug: str | None = None,
    ) -> None:
        # The write already succeeded; a stale page is the worst outcome here
        try:
            await self._invalidator.invalidate(kind, slug=slug, previous_slug=previous_slug)
        except Exception:
            log.exception("cache_invalidation_failed", kind=kind.value, slug=slug)

    def _failure(self, kind: EntityKind, action: str, exc: FolioError) -> ServiceResult:
        log.info(
            "content_mutation_rejected",
            kind=kind.value,
            action=action,
            error_type=exc.error_type.value,
            error=exc.message,
        )
        return ServiceResult.failed(kind, action, exc)

    def _store_failure(self, kind: EntityKind, action: str, exc: SQLAlchemyError) -> ServiceResult:
        log.exception("content_mutation_failed", kind=kind.value, action=action, error=str(exc))
        return ServiceResult.failed(kind, action, StoreError(f"Failed to {action} {kind.label}"))
