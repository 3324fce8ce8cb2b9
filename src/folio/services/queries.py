"""Read-only content accessors for the public site and the admin.

Public accessors only ever return published records. View counting is a
side write that never fails the read it accompanies.
"""

from typing import Any
from uuid import UUID

import structlog
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlmodel import col, select

from folio.db.connection import get_session_factory
from folio.db.models import BlogPost, Experience, Project, SiteSettings
from folio.errors import EntityNotFoundError, FolioError, StoreError, UnsupportedOperationError
from folio.models.entities import DEFAULT_TECH_STACK, SETTINGS_ID, EntityKind, ExperienceType
from folio.services.mutations import MODELS, parse_id
from folio.services.results import ServiceResult

log = structlog.get_logger()

DEFAULT_SETTINGS: dict[str, Any] = {
    "name": "Your Name",
    "tagline": "Welcome to my portfolio! Update this text in the Settings page.",
    "bio": "Welcome to my portfolio! Update this text in the Settings page.",
    "tech_stack": list(DEFAULT_TECH_STACK),
}

ORDERING: dict[EntityKind, tuple[Any, ...]] = {
    EntityKind.PROJECT: (col(Project.order).asc(), col(Project.created_at).desc()),
    EntityKind.BLOG_POST: (col(BlogPost.created_at).desc(),),
    EntityKind.EXPERIENCE: (col(Experience.order).asc(), col(Experience.start_date).desc()),
}


class QueryService:
    """Read accessors over the content store."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None) -> None:
        self._session_factory = session_factory or get_session_factory()

    # -------------------------------------------------------------------------
    # Single records
    # -------------------------------------------------------------------------

    async def get_by_id(self, kind: EntityKind, entity_id: str | UUID) -> ServiceResult:
        """Any record by id, published or not (admin)."""
        if kind is EntityKind.SETTINGS:
            return await self.get_settings()
        try:
            parsed = parse_id(entity_id)
            async with self._session_factory() as session:
                record = await session.get(MODELS[kind], parsed) if parsed else None
            if record is None:
                raise EntityNotFoundError(kind.label, str(entity_id))
        except FolioError as e:
            return ServiceResult.failed(kind, "get", e)
        except SQLAlchemyError as e:
            return self._store_failure(kind, "get", e)
        return ServiceResult.ok(kind, "get", record)

    async def get_by_slug(self, kind: EntityKind, slug: str) -> ServiceResult:
        """A published record by slug; drafts are reported as not found."""
        try:
            if not kind.has_slug:
                raise EntityNotFoundError(kind.label, slug)
            model: Any = MODELS[kind]
            stmt = select(model).where(col(model.slug) == slug, col(model.published).is_(True))
            async with self._session_factory() as session:
                record = (await session.execute(stmt)).scalars().first()
            if record is None:
                raise EntityNotFoundError(kind.label, slug)
        except FolioError as e:
            return ServiceResult.failed(kind, "get", e)
        except SQLAlchemyError as e:
            return self._store_failure(kind, "get", e)
        return ServiceResult.ok(kind, "get", record)

    # -------------------------------------------------------------------------
    # Listings
    # -------------------------------------------------------------------------

    async def list_all(self, kind: EntityKind) -> ServiceResult:
        """Every record of a kind, drafts included (admin)."""
        return await self._list(kind, published_only=False)

    async def list_published(self, kind: EntityKind) -> ServiceResult:
        """Published records in display order.

        Experience entries have no draft state and are always listed.
        """
        return await self._list(kind, published_only=True)

    async def list_featured(self, kind: EntityKind) -> ServiceResult:
        """Published and featured records, for the home page."""
        return await self._list(kind, published_only=True, featured_only=True)

    async def list_experiences_by_type(self, experience_type: ExperienceType) -> ServiceResult:
        return await self._list(
            EntityKind.EXPERIENCE,
            published_only=False,
            where=(col(Experience.type) == experience_type.value,),
        )

    async def _list(
        self,
        kind: EntityKind,
        *,
        published_only: bool,
        featured_only: bool = False,
        where: tuple[Any, ...] = (),
    ) -> ServiceResult:
        try:
            if kind is EntityKind.SETTINGS:
                raise UnsupportedOperationError("Settings is a single record, not a list")
            model: Any = MODELS[kind]
            stmt = select(model).order_by(*ORDERING[kind])
            if where:
                stmt = stmt.where(*where)
            if published_only and hasattr(model, "published"):
                stmt = stmt.where(col(model.published).is_(True))
            if featured_only and hasattr(model, "featured"):
                stmt = stmt.where(col(model.featured).is_(True))
            async with self._session_factory() as session:
                records = list((await session.execute(stmt)).scalars().all())
        except FolioError as e:
            return ServiceResult.failed(kind, "list", e)
        except SQLAlchemyError as e:
            return self._store_failure(kind, "list", e)
        return ServiceResult.ok(kind, "list", records)

    # -------------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------------

    async def get_settings(self) -> ServiceResult:
        """Get the settings record, creating it with defaults if absent.

        Idempotent: a concurrent first read that loses the insert race
        re-reads the winner's row.
        """
        kind = EntityKind.SETTINGS
        try:
            record = await self._read_or_create_settings()
        except IntegrityError:
            log.info("settings_initialized_concurrently")
            try:
                record = await self._read_or_create_settings()
            except SQLAlchemyError as e:
                return self._store_failure(kind, "get", e)
        except SQLAlchemyError as e:
            return self._store_failure(kind, "get", e)
        return ServiceResult.ok(kind, "get", record)

    async def _read_or_create_settings(self) -> SiteSettings:
        async with self._session_factory() as session:
            record = await session.get(SiteSettings, SETTINGS_ID)
            if record is not None:
                return record
            record = SiteSettings(id=SETTINGS_ID, **DEFAULT_SETTINGS)
            session.add(record)
            try:
                await session.commit()
            except IntegrityError:
                await session.rollback()
                raise
            log.info("settings_initialized", id=SETTINGS_ID)
            return record

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    async def increment_views(self, slug: str) -> bool:
        """Atomically bump a blog post's view counter.

        Fire-and-forget: never raises and never creates a record. Returns
        whether a post was counted.
        """
        stmt = (
            update(BlogPost)
            .where(col(BlogPost.slug) == slug)
            # keep updated_at for content edits only
            .values(views=col(BlogPost.views) + 1, updated_at=col(BlogPost.updated_at))
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                await session.commit()
        except Exception as e:
            log.warning("views_increment_failed", slug=slug, error=str(e))
            return False

        if not result.rowcount:  # type: ignore[attr-defined]
            log.debug("views_increment_skipped", slug=slug, reason="no_such_post")
            return False
        return True

    def _store_failure(self, kind: EntityKind, action: str, exc: SQLAlchemyError) -> ServiceResult:
        log.exception("content_query_failed", kind=kind.value, action=action, error=str(exc))
        message = f"Failed to fetch {kind.label}" if action == "get" else f"Failed to list {kind.label}"
        return ServiceResult.failed(kind, action, StoreError(message))
