"""Public site endpoints.

Each route returns the data one public page renders. Payloads are cached in
the page cache under the page's route, so a mutation that invalidates
``/blog`` also drops the cached ``GET /blog`` response.
"""

from fastapi import APIRouter, BackgroundTasks, Depends
from fastapi.responses import JSONResponse

from folio.api.dependencies import get_query_service
from folio.api.responses import Payload, cached_page, envelope, respond
from folio.api.schemas import (
    BlogPostRead,
    BlogPostSummary,
    ExperienceRead,
    ProjectRead,
    SettingsRead,
)
from folio.models.entities import EntityKind, ExperienceType
from folio.services.queries import QueryService

router = APIRouter(tags=["pages"])


@router.get("/home", summary="Home page: settings plus featured work")
async def home(queries: QueryService = Depends(get_query_service)) -> JSONResponse:
    async def load() -> Payload:
        settings_result = await queries.get_settings()
        if not settings_result.success:
            return envelope(settings_result)
        projects = await queries.list_featured(EntityKind.PROJECT)
        if not projects.success:
            return envelope(projects)
        posts = await queries.list_featured(EntityKind.BLOG_POST)
        if not posts.success:
            return envelope(posts)

        _, settings_body = envelope(settings_result, SettingsRead)
        _, projects_body = envelope(projects, ProjectRead)
        _, posts_body = envelope(posts, BlogPostSummary)
        return 200, {
            "success": True,
            "data": {
                "settings": settings_body["data"],
                "featured_projects": projects_body["data"],
                "featured_posts": posts_body["data"],
            },
        }

    return await cached_page("/", load)


@router.get("/about", summary="About page: settings plus experience timeline")
async def about(queries: QueryService = Depends(get_query_service)) -> JSONResponse:
    async def load() -> Payload:
        settings_result = await queries.get_settings()
        if not settings_result.success:
            return envelope(settings_result)
        experiences = await queries.list_published(EntityKind.EXPERIENCE)
        if not experiences.success:
            return envelope(experiences)

        _, settings_body = envelope(settings_result, SettingsRead)
        _, experiences_body = envelope(experiences, ExperienceRead)
        return 200, {
            "success": True,
            "data": {
                "settings": settings_body["data"],
                "experiences": experiences_body["data"],
            },
        }

    return await cached_page("/about", load)


# =============================================================================
# Projects
# =============================================================================


@router.get("/projects", summary="Published projects")
async def list_projects(queries: QueryService = Depends(get_query_service)) -> JSONResponse:
    async def load() -> Payload:
        return envelope(await queries.list_published(EntityKind.PROJECT), ProjectRead)

    return await cached_page("/projects", load)


@router.get("/projects/{slug}", summary="A published project")
async def get_project(slug: str, queries: QueryService = Depends(get_query_service)) -> JSONResponse:
    async def load() -> Payload:
        return envelope(await queries.get_by_slug(EntityKind.PROJECT, slug), ProjectRead)

    return await cached_page(f"/projects/{slug}", load)


# =============================================================================
# Blog
# =============================================================================


@router.get("/blog", summary="Published blog posts")
async def list_posts(queries: QueryService = Depends(get_query_service)) -> JSONResponse:
    async def load() -> Payload:
        return envelope(await queries.list_published(EntityKind.BLOG_POST), BlogPostSummary)

    return await cached_page("/blog", load)


@router.get("/blog/{slug}", summary="A published blog post")
async def get_post(
    slug: str,
    background_tasks: BackgroundTasks,
    queries: QueryService = Depends(get_query_service),
) -> JSONResponse:
    """Serve a post and count the view after the response is sent.

    The cached payload carries the view count as of the last render.
    """

    async def load() -> Payload:
        return envelope(await queries.get_by_slug(EntityKind.BLOG_POST, slug), BlogPostRead)

    response = await cached_page(f"/blog/{slug}", load)
    if response.status_code == 200:
        background_tasks.add_task(queries.increment_views, slug)
    return response


# =============================================================================
# Experience and settings
# =============================================================================


@router.get("/experiences", summary="Experience timeline")
async def list_experiences(
    type: ExperienceType | None = None,  # noqa: A002
    queries: QueryService = Depends(get_query_service),
) -> JSONResponse:
    if type is not None:
        return respond(await queries.list_experiences_by_type(type), ExperienceRead)
    return respond(await queries.list_published(EntityKind.EXPERIENCE), ExperienceRead)


@router.get("/settings", summary="Public site settings")
async def get_settings(queries: QueryService = Depends(get_query_service)) -> JSONResponse:
    return respond(await queries.get_settings(), SettingsRead)
