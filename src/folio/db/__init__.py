"""Folio database module.

This module provides:
- SQLModel tables for projects, blog posts, experiences and site settings
- Async connection management with SQLAlchemy 2.0

Usage:
    from folio.db import get_session, Project

    async with get_session() as session:
        result = await session.execute(select(Project))
"""

from folio.db.connection import (
    check_database_health,
    close_db,
    configure_database,
    get_session,
    get_session_factory,
    init_db,
)
from folio.db.models import BlogPost, Experience, Project, SiteSettings

__all__ = [
    # Connection
    "check_database_health",
    "close_db",
    "configure_database",
    "get_session",
    "get_session_factory",
    "init_db",
    # Models
    "BlogPost",
    "Experience",
    "Project",
    "SiteSettings",
]
