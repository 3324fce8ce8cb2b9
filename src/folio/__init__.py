"""Folio - content backend for a personal portfolio site.

Public read API for projects, blog posts, experience entries and site
settings, plus the admin mutation layer that keeps slugs unique and
rendered pages fresh.
"""

from folio.config import Settings

__version__ = "0.1.0"
__all__ = ["Settings", "__version__"]
