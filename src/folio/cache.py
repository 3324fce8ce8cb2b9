"""Rendered-page cache and invalidation.

Public read routes cache their response payloads keyed by route path.
After a successful mutation the CacheInvalidator drops every path that
could show the changed record and, when configured, tells the front-end
to revalidate the same paths over HTTP.

Invalidation is best-effort: failures are logged, never raised into the
mutation that triggered them.
"""

from __future__ import annotations

import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any

import httpx
import structlog

from folio.config import settings
from folio.errors import InvalidationError
from folio.models.entities import EntityKind

log = structlog.get_logger()


@dataclass
class CacheStats:
    """Cache performance statistics."""

    hits: int = 0
    misses: int = 0
    evictions: int = 0
    expirations: int = 0
    invalidations: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "expirations": self.expirations,
            "invalidations": self.invalidations,
            "hit_rate": round(self.hit_rate, 4),
        }


@dataclass
class CacheEntry[T]:
    """A cache entry with value and expiration."""

    value: T
    expires_at: float
    created_at: float = field(default_factory=time.time)

    @property
    def is_expired(self) -> bool:
        return time.time() >= self.expires_at


class LRUCache[T]:
    """LRU cache with TTL support.

    Uses OrderedDict for O(1) access and LRU eviction.
    """

    def __init__(self, maxsize: int = 500, default_ttl: float = 300.0) -> None:
        self._cache: OrderedDict[str, CacheEntry[T]] = OrderedDict()
        self._maxsize = maxsize
        self._default_ttl = default_ttl
        self._stats = CacheStats()

    def get(self, key: str) -> T | None:
        """Get value from cache. Returns None if missing or expired."""
        entry = self._cache.get(key)

        if entry is None:
            self._stats.misses += 1
            return None

        if entry.is_expired:
            self._stats.expirations += 1
            self._stats.misses += 1
            del self._cache[key]
            return None

        self._cache.move_to_end(key)
        self._stats.hits += 1
        return entry.value

    def set(self, key: str, value: T, ttl: float | None = None) -> None:
        ttl = ttl if ttl is not None else self._default_ttl

        if key in self._cache:
            self._cache.move_to_end(key)

        self._cache[key] = CacheEntry(value=value, expires_at=time.time() + ttl)

        while len(self._cache) > self._maxsize:
            self._cache.popitem(last=False)
            self._stats.evictions += 1

    def delete(self, key: str) -> bool:
        if key in self._cache:
            del self._cache[key]
            self._stats.invalidations += 1
            return True
        return False

    def clear(self) -> int:
        count = len(self._cache)
        self._cache.clear()
        return count

    def __contains__(self, key: str) -> bool:
        entry = self._cache.get(key)
        return entry is not None and not entry.is_expired

    @property
    def stats(self) -> CacheStats:
        return self._stats

    @property
    def size(self) -> int:
        return len(self._cache)


class PageCache(LRUCache[dict[str, Any]]):
    """Cache of public response payloads keyed by route path."""

    def invalidate_paths(self, paths: list[str]) -> int:
        """Drop cached pages for the given paths. Returns number dropped."""
        dropped = sum(1 for path in paths if self.delete(path))
        log.debug("page_cache_invalidated", paths=paths, dropped=dropped)
        return dropped


# =============================================================================
# Invalidation sets
# =============================================================================

_DETAIL_PREFIX: dict[EntityKind, str] = {
    EntityKind.PROJECT: "/projects",
    EntityKind.BLOG_POST: "/blog",
}

_COLLECTION_PATHS: dict[EntityKind, tuple[str, ...]] = {
    EntityKind.PROJECT: ("/", "/projects", "/admin/projects"),
    EntityKind.BLOG_POST: ("/", "/blog", "/admin/blog"),
    EntityKind.EXPERIENCE: ("/about", "/admin/experience"),
    EntityKind.SETTINGS: ("/", "/about", "/projects", "/blog", "/admin/settings"),
}


def stale_paths(
    kind: EntityKind,
    slug: str | None = None,
    previous_slug: str | None = None,
) -> list[str]:
    """Every rendered route that could include a record of this kind.

    Includes the detail route for the record's slug, and for its previous
    slug when an update renamed it.
    """
    paths = list(_COLLECTION_PATHS[kind])
    prefix = _DETAIL_PREFIX.get(kind)
    if prefix:
        for s in (previous_slug, slug):
            if s and f"{prefix}/{s}" not in paths:
                paths.append(f"{prefix}/{s}")
    return paths


@dataclass
class InvalidationReport:
    """What an invalidation pass did."""

    paths: list[str]
    dropped: int = 0
    webhook_sent: bool = False
    error: str | None = None


class CacheInvalidator:
    """Marks rendered pages stale after mutations.

    Always clears the in-process PageCache; additionally POSTs the stale
    paths to `webhook_url` when one is configured.
    """

    def __init__(
        self,
        page_cache: PageCache,
        *,
        webhook_url: str = "",
        webhook_secret: str = "",
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._page_cache = page_cache
        self._webhook_url = webhook_url
        self._webhook_secret = webhook_secret
        self._timeout = timeout
        self._client = client

    async def invalidate(
        self,
        kind: EntityKind,
        slug: str | None = None,
        previous_slug: str | None = None,
    ) -> InvalidationReport:
        """Invalidate every path for a changed record. Never raises."""
        paths = stale_paths(kind, slug, previous_slug)
        report = InvalidationReport(paths=paths)
        try:
            report.dropped = self._page_cache.invalidate_paths(paths)
            if self._webhook_url:
                await self._notify(paths)
                report.webhook_sent = True
        except InvalidationError as e:
            report.error = e.message
            log.warning("cache_invalidation_failed", kind=kind.value, paths=paths, error=str(e))
        else:
            log.info(
                "cache_invalidated",
                kind=kind.value,
                paths=paths,
                webhook=report.webhook_sent,
            )
        return report

    async def _notify(self, paths: list[str]) -> None:
        client = self._get_client()
        try:
            response = await client.post(
                self._webhook_url,
                json={"paths": paths},
                headers={"x-revalidate-secret": self._webhook_secret},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise InvalidationError(
                f"Revalidation webhook failed: {e}", details={"paths": paths}
            ) from e

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


# Global instances
_cache: PageCache | None = None
_invalidator: CacheInvalidator | None = None


def get_cache() -> PageCache:
    """Get the global page cache."""
    global _cache  # noqa: PLW0603
    if _cache is None:
        _cache = PageCache(maxsize=settings.page_cache_maxsize, default_ttl=settings.page_cache_ttl)
        log.debug("page_cache_initialized", maxsize=settings.page_cache_maxsize)
    return _cache


def get_invalidator() -> CacheInvalidator:
    """Get the global invalidator bound to the global page cache."""
    global _invalidator  # noqa: PLW0603
    if _invalidator is None:
        _invalidator = CacheInvalidator(
            get_cache(),
            webhook_url=settings.revalidate_url,
            webhook_secret=settings.revalidate_secret.get_secret_value(),
            timeout=settings.revalidate_timeout,
        )
    return _invalidator


async def reset_cache() -> None:
    """Drop the global cache and invalidator (closing its HTTP client)."""
    global _cache, _invalidator  # noqa: PLW0603
    if _invalidator is not None:
        await _invalidator.aclose()
    if _cache is not None:
        _cache.clear()
    _cache = None
    _invalidator = None
