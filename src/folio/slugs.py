"""Slug derivation for URL-safe identifiers."""

import re

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
SLUG_MAX_LENGTH = 200

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-{2,}")


def slugify(text: str) -> str:
    """Derive a candidate slug from a title.

    Deterministic and idempotent; uniqueness is checked at write time by
    the mutation service. May return an empty string when the title has no
    ASCII letters or digits.
    """
    slug = _DISALLOWED.sub("", text.lower())
    slug = _WHITESPACE.sub("-", slug.strip())
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")[:SLUG_MAX_LENGTH].rstrip("-")


def is_valid_slug(slug: str) -> bool:
    """Check a slug against the lowercase-hyphenated format."""
    return 0 < len(slug) <= SLUG_MAX_LENGTH and SLUG_PATTERN.match(slug) is not None
