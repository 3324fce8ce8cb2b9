"""Tests for slug derivation."""

import pytest

from folio.slugs import SLUG_MAX_LENGTH, is_valid_slug, slugify


class TestSlugify:
    """Tests for slugify()."""

    def test_lowercases_and_hyphenates(self) -> None:
        """Title words become lowercase hyphen-joined segments."""
        assert slugify("Hello World") == "hello-world"

    def test_strips_punctuation(self) -> None:
        """Characters outside [a-z0-9], whitespace and hyphens are dropped."""
        assert slugify("What's New in C++?") == "whats-new-in-c"

    def test_collapses_hyphens_and_whitespace(self) -> None:
        """Runs of whitespace or hyphens collapse to a single hyphen."""
        assert slugify("  A  --  B   c  ") == "a-b-c"

    def test_trims_edge_hyphens(self) -> None:
        assert slugify("--Edge--") == "edge"

    def test_is_idempotent(self) -> None:
        """Slugifying a slug returns it unchanged."""
        once = slugify("Some Title: Part 2")
        assert slugify(once) == once

    def test_no_letters_or_digits_gives_empty(self) -> None:
        """A title with nothing usable yields an empty slug."""
        assert slugify("!!! ???") == ""
        assert slugify("日本語") == ""

    def test_truncates_to_max_length(self) -> None:
        """Long titles are truncated without leaving a trailing hyphen."""
        slug = slugify("ab " * 150)
        assert len(slug) <= SLUG_MAX_LENGTH
        assert not slug.endswith("-")
        assert is_valid_slug(slug)

    @pytest.mark.parametrize(
        "title",
        ["Hello World", "E-Commerce Platform", "2024 in Review", "  spaced   out  "],
    )
    def test_derived_slugs_are_valid(self, title: str) -> None:
        assert is_valid_slug(slugify(title))


class TestIsValidSlug:
    """Tests for slug format checks."""

    @pytest.mark.parametrize("slug", ["a", "hello-world", "v2-release-notes", "2024"])
    def test_valid(self, slug: str) -> None:
        assert is_valid_slug(slug)

    @pytest.mark.parametrize(
        "slug",
        ["", "Hello", "hello_world", "-hello", "hello-", "hello--world", "hello world"],
    )
    def test_invalid(self, slug: str) -> None:
        assert not is_valid_slug(slug)
