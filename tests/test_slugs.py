"""
Tests for slug generation.
"""
import re

import pytest

from blog_cms.slugs import generate_slug, generate_unique_slug

SLUG_PATTERN = re.compile(r"[a-z0-9]+(-[a-z0-9]+)*")


class TestGenerateSlug:
    """Tests for generate_slug."""

    @pytest.mark.parametrize(
        "title, expected",
        [
            ("Hello, World!", "hello-world"),
            ("  Leading and trailing  ", "leading-and-trailing"),
            ("Multiple---hyphens", "multiple-hyphens"),
            ("snake_case_title", "snake-case-title"),
            ("_-_edge_-_", "edge"),
            ("Café Crème", "cafe-creme"),
            ("C++ & Python 3.12", "c-python-312"),
            ("ALL CAPS", "all-caps"),
        ],
    )
    def test_known_titles(self, title, expected):
        assert generate_slug(title) == expected

    @pytest.mark.parametrize(
        "title",
        [
            "Hello, World!",
            "  --Dashes--  everywhere--  ",
            "Tabs\tand\nnewlines",
            "Ünïcödé and émojis 🎉 mixed in",
            "under__scores and -- hyphens",
            "1234",
            "a" * 500,
        ],
    )
    def test_output_shape(self, title):
        """Only lowercase alphanumerics and single inner hyphens."""
        slug = generate_slug(title)
        assert SLUG_PATTERN.fullmatch(slug)

    def test_nothing_usable(self):
        assert generate_slug("!!!") == ""
        assert generate_slug("") == ""
        assert generate_slug(None) == ""

    def test_truncated_without_trailing_hyphen(self):
        slug = generate_slug("ab " * 300)
        assert len(slug) <= 200
        assert not slug.endswith("-")

    def test_deterministic(self):
        assert generate_slug("Same Title") == generate_slug("Same Title")


class TestGenerateUniqueSlug:
    """Tests for generate_unique_slug."""

    def test_base_when_free(self):
        assert generate_unique_slug("hello-world", []) == "hello-world"
        assert generate_unique_slug("hello-world", {"hello-world-2"}) == "hello-world"

    def test_first_suffix_is_two(self):
        assert generate_unique_slug("hello-world", {"hello-world"}) == "hello-world-2"

    def test_skips_taken_suffixes(self):
        existing = {"hello-world", "hello-world-2", "hello-world-3"}
        assert generate_unique_slug("hello-world", existing) == "hello-world-4"

    def test_fills_gaps(self):
        assert generate_unique_slug("a", {"a", "a-3"}) == "a-2"

    @pytest.mark.parametrize(
        "existing",
        [
            set(),
            {"post"},
            {"post", "post-2"},
            {f"post-{n}" for n in range(2, 50)} | {"post"},
        ],
    )
    def test_never_returns_existing(self, existing):
        assert generate_unique_slug("post", existing) not in existing

    def test_accepts_any_iterable(self):
        assert generate_unique_slug("x", iter(["x"])) == "x-2"
