"""Tests for markdown_blog/utils/patterns.py module."""

import pytest

from markdown_blog.utils.patterns import matches_pattern, wildcard_to_regex


@pytest.mark.parametrize(
    ("key", "pattern", "expected"),
    [
        ("blog_index:tech", "blog_index:*", True),
        ("blog_index:tech", "blog_index:?ech", True),
        ("blog_index:tech", "blog_index:?", False),
        ("hierarchy:tech:python", "*:python", True),
        ("hierarchy:tech:python", "hierarchy", False),
        ("a.b", "a.b", True),
        ("axb", "a.b", False),
        ("price[1]", "price[1]", True),
        ("anything", "*", True),
        ("anything", "", False),
        ("", "", True),
        ("post\n", "post", False),
        ("post\n", "post?", True),
    ],
)
def test_matches_pattern(key: str, pattern: str, expected: bool) -> None:
    """Test wildcard matching is anchored and otherwise literal."""
    assert matches_pattern(key, pattern) is expected


def test_regex_is_cached() -> None:
    """Test repeated patterns reuse the compiled regex."""
    assert wildcard_to_regex("a*") is wildcard_to_regex("a*")


def test_star_spans_newlines() -> None:
    """Test '*' also matches across newlines in keys."""
    assert matches_pattern("line1\nline2", "line1*")
