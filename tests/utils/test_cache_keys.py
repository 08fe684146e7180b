"""Tests for markdown_blog/utils/cache_keys.py module."""

import pytest

from markdown_blog.errors import CacheKeyError
from markdown_blog.utils.cache_keys import (
    blog_index_key,
    build_key,
    division_tag,
    hierarchy_key,
)


def test_build_key() -> None:
    """Test missing parts keep their position."""
    assert build_key("hierarchy", "tech", None, "web") == "hierarchy:tech::web"
    assert build_key("solo") == "solo"


def test_empty_prefix() -> None:
    """Test an empty prefix raises CacheKeyError."""
    with pytest.raises(CacheKeyError):
        build_key("")


def test_named_keys() -> None:
    """Test the key builders shared by publishers and readers."""
    assert blog_index_key("tech") == "blog_index:tech"
    assert hierarchy_key("tech", "python") == "hierarchy:tech:python:"
    assert division_tag("tech") == "division:tech"
    assert division_tag(None) == "division:"
