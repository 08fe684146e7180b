"""
Cache key builders for the blog layers.

Publishers and readers build keys through these helpers so that both sides
agree on what to invalidate after a new index version is published.
"""

from markdown_blog.errors import CacheKeyError


def build_key(prefix: str, *parts: str | None) -> str:
    """
    Join a prefix and parts into a ``prefix:part1:part2`` key.

    Raises:
        CacheKeyError: If ``prefix`` is empty.

    Examples:
    --------
    >>> build_key("hierarchy", "tech", "python", None)
    'hierarchy:tech:python:'
    """
    if not prefix:
        mssg = "Cache key prefix must not be empty"
        raise CacheKeyError(mssg)
    if not parts:
        return prefix
    return ":".join([prefix, *(part or "" for part in parts)])


def blog_index_key(division: str) -> str:
    """Cache key for a division's full index."""
    return build_key("blog_index", division)


def hierarchy_key(division: str | None, category: str | None = None, sub_category: str | None = None) -> str:
    return build_key("hierarchy", division, category, sub_category)


def division_tag(division: str | None) -> str:
    """Tag shared by every cache entry derived from one division."""
    return f"division:{division or ''}"
