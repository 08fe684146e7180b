"""Shell-style wildcard matching for cache keys and tags."""

from functools import lru_cache
from re import DOTALL, Pattern, escape
from re import compile as re_compile


@lru_cache(maxsize=256)
def wildcard_to_regex(pattern: str) -> Pattern[str]:
    """
    Translate a ``*`` / ``?`` wildcard pattern to a regex anchored at both ends.

    Every other character matches literally. Use ``fullmatch`` so a trailing
    newline in the key is not accepted.

    Examples:
    --------
    >>> bool(wildcard_to_regex("blog_index:*").fullmatch("blog_index:tech"))
    True
    >>> bool(wildcard_to_regex("post.?").fullmatch("postx1"))
    False
    """
    body = escape(pattern).replace(r"\*", ".*").replace(r"\?", ".")
    return re_compile(body, flags=DOTALL)


def matches_pattern(key: str, pattern: str) -> bool:
    """Match ``key`` against ``pattern``; an empty pattern matches only the empty key."""
    if pattern == "*":
        return True
    return wildcard_to_regex(pattern).fullmatch(key) is not None
