"""Utility helper functions."""

from markdown_blog.utils.helpers import ensure_utc, time_taken, utc_now, utc_now_str
from markdown_blog.utils.patterns import matches_pattern, wildcard_to_regex

__all__ = [
    "ensure_utc",
    "matches_pattern",
    "time_taken",
    "utc_now",
    "utc_now_str",
    "wildcard_to_regex",
]
