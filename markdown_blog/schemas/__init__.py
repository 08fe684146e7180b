from markdown_blog.schemas.blog import (
    BlogHierarchy,
    BlogIndex,
    BlogIndexChangeset,
    BlogIndexUpdateResult,
    BlogMetadata,
)
from markdown_blog.schemas.cache import BlogCacheDocument, CacheStatisticsData

__all__ = [
    "BlogCacheDocument",
    "BlogHierarchy",
    "BlogIndex",
    "BlogIndexChangeset",
    "BlogIndexUpdateResult",
    "BlogMetadata",
    "CacheStatisticsData",
]
