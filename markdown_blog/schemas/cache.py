"""Cache document and cache statistics models."""

from datetime import datetime, timedelta
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

from markdown_blog.configs.settings import (
    BLOG_INDEX_CACHE_HOURS,
    DEFAULT_DATA_TYPE,
    HIERARCHY_CACHE_HOURS,
)
from markdown_blog.errors import CacheKeyError
from markdown_blog.schemas.blog import BlogHierarchy, BlogIndex
from markdown_blog.utils.cache_keys import blog_index_key, build_key, division_tag, hierarchy_key
from markdown_blog.utils.helpers import ensure_utc, utc_now

DEFAULT_EXPIRATION_HOURS = 24


def _default_expiry() -> datetime:
    return utc_now() + timedelta(hours=DEFAULT_EXPIRATION_HOURS)


class BlogCacheDocument(BaseModel):
    """
    One cached key/value entry with expiry, access and classification data.

    Documents are owned by the cache manager; callers receive them from
    ``get`` but should treat them as read-only snapshots.
    """

    model_config = ConfigDict(populate_by_name=True)

    cache_key: str = Field(default="", alias="CacheKey")
    data_type: str = Field(default="", alias="DataType")
    data: str = Field(default="", alias="Data")
    created_at: datetime = Field(default_factory=utc_now, alias="CreatedAt")
    expires_at: datetime = Field(default_factory=_default_expiry, alias="ExpiresAt")
    last_accessed_at: datetime = Field(default_factory=utc_now, alias="LastAccessedAt")
    access_count: int = Field(default=0, alias="AccessCount")
    version: int = Field(default=1, alias="Version")
    tags: list[str] = Field(default_factory=list, alias="Tags")
    size: int = Field(default=0, alias="Size")
    is_compressed: bool = Field(default=False, alias="IsCompressed")
    priority: int = Field(default=1, alias="Priority")
    dependencies: list[str] = Field(default_factory=list, alias="Dependencies")
    metadata: dict[str, str] = Field(default_factory=dict, alias="Metadata")

    @field_validator("created_at", "expires_at", "last_accessed_at")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @classmethod
    def create(
        cls,
        cache_key: str,
        data_type: str,
        data: str | None,
        expiration_hours: int = DEFAULT_EXPIRATION_HOURS,
    ) -> Self:
        """
        Build a fresh document expiring ``expiration_hours`` from now.

        Raises:
            CacheKeyError: If ``cache_key`` is empty.
        """
        if not cache_key:
            mssg = "Cache key must not be empty"
            raise CacheKeyError(mssg)
        now = utc_now()
        payload = data or ""
        return cls(
            cache_key=cache_key,
            data_type=data_type or DEFAULT_DATA_TYPE,
            data=payload,
            created_at=now,
            expires_at=now + timedelta(hours=expiration_hours),
            last_accessed_at=now,
            size=len(payload.encode("utf-8")),
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or utc_now()) > self.expires_at

    def update_access(self) -> None:
        """Record one read: bump last-accessed time and access count."""
        self.last_accessed_at = utc_now()
        self.access_count += 1

    def extend_expiration(self, hours: int) -> None:
        self.expires_at = self.expires_at + timedelta(hours=hours)

    def add_dependency(self, file_path: str) -> None:
        if file_path and file_path not in self.dependencies:
            self.dependencies.append(file_path)

    def add_tag(self, tag: str) -> None:
        if tag and tag not in self.tags:
            self.tags.append(tag)

    def set_metadata(self, key: str, value: str | None) -> None:
        if key:
            self.metadata[key] = value or ""

    def get_metadata(self, key: str) -> str:
        return self.metadata.get(key, "")

    @staticmethod
    def generate_cache_key(prefix: str, *parts: str | None) -> str:
        """
        Join a prefix and parts into a ``prefix:part1:part2`` key.

        Examples:
        --------
        >>> BlogCacheDocument.generate_cache_key("hierarchy", "tech", "python", "")
        'hierarchy:tech:python:'
        """
        return build_key(prefix, *parts)

    @classmethod
    def for_blog_index(cls, division: str, blog_index: BlogIndex) -> Self:
        """Cache entry for a division's whole index (high priority, 12h)."""
        document = cls.create(
            blog_index_key(division),
            "BlogIndex",
            blog_index.model_dump_json(by_alias=True),
            BLOG_INDEX_CACHE_HOURS,
        )
        document.add_tag("blog_index")
        document.add_tag(division_tag(division))
        document.priority = 2
        return document

    @classmethod
    def for_hierarchy(cls, hierarchy: BlogHierarchy) -> Self:
        """Cache entry for one hierarchy node (normal priority, 24h)."""
        document = cls.create(
            hierarchy_key(hierarchy.division, hierarchy.category, hierarchy.sub_category),
            "BlogHierarchy",
            hierarchy.model_dump_json(by_alias=True),
            HIERARCHY_CACHE_HOURS,
        )
        document.add_tag("hierarchy")
        document.add_tag(division_tag(hierarchy.division))
        document.priority = 1
        return document


class CacheStatisticsData(BaseModel):
    """
    Point-in-time view of the cache.

    ``hit_rate`` is ``total_items / total_access_count``, a coarse
    cardinality-to-reads ratio kept for compatibility with existing
    dashboards. It is not a hit ratio; the real one (hits over hits plus
    misses) is reported under ``operations["hit_rate"]``.
    """

    model_config = ConfigDict(populate_by_name=True)

    total_items: int = Field(alias="TotalItems")
    total_size: int = Field(alias="TotalSize")
    expired_items: int = Field(alias="ExpiredItems")
    hit_rate: float = Field(alias="HitRate")
    average_access_count: float = Field(alias="AverageAccessCount")
    operations: dict[str, int | float | str] = Field(default_factory=dict, alias="Operations")
