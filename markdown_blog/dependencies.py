"""
Wiring helpers.

Each helper builds a fresh object graph from configuration; nothing here
is a process-wide singleton, so callers own the lifetime of what they get.
"""

from pathlib import Path

from httpx import AsyncClient

from markdown_blog.configs import CacheConfig, ContentDeliveryConfig, IndexConfig
from markdown_blog.managers import BlogCacheManager
from markdown_blog.services import BlogIndexPublisher, BlogMetadataValidator, ValidationOptions
from markdown_blog.services.storage import BlogIndexStorage, LocalStorage, RemoteStorage


def get_local_index_storage(
    base_dir: Path | str | None = None,
    config: IndexConfig | None = None,
) -> BlogIndexStorage:
    """Index storage over the local filesystem."""
    return BlogIndexStorage(LocalStorage(base_dir), config=config)


def get_remote_index_storage(
    client: AsyncClient,
    cdn_config: ContentDeliveryConfig | None = None,
    config: IndexConfig | None = None,
) -> BlogIndexStorage:
    """
    Read-only index storage over a static content host.

    Args:
        client: HTTP client owned by the caller.
        cdn_config: Host settings; defaults to the ``CDN_`` environment.
        config: Artifact layout; defaults to the ``INDEX_`` environment.
    """
    return BlogIndexStorage(RemoteStorage(client, cdn_config), config=config)


def get_publisher(
    base_dir: Path | str | None = None,
    config: IndexConfig | None = None,
    validation_options: ValidationOptions | None = None,
) -> BlogIndexPublisher:
    config = config or IndexConfig()
    storage = get_local_index_storage(base_dir, config)
    return BlogIndexPublisher(
        storage,
        validator=BlogMetadataValidator(validation_options),
        config=config,
    )


def get_cache_manager(config: CacheConfig | None = None) -> BlogCacheManager:
    return BlogCacheManager(config or CacheConfig())
