"""Tests for markdown_blog/dependencies.py module."""

from pathlib import Path

import httpx
import pytest

from markdown_blog.configs import CacheConfig, ContentDeliveryConfig, IndexConfig
from markdown_blog.dependencies import (
    get_cache_manager,
    get_local_index_storage,
    get_publisher,
    get_remote_index_storage,
)
from markdown_blog.services.storage import LocalStorage, RemoteStorage


def test_local_storage_wiring(tmp_path: Path) -> None:
    """Test local index storage is rooted at the given directory."""
    storage = get_local_index_storage(tmp_path, IndexConfig(metadata_dir="meta"))
    assert isinstance(storage.backend, LocalStorage)
    assert storage.artifact_name("index.json") == "meta/index.json"


@pytest.mark.asyncio
async def test_remote_storage_wiring() -> None:
    """Test remote index storage uses the caller's client and CDN settings."""
    async with httpx.AsyncClient() as client:
        storage = get_remote_index_storage(client, ContentDeliveryConfig(base_url="https://cdn.test/"))
        assert isinstance(storage.backend, RemoteStorage)
        assert storage.backend.client is client
        assert storage.backend.build_url("tech", "index.version") == "https://cdn.test/tech/index.version"


def test_publisher_shares_config(tmp_path: Path) -> None:
    """Test the publisher and its storage see the same configuration."""
    config = IndexConfig(validate_metadata=True)
    publisher = get_publisher(tmp_path, config)
    assert publisher.config is config
    assert publisher.storage.config is config


def test_cache_manager_is_not_shared(tmp_path: Path) -> None:
    """Test each call builds an independent cache."""
    config = CacheConfig(cache_dir=tmp_path)
    assert get_cache_manager(config) is not get_cache_manager(config)
