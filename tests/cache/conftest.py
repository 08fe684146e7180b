"""Pytest configuration and fixtures for cache tests."""

from pathlib import Path

import pytest

from markdown_blog.clients.file_client import FileClient
from markdown_blog.clients.memory_client import MemoryClient
from markdown_blog.configs import CacheConfig
from markdown_blog.managers import BlogCacheManager


@pytest.fixture
def cache_config(tmp_path: Path) -> CacheConfig:
    """Cache configuration pointing at a per-test directory."""
    return CacheConfig(cache_dir=tmp_path / "BlogCache", compression_threshold=64)


@pytest.fixture
def memory_client() -> MemoryClient:
    return MemoryClient()


@pytest.fixture
def file_client(cache_config: CacheConfig) -> FileClient:
    return FileClient(cache_config)


@pytest.fixture
def cache_manager(cache_config: CacheConfig) -> BlogCacheManager:
    """
    Create cache manager for testing.

    Both tiers start empty; files live under the test's tmp_path.
    """
    return BlogCacheManager(cache_config)
