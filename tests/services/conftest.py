"""Pytest configuration and fixtures for index service tests."""

from datetime import UTC, datetime
from pathlib import Path

import pytest

from markdown_blog.configs import IndexConfig
from markdown_blog.services import BlogIndexFactory, BlogIndexPublisher
from markdown_blog.services.storage import BlogIndexStorage, LocalStorage


@pytest.fixture
def timestamp() -> datetime:
    return datetime(2025, 6, 1, 8, 0, tzinfo=UTC)


@pytest.fixture
def factory() -> BlogIndexFactory:
    return BlogIndexFactory()


@pytest.fixture
def index_config() -> IndexConfig:
    return IndexConfig(changeset_keep_count=3)


@pytest.fixture
def storage(tmp_path: Path, index_config: IndexConfig) -> BlogIndexStorage:
    """Index storage over a temporary directory."""
    return BlogIndexStorage(LocalStorage(tmp_path), config=index_config)


@pytest.fixture
def publisher(storage: BlogIndexStorage) -> BlogIndexPublisher:
    return BlogIndexPublisher(storage)
