"""Pytest configuration and fixtures for storage tests."""

from datetime import UTC, datetime
from pathlib import Path

import pytest

from markdown_blog.configs import IndexConfig
from markdown_blog.schemas import BlogIndexChangeset
from markdown_blog.services.storage import BlogIndexStorage, LocalStorage


@pytest.fixture
def local_storage(tmp_path: Path) -> LocalStorage:
    return LocalStorage(tmp_path)


@pytest.fixture
def index_storage(local_storage: LocalStorage) -> BlogIndexStorage:
    """Index storage writing under ``<tmp>/<root>/.markdown.blog``."""
    return BlogIndexStorage(local_storage, config=IndexConfig())


@pytest.fixture
def published_at() -> datetime:
    return datetime(2025, 5, 1, tzinfo=UTC)


@pytest.fixture
def make_changeset():
    """Build an empty changeset ending at ``version``."""

    def _make(version: int) -> BlogIndexChangeset:
        return BlogIndexChangeset(from_version=version - 1, to_version=version)

    return _make
