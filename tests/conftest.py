# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os
from collections.abc import Callable
from datetime import UTC, datetime

import pytest

# Must be set before markdown_blog.configs is imported anywhere
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ["LOG_TO_FILE"] = "false"

from markdown_blog.schemas import BlogHierarchy, BlogIndex, BlogMetadata  # noqa: E402

MetadataFactory = Callable[..., BlogMetadata]


@pytest.fixture
def make_metadata() -> MetadataFactory:
    """
    Build valid ``BlogMetadata`` entries with overridable fields.

    The default entry lives under ``tech/python`` and passes validation.
    """

    def _make(file_path: str = "tech/python/hello.md", **overrides: object) -> BlogMetadata:
        values: dict[str, object] = {
            "file_path": file_path,
            "title": "Hello World",
            "description": "A first post",
            "date": datetime(2025, 3, 1, 9, 30, tzinfo=UTC),
            "tags": ["python", "intro"],
            "cover_images": ["images/cover.png"],
            "hierarchy": BlogHierarchy(division="tech", category="python"),
        }
        values.update(overrides)
        return BlogMetadata(**values)

    return _make


@pytest.fixture
def sample_index(make_metadata: MetadataFactory) -> BlogIndex:
    """Version 1 snapshot with two posts."""
    return BlogIndex(
        id=1,
        date_time=datetime(2025, 3, 2, tzinfo=UTC),
        blog_metadata_list=[
            make_metadata("tech/python/a.md", title="A"),
            make_metadata("tech/python/b.md", title="B"),
        ],
    )
