"""Tests for markdown_blog/services/index_publisher.py module."""

import gzip
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from orjson import loads

from markdown_blog.configs import IndexConfig
from markdown_blog.errors import IndexStorageError, MetadataValidationError
from markdown_blog.services import BlogIndexPublisher
from markdown_blog.services.storage import BlogIndexStorage, LocalStorage

ROOT = "tech"


def artifact(tmp_path: Path, name: str) -> Path:
    return tmp_path / ROOT / ".markdown.blog" / name


class TestUpdateIndex:
    """Tests for BlogIndexPublisher.update_index."""

    @pytest.mark.asyncio
    async def test_first_publish(self, publisher: BlogIndexPublisher, make_metadata, tmp_path: Path) -> None:
        """Test publishing into an empty root creates version 1."""
        result = await publisher.update_index(ROOT, [make_metadata("a.md"), make_metadata("b.md")])

        assert result.version == 1
        assert result.changeset is None
        index_json = artifact(tmp_path, "index.json").read_bytes()
        assert result.uncompressed_size == len(index_json)
        assert result.compressed_size == artifact(tmp_path, "index.json.gz").stat().st_size
        assert gzip.decompress(artifact(tmp_path, "index.json.gz").read_bytes()) == index_json
        assert artifact(tmp_path, "index.version").read_text() == "1"
        assert [e["FilePath"] for e in loads(index_json)["BlogMetadataList"]] == ["a.md", "b.md"]

    @pytest.mark.asyncio
    async def test_versions_increase(self, publisher: BlogIndexPublisher, make_metadata) -> None:
        """Test consecutive publishes produce versions 1 and 2."""
        first = await publisher.update_index(ROOT, [make_metadata("a.md")])
        second = await publisher.update_index(ROOT, [make_metadata("a.md")])
        assert (first.version, second.version) == (1, 2)
        assert await publisher.storage.get_current_version(ROOT) == 2

    @pytest.mark.asyncio
    async def test_explicit_current_version(self, publisher: BlogIndexPublisher, make_metadata) -> None:
        """Test a caller-supplied current version skips the marker read."""
        with patch.object(publisher.storage, "get_current_version", AsyncMock(return_value=0)) as mock_read:
            result = await publisher.update_index(ROOT, [make_metadata()], current_version=7)
        mock_read.assert_not_called()
        assert result.version == 8

    @pytest.mark.asyncio
    async def test_no_changeset_written(self, publisher: BlogIndexPublisher, make_metadata, tmp_path: Path) -> None:
        """Test the plain path never writes changeset files."""
        await publisher.update_index(ROOT, [make_metadata()])
        await publisher.update_index(ROOT, [make_metadata()])
        assert not list((tmp_path / ROOT / ".markdown.blog").glob("*.diff.json*"))

    @pytest.mark.asyncio
    async def test_write_failure_propagates(self, publisher: BlogIndexPublisher, make_metadata) -> None:
        """Test a failed artifact write raises and leaves the version unchanged."""
        await publisher.update_index(ROOT, [make_metadata()])
        backend = publisher.storage.backend
        with (
            patch.object(backend, "write_bytes", AsyncMock(side_effect=PermissionError("denied"))),
            pytest.raises(IndexStorageError),
        ):
            await publisher.update_index(ROOT, [make_metadata()])
        assert await publisher.storage.get_current_version(ROOT) == 1

    @pytest.mark.asyncio
    async def test_validation_opt_in(self, tmp_path: Path, make_metadata) -> None:
        """Test invalid entries are filtered only when validation is enabled."""
        config = IndexConfig(validate_metadata=True)
        publisher = BlogIndexPublisher(BlogIndexStorage(LocalStorage(tmp_path), config=config))

        await publisher.update_index(ROOT, [make_metadata("a.md"), make_metadata("b.md", title="")])
        _, index = await publisher.storage.try_get_index(ROOT)
        assert [m.file_path for m in index.blog_metadata_list] == ["a.md"]

        with pytest.raises(MetadataValidationError):
            await publisher.update_index(ROOT, [make_metadata("c.md", hierarchy=None)])
        assert await publisher.storage.get_current_version(ROOT) == 1

    @pytest.mark.asyncio
    async def test_validation_off_by_default(self, publisher: BlogIndexPublisher, make_metadata) -> None:
        """Test entries are published unchanged by default."""
        await publisher.update_index(ROOT, [make_metadata("a.md", title="", hierarchy=None)])
        _, index = await publisher.storage.try_get_index(ROOT)
        assert len(index.blog_metadata_list) == 1


class TestUpdateIndexIncremental:
    """Tests for BlogIndexPublisher.update_index_incremental."""

    @pytest.mark.asyncio
    async def test_first_version_diffs_against_empty(self, publisher: BlogIndexPublisher, make_metadata) -> None:
        """Test the first publish records every entry as added."""
        result = await publisher.update_index_incremental(ROOT, [make_metadata("a.md")])

        assert result.version == 1
        assert result.changeset is not None
        assert result.changeset.from_version == 0
        assert [m.file_path for m in result.changeset.added] == ["a.md"]

        found, stored = await publisher.storage.try_get_changeset(ROOT, 1)
        assert found
        assert stored == result.changeset

    @pytest.mark.asyncio
    async def test_changeset_between_versions(self, publisher: BlogIndexPublisher, make_metadata) -> None:
        """Test the changeset reflects the difference to the prior version."""
        await publisher.update_index_incremental(ROOT, [make_metadata("a.md"), make_metadata("b.md")])
        result = await publisher.update_index_incremental(
            ROOT,
            [make_metadata("b.md", title="B v2"), make_metadata("c.md")],
        )

        changeset = result.changeset
        assert (changeset.from_version, changeset.to_version) == (1, 2)
        assert [m.file_path for m in changeset.added] == ["c.md"]
        assert [m.file_path for m in changeset.updated] == ["b.md"]
        assert changeset.deleted == ["a.md"]

    @pytest.mark.asyncio
    async def test_retention_applied(self, publisher: BlogIndexPublisher, make_metadata) -> None:
        """Test only the configured number of changesets survive."""
        for i in range(5):
            await publisher.update_index_incremental(ROOT, [make_metadata(f"post{i}.md")])
        assert await publisher.storage.list_changeset_versions(ROOT) == [5, 4, 3]

    @pytest.mark.asyncio
    async def test_cleanup_failure_is_not_fatal(self, publisher: BlogIndexPublisher, make_metadata) -> None:
        """Test a failing retention sweep does not fail the publish."""
        with patch.object(
            publisher.storage,
            "cleanup_old_changesets",
            AsyncMock(side_effect=IndexStorageError("listing failed")),
        ):
            result = await publisher.update_index_incremental(ROOT, [make_metadata()])
        assert result.version == 1

    @pytest.mark.asyncio
    async def test_changeset_failure_keeps_publish(self, publisher: BlogIndexPublisher, make_metadata) -> None:
        """Test a failed changeset write still reports the committed version."""
        with patch.object(
            publisher.storage,
            "save_changeset",
            AsyncMock(side_effect=IndexStorageError("disk full")),
        ):
            result = await publisher.update_index_incremental(ROOT, [make_metadata()])
        assert result.version == 1
        assert result.changeset is None
        assert await publisher.storage.get_current_version(ROOT) == 1
        found, _ = await publisher.storage.try_get_changeset(ROOT, 1)
        assert not found
