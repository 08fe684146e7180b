"""Tests for markdown_blog/services/storage/local.py module."""

from pathlib import Path

import pytest

from markdown_blog.services.storage import LocalStorage, StorageBackend


def test_satisfies_protocol(local_storage: LocalStorage) -> None:
    """Test LocalStorage implements StorageBackend."""
    assert isinstance(local_storage, StorageBackend)
    assert local_storage.writable


@pytest.mark.asyncio
async def test_write_then_read(local_storage: LocalStorage, tmp_path: Path) -> None:
    """Test bytes round-trip and parent directories are created."""
    await local_storage.write_bytes("tech", "meta/file.bin", b"\x00\x01")
    assert (tmp_path / "tech" / "meta" / "file.bin").read_bytes() == b"\x00\x01"
    assert await local_storage.read_bytes("tech", "meta/file.bin") == b"\x00\x01"


@pytest.mark.asyncio
async def test_overwrite_leaves_no_temp_files(local_storage: LocalStorage, tmp_path: Path) -> None:
    """Test replacing a file does not leave temporary files behind."""
    await local_storage.write_bytes("tech", "a.txt", b"one")
    await local_storage.write_bytes("tech", "a.txt", b"two")
    assert [p.name for p in (tmp_path / "tech").iterdir()] == ["a.txt"]
    assert await local_storage.read_bytes("tech", "a.txt") == b"two"


@pytest.mark.asyncio
async def test_missing_file(local_storage: LocalStorage) -> None:
    """Test absent files read as None and are not deleted."""
    assert await local_storage.read_bytes("tech", "nope") is None
    assert not await local_storage.exists("tech", "nope")
    assert not await local_storage.delete("tech", "nope")


@pytest.mark.asyncio
async def test_delete(local_storage: LocalStorage) -> None:
    """Test deleting an existing file."""
    await local_storage.write_bytes("tech", "a.txt", b"x")
    assert await local_storage.delete("tech", "a.txt")
    assert not await local_storage.exists("tech", "a.txt")


@pytest.mark.asyncio
async def test_list_names(local_storage: LocalStorage) -> None:
    """Test listing is sorted and tolerant of missing directories."""
    assert await local_storage.list_names("tech", "meta") == []
    await local_storage.write_bytes("tech", "meta/b", b"")
    await local_storage.write_bytes("tech", "meta/a", b"")
    assert await local_storage.list_names("tech", "meta") == ["a", "b"]


@pytest.mark.asyncio
async def test_absolute_root_ignores_base_dir(tmp_path: Path) -> None:
    """Test absolute roots are used as given."""
    storage = LocalStorage(tmp_path / "unused")
    await storage.write_bytes(str(tmp_path / "abs"), "f", b"1")
    assert (tmp_path / "abs" / "f").read_bytes() == b"1"
