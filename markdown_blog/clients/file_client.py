"""
File-backed tier of the cache.

Each document lives in ``<cache_dir>/<sanitized key><suffix>``. Characters
that are not valid in file names are replaced by ``_``, so two keys that
differ only in those characters share a file; ``load`` checks the stored
key and reports such a file as absent for the other key.
"""

from logging import getLogger
from pathlib import Path
from re import compile as re_compile

import aiofiles
import aiofiles.os

from markdown_blog.configs import CacheConfig, file_logger
from markdown_blog.errors import CacheDecompressionError, CacheDeserializationError
from markdown_blog.schemas.cache import BlogCacheDocument
from markdown_blog.utils.cache_serializer import deserialize_document, serialize_document

logger = file_logger(getLogger(__name__))

INVALID_FILE_NAME_CHARS = re_compile(r'[<>:"/\\|?*\x00-\x1f]')


def sanitize_key(key: str) -> str:
    """
    Map a cache key to a file-name-safe stem.

    Examples:
    --------
    >>> sanitize_key("hierarchy:tech/python")
    'hierarchy_tech_python'
    """
    return INVALID_FILE_NAME_CHARS.sub("_", key)


class FileClient:
    """Stores serialized cache documents as individual files."""

    def __init__(self, config: CacheConfig | None = None) -> None:
        self.config = config or CacheConfig()
        self.cache_dir = Path(self.config.cache_dir)
        self.suffix = self.config.file_suffix

    def path_for(self, key: str) -> Path:
        return self.cache_dir / f"{sanitize_key(key)}{self.suffix}"

    async def save(self, document: BlogCacheDocument) -> int:
        text = serialize_document(document)
        await aiofiles.os.makedirs(self.cache_dir, exist_ok=True)
        async with aiofiles.open(self.path_for(document.cache_key), "w", encoding="utf-8") as f:
            await f.write(text)
        return len(text.encode("utf-8"))

    async def load(self, key: str) -> BlogCacheDocument | None:
        """
        Load the document stored for ``key``.

        Returns:
            The document, or None when the file is missing, unreadable as a
            document, or belongs to a different key.
        """
        file_path = self.path_for(key)
        if not await aiofiles.os.path.isfile(file_path):
            return None
        async with aiofiles.open(file_path, "rb") as f:
            raw = await f.read()
        try:
            document = deserialize_document(raw)
        except (CacheDeserializationError, CacheDecompressionError):
            logger.warning("Ignoring corrupt cache file %s", file_path)
            return None
        if document.cache_key != key:
            return None
        return document

    async def exists(self, key: str) -> bool:
        return await aiofiles.os.path.isfile(self.path_for(key))

    async def delete(self, key: str) -> bool:
        file_path = self.path_for(key)
        if not await aiofiles.os.path.isfile(file_path):
            return False
        await aiofiles.os.remove(file_path)
        return True

    async def clear(self) -> None:
        """Delete every cache file in the directory, keeping the directory."""
        if not await aiofiles.os.path.isdir(self.cache_dir):
            await aiofiles.os.makedirs(self.cache_dir, exist_ok=True)
            return
        for name in await aiofiles.os.listdir(self.cache_dir):
            if name.endswith(self.suffix):
                await aiofiles.os.remove(self.cache_dir / name)
