# markdown_blog/managers/cache_manager.py
"""Two-tier cache for blog lookups: an in-memory map mirrored to per-key files."""

from collections.abc import Iterable, Mapping
from logging import DEBUG, getLogger
from pathlib import Path
from typing import Any, TypeVar

import aiofiles
import aiofiles.os
from pydantic import BaseModel, ValidationError

from markdown_blog.clients.file_client import FileClient
from markdown_blog.clients.memory_client import MemoryClient
from markdown_blog.clients.protocols import CacheFileStoreProtocol
from markdown_blog.configs import CacheConfig, file_logger
from markdown_blog.data import CacheStatistics
from markdown_blog.errors import BASE_EXCEPTION, CacheExceptionError
from markdown_blog.schemas.cache import BlogCacheDocument, CacheStatisticsData
from markdown_blog.utils.cache_serializer import deserialize, do_compress, serialize
from markdown_blog.utils.patterns import matches_pattern

logger = file_logger(getLogger(__name__))

STORAGE_ERRORS = BASE_EXCEPTION + (CacheExceptionError,)

ModelT = TypeVar("ModelT", bound=BaseModel)


class BlogCacheManager:
    """
    Cache service with expiry, tags, priorities and batch operations.

    The in-memory map is authoritative; every change is written through to
    the file tier on a best-effort basis. Storage failures are logged,
    counted and reduced to a ``False`` or empty result, and a miss or an
    expired entry is never an exception.

    Reads have a side effect: a successful ``get`` bumps the entry's
    last-accessed time and access count.
    """

    def __init__(
        self,
        config: CacheConfig | None = None,
        memory: MemoryClient | None = None,
        files: CacheFileStoreProtocol | None = None,
    ) -> None:
        self.config = config or CacheConfig()
        self.memory = memory or MemoryClient()
        self.files = files or FileClient(self.config)
        self.statistics = CacheStatistics()

    # ========== Backing store helpers ==========

    async def _persist(self, document: BlogCacheDocument) -> bool:
        try:
            written = await self.files.save(document)
        except STORAGE_ERRORS:
            logger.exception("Cache persist failed for key %s", document.cache_key)
            self.statistics.record_error()
            return False
        self.statistics.record_set(written)
        return True

    async def _load(self, key: str) -> BlogCacheDocument | None:
        try:
            return await self.files.load(key)
        except STORAGE_ERRORS:
            logger.exception("Cache load failed for key %s", key)
            self.statistics.record_error()
            return None

    async def _delete_file(self, key: str) -> bool:
        try:
            return await self.files.delete(key)
        except STORAGE_ERRORS:
            logger.exception("Cache file delete failed for key %s", key)
            self.statistics.record_error()
            return False

    async def _remove_keys(self, keys: Iterable[str], *, eviction: bool = False) -> int:
        count = 0
        for key in keys:
            if await self.remove(key):
                count += 1
        if eviction and count:
            self.statistics.record_eviction(count)
        return count

    def _limit(self, limit: int | None) -> int:
        return self.config.key_limit if limit is None else max(limit, 0)

    # ========== Basic operations ==========

    async def set(self, document: BlogCacheDocument) -> bool:
        """
        Insert or replace a document.

        The in-memory entry is updated even if the file write fails.

        Returns:
            True if the document was also persisted.
        """
        self.memory.put(document)
        return await self._persist(document)

    async def set_value(
        self,
        key: str,
        value: str | None,
        expiration_hours: int | None = None,
        data_type: str | None = None,
    ) -> bool:
        """
        Store a plain string payload under ``key``.

        Raises:
            CacheKeyError: If ``key`` is empty.
        """
        hours = self.config.default_expiration_hours if expiration_hours is None else expiration_hours
        document = BlogCacheDocument.create(
            key,
            data_type or self.config.default_data_type,
            value,
            hours,
        )
        document.priority = self.config.default_priority
        return await self.set(document)

    async def get(self, key: str) -> BlogCacheDocument | None:
        """
        Look up ``key`` in memory, then in the file tier.

        Expired entries are removed from both tiers and reported as absent.
        """
        if not key:
            return None

        document = self.memory.get(key)
        if document is None:
            document = await self._load(key)
            if document is None:
                self.statistics.record_miss()
                return None
            if document.is_expired():
                await self._delete_file(key)
                self.statistics.record_miss()
                return None
            self.memory.add(document)
        elif document.is_expired():
            await self.remove(key)
            self.statistics.record_miss()
            return None

        touched = self.memory.touch(key)
        if touched is None:
            self.statistics.record_miss()
            return None
        self.statistics.record_hit(touched.size)
        if logger.isEnabledFor(DEBUG):
            logger.debug("Cache hit for %s (access count %d)", key, touched.access_count)
        return touched

    async def get_value(self, key: str) -> str | None:
        document = await self.get(key)
        return document.data if document is not None else None

    async def get_batch(self, keys: Iterable[str]) -> dict[str, BlogCacheDocument]:
        """Fetch several keys; absent and expired keys are left out."""
        result: dict[str, BlogCacheDocument] = {}
        for key in keys:
            document = await self.get(key)
            if document is not None:
                result[key] = document
        return result

    async def set_batch(
        self,
        items: Mapping[str, Any],
        expiration_hours: int | None = None,
    ) -> int:
        """
        Store several values; non-string values are serialized to JSON.

        Returns:
            Number of entries persisted.
        """
        stored = 0
        for key, value in items.items():
            if await self.set_object(key, value, expiration_hours):
                stored += 1
        return stored

    # ========== Typed objects ==========

    async def set_object(self, key: str, value: Any, expiration_hours: int | None = None) -> bool:
        """
        Serialize ``value`` to JSON and store it under ``key``.

        The entry's data type is the value's class name (strings keep the
        configured default), so ``remove_by_data_type("BlogIndex")`` finds
        objects stored this way.

        Returns:
            False if the value cannot be serialized or was not persisted.

        Raises:
            CacheKeyError: If ``key`` is empty.
        """
        try:
            payload = serialize(value)
        except CacheExceptionError:
            self.statistics.record_error()
            return False
        data_type = None if isinstance(value, str) else type(value).__name__
        return await self.set_value(key, payload, expiration_hours, data_type)

    async def get_object(self, key: str, model_type: type[ModelT]) -> ModelT | None:
        """Read ``key`` back as ``model_type``; a payload of another shape reads as absent."""
        payload = await self.get_value(key)
        if payload is None:
            return None
        try:
            return model_type.model_validate_json(payload)
        except ValidationError:
            logger.warning("Cache entry %s is not a valid %s", key, model_type.__name__)
            self.statistics.record_error()
            return None

    async def get_objects(self, keys: Iterable[str], model_type: type[ModelT]) -> dict[str, ModelT]:
        result: dict[str, ModelT] = {}
        for key in keys:
            value = await self.get_object(key, model_type)
            if value is not None:
                result[key] = value
        return result

    async def exists(self, key: str) -> bool:
        """
        Report whether a live entry exists for ``key``.

        Unlike ``get`` this does not count as an access.
        """
        if not key:
            return False

        document = self.memory.get(key)
        if document is not None:
            if not document.is_expired():
                return True
            await self.remove(key)
            return False

        stored = await self._load(key)
        if stored is None:
            return False
        if stored.is_expired():
            await self._delete_file(key)
            return False
        return True

    # ========== Removal ==========

    async def remove(self, key: str) -> bool:
        """
        Delete ``key`` from memory and from the file tier.

        Returns:
            True if either tier held the key.
        """
        removed = self.memory.pop(key) is not None
        deleted = await self._delete_file(key)
        if removed or deleted:
            self.statistics.record_delete()
            return True
        return False

    async def remove_batch(self, keys: Iterable[str]) -> int:
        return await self._remove_keys(keys)

    async def remove_by_tag(self, tag: str) -> int:
        return await self._remove_keys(await self.keys_by_tag(tag, limit=len(self.memory)))

    async def remove_by_data_type(self, data_type: str) -> int:
        return await self._remove_keys(await self.keys_by_data_type(data_type, limit=len(self.memory)))

    async def remove_by_pattern(self, pattern: str) -> int:
        """Remove every key matching a ``*`` / ``?`` wildcard pattern."""
        return await self._remove_keys(await self.keys(pattern, limit=len(self.memory)))

    # ========== Expiration ==========

    async def extend_expiration(self, key: str, hours: int) -> bool:
        """Push the expiry of an existing entry back by ``hours``."""
        document = self.memory.update(key, lambda doc: doc.extend_expiration(hours))
        if document is None:
            return False
        await self._persist(document)
        return True

    async def refresh(self, key: str) -> bool:
        """Record an access without reading the payload."""
        document = self.memory.touch(key)
        if document is None:
            return False
        await self._persist(document)
        return True

    # ========== Statistics and inspection ==========

    async def get_statistics(self) -> CacheStatisticsData:
        """Summarize the current in-memory state and the operation counters."""
        documents = self.memory.values()
        total_items = len(documents)
        total_access = sum(doc.access_count for doc in documents)
        return CacheStatisticsData(
            total_items=total_items,
            total_size=sum(doc.size for doc in documents),
            expired_items=sum(1 for doc in documents if doc.is_expired()),
            hit_rate=total_items / total_access if total_access > 0 else 0.0,
            average_access_count=total_access / total_items if total_items else 0.0,
            operations=self.statistics.to_dict(),
        )

    async def keys(self, pattern: str = "*", limit: int | None = None) -> list[str]:
        matched = [key for key in self.memory.keys() if matches_pattern(key, pattern)]
        return matched[: self._limit(limit)]

    async def keys_by_tag(self, tag: str, limit: int | None = None) -> list[str]:
        matched = [doc.cache_key for doc in self.memory.values() if tag in doc.tags]
        return matched[: self._limit(limit)]

    async def keys_by_data_type(self, data_type: str, limit: int | None = None) -> list[str]:
        matched = [doc.cache_key for doc in self.memory.values() if doc.data_type == data_type]
        return matched[: self._limit(limit)]

    async def size(self) -> int:
        """Total payload size of the in-memory entries, in bytes."""
        return sum(doc.size for doc in self.memory.values())

    async def count(self) -> int:
        return len(self.memory)

    # ========== Cleanup ==========

    async def cleanup_expired(self) -> int:
        expired = [doc.cache_key for doc in self.memory.values() if doc.is_expired()]
        count = await self._remove_keys(expired, eviction=True)
        if count:
            logger.info("Removed %d expired cache entries", count)
        return count

    async def cleanup_least_used(self, count: int) -> int:
        """
        Evict the ``count`` entries with the oldest last-accessed time.

        Expiry is not considered.
        """
        if count <= 0:
            return 0
        documents = sorted(self.memory.values(), key=lambda doc: doc.last_accessed_at)
        return await self._remove_keys((doc.cache_key for doc in documents[:count]), eviction=True)

    async def cleanup_low_priority(self, max_priority: int = 1) -> int:
        """Evict every entry whose priority is at most ``max_priority``."""
        low = [doc.cache_key for doc in self.memory.values() if doc.priority <= max_priority]
        return await self._remove_keys(low, eviction=True)

    async def clear_all(self) -> bool:
        """
        Drop every entry from memory and the file tier.

        Returns:
            False if the cache directory could not be emptied.
        """
        count = self.memory.clear()
        try:
            await self.files.clear()
        except STORAGE_ERRORS:
            logger.exception("Cache directory clear failed")
            self.statistics.record_error()
            return False
        logger.info("Cache cleared (%d entries)", count)
        return True

    def reset_statistics(self) -> None:
        self.statistics.reset()

    # ========== Warmup ==========

    async def warmup(self, keys: Iterable[str]) -> bool:
        """Create placeholder entries for keys that are not cached yet."""
        success = True
        for key in keys:
            if not key or await self.exists(key):
                continue
            success = await self.set_value(key, f"Warmed up cache for {key}") and success
        return success

    # ========== Export / import ==========

    async def export(self, path: Path | str, pattern: str = "*") -> bool:
        """
        Write live entries whose key matches ``pattern`` to a JSON file.

        The file holds a JSON array of documents using their field aliases.
        """
        documents = [
            doc
            for doc in self.memory.values()
            if not doc.is_expired() and matches_pattern(doc.cache_key, pattern)
        ]
        try:
            text = serialize([doc.model_dump(mode="json", by_alias=True) for doc in documents], indent=True)
            export_path = Path(path)
            await aiofiles.os.makedirs(export_path.parent, exist_ok=True)
            async with aiofiles.open(export_path, "w", encoding="utf-8") as f:
                await f.write(text)
        except STORAGE_ERRORS:
            logger.exception("Cache export to %s failed", path)
            self.statistics.record_error()
            return False
        logger.info("Exported %d cache entries to %s", len(documents), path)
        return True

    async def import_(self, path: Path | str, overwrite: bool = False) -> bool:
        """
        Load entries from a file written by ``export``.

        A JSON object mapping keys to values is accepted as well; its values
        are stored with the default expiration. Existing keys are kept
        unless ``overwrite`` is set.

        Returns:
            False if the file is missing or not in either format.
        """
        import_path = Path(path)
        try:
            if not await aiofiles.os.path.isfile(import_path):
                return False
            async with aiofiles.open(import_path, "rb") as f:
                data = deserialize(await f.read())
        except STORAGE_ERRORS:
            logger.warning("Cache import from %s failed", import_path, exc_info=True)
            return False

        if isinstance(data, list):
            try:
                documents = [BlogCacheDocument.model_validate(item) for item in data]
            except ValidationError:
                logger.warning("Cache import file %s holds invalid documents", import_path)
                return False
            imported = 0
            for document in documents:
                if not document.cache_key or document.is_expired():
                    continue
                if not overwrite and document.cache_key in self.memory:
                    continue
                await self.set(document)
                imported += 1
        elif isinstance(data, dict):
            imported = 0
            for key, value in data.items():
                if not key or (not overwrite and key in self.memory):
                    continue
                await self.set_value(key, serialize(value))
                imported += 1
        else:
            logger.warning("Unsupported cache import format in %s", import_path)
            return False

        logger.info("Imported %d cache entries from %s", imported, import_path)
        return True

    # ========== Maintenance ==========

    async def validate_integrity(self) -> bool:
        """Check that every entry has a key and a payload."""
        return all(doc.cache_key and doc.data for doc in self.memory.values())

    async def compact_storage(self) -> bool:
        """
        Drop expired entries, then store large payloads compressed on disk.

        Payloads above ``compression_threshold`` bytes are flagged
        compressed; the in-memory copy keeps the plain text.
        """
        await self.cleanup_expired()
        success = True
        for document in self.memory.values():
            if document.is_compressed or not do_compress(document.data, self.config.compression_threshold):
                continue
            updated = self.memory.update(document.cache_key, _mark_compressed)
            if updated is not None:
                success = await self._persist(updated) and success
        return success


def _mark_compressed(document: BlogCacheDocument) -> None:
    document.is_compressed = True
