"""Thread-safe in-memory tier of the cache."""

from collections.abc import Callable
from threading import Lock

from markdown_blog.schemas.cache import BlogCacheDocument


class MemoryClient:
    """
    Key to document map guarded by a lock.

    Documents are copied on the way in and out, so a caller holding a
    returned document can never mutate the stored entry. Every change to a
    stored entry goes through the lock as one whole-entry update.
    """

    def __init__(self) -> None:
        self._cache: dict[str, BlogCacheDocument] = {}
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._cache

    def get(self, key: str) -> BlogCacheDocument | None:
        with self._lock:
            document = self._cache.get(key)
            return document.model_copy(deep=True) if document is not None else None

    def put(self, document: BlogCacheDocument) -> None:
        """Insert or replace the entry for ``document.cache_key``."""
        with self._lock:
            self._cache[document.cache_key] = document.model_copy(deep=True)

    def add(self, document: BlogCacheDocument) -> bool:
        """Insert only if the key is not present yet."""
        with self._lock:
            if document.cache_key in self._cache:
                return False
            self._cache[document.cache_key] = document.model_copy(deep=True)
            return True

    def update(
        self,
        key: str,
        mutate: Callable[[BlogCacheDocument], None],
    ) -> BlogCacheDocument | None:
        """
        Apply ``mutate`` to the stored entry under the lock.

        Args:
            key: Entry to update.
            mutate: Called with the stored document; changes it in place.

        Returns:
            A copy of the updated entry, or None if the key is absent.
        """
        with self._lock:
            document = self._cache.get(key)
            if document is None:
                return None
            mutate(document)
            return document.model_copy(deep=True)

    def touch(self, key: str) -> BlogCacheDocument | None:
        """Record one read of ``key``."""
        return self.update(key, BlogCacheDocument.update_access)

    def pop(self, key: str) -> BlogCacheDocument | None:
        with self._lock:
            return self._cache.pop(key, None)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._cache)

    def values(self) -> list[BlogCacheDocument]:
        """Snapshot of every entry, in insertion order."""
        with self._lock:
            return [document.model_copy(deep=True) for document in self._cache.values()]

    def clear(self) -> int:
        with self._lock:
            count = len(self._cache)
            self._cache.clear()
            return count
