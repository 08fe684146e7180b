"""Protocol definitions for cache tier implementations."""

from typing import Protocol, runtime_checkable

from markdown_blog.schemas.cache import BlogCacheDocument


@runtime_checkable
class CacheFileStoreProtocol(Protocol):
    """
    Persistent tier holding one serialized document per key.

    Implementations raise on I/O failure; the cache manager decides what is
    swallowed.
    """

    async def save(self, document: BlogCacheDocument) -> int:
        """Persist a document and return the number of bytes written."""
        ...

    async def load(self, key: str) -> BlogCacheDocument | None:
        """Load the document stored for ``key``, or None if there is none."""
        ...

    async def exists(self, key: str) -> bool:
        ...

    async def delete(self, key: str) -> bool:
        ...

    async def clear(self) -> None:
        """Remove every stored document."""
        ...
