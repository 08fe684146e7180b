"""Custom exceptions for caching module."""

from markdown_blog.errors.base import BaseAppError


class CacheExceptionError(BaseAppError):
    """Base exception for cache operations."""

    def __init__(self, detail: str = "Cache exception occurred") -> None:
        super().__init__(detail)


class CacheKeyError(CacheExceptionError):
    """Raised when a cache key cannot be built or is empty."""

    def __init__(self, detail: str = "Cache key error") -> None:
        super().__init__(detail)


class CacheSerializationError(CacheExceptionError):
    """Raised when cache serialization fails."""

    def __init__(self, detail: str = "Cannot serialize value") -> None:
        super().__init__(detail)


class CacheDeserializationError(CacheExceptionError):
    """Raised when cache deserialization fails."""

    def __init__(self, detail: str = "Cannot deserialize value") -> None:
        super().__init__(detail)


class CacheCompressionError(CacheExceptionError):
    """Raised when cache compression fails."""

    def __init__(self, detail: str = "Cannot compress data") -> None:
        super().__init__(detail)


class CacheDecompressionError(CacheExceptionError):
    """Raised when cache decompression fails."""

    def __init__(self, detail: str = "Cannot decompress data") -> None:
        super().__init__(detail)
