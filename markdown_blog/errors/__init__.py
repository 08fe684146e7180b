from markdown_blog.errors.base import BASE_EXCEPTION, BaseAppError
from markdown_blog.errors.cache import (
    CacheCompressionError,
    CacheDecompressionError,
    CacheDeserializationError,
    CacheExceptionError,
    CacheKeyError,
    CacheSerializationError,
)
from markdown_blog.errors.index import (
    IndexExceptionError,
    IndexSerializationError,
    IndexStorageError,
    IndexVersionError,
)
from markdown_blog.errors.validation import MetadataValidationError

__all__ = [
    "BASE_EXCEPTION",
    "BaseAppError",
    "CacheCompressionError",
    "CacheDecompressionError",
    "CacheDeserializationError",
    "CacheExceptionError",
    "CacheKeyError",
    "CacheSerializationError",
    "IndexExceptionError",
    "IndexSerializationError",
    "IndexStorageError",
    "IndexVersionError",
    "MetadataValidationError",
]
