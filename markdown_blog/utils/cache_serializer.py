"""
Serialization and compression utilities for cache documents.

Uses orjson for JSON serialization/deserialization. Payloads of documents
flagged ``is_compressed`` are stored on disk as base64 gzip behind a marker,
so a reader can always tell compressed payloads from plain ones.
"""

from base64 import b64decode, b64encode
from binascii import Error as BinasciiError
from gzip import compress as gzip_compress
from gzip import decompress as gzip_decompress
from logging import getLogger
from typing import Any

from orjson import OPT_INDENT_2, OPT_NON_STR_KEYS, JSONDecodeError
from orjson import dumps as orjson_dumps
from orjson import loads as orjson_loads
from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from markdown_blog.configs import file_logger
from markdown_blog.errors import (
    CacheCompressionError,
    CacheDecompressionError,
    CacheDeserializationError,
    CacheSerializationError,
)
from markdown_blog.schemas.cache import BlogCacheDocument

logger = file_logger(getLogger(__name__))

COMPRESSION_MARKER = "\x00GZIP\x00"


def _default(value: object) -> object:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    return str(value)


def serialize(value: object, *, indent: bool = False) -> str:
    """
    Serialize value to JSON string.

    Args:
        value: Value to serialize. Pydantic models are dumped by alias.
        indent: Pretty-print with two-space indentation.

    Returns:
        JSON serialized string.

    Raises:
        CacheSerializationError: If serialization fails.
    """
    if isinstance(value, str):
        return value
    option = OPT_NON_STR_KEYS | (OPT_INDENT_2 if indent else 0)
    try:
        return orjson_dumps(value, default=_default, option=option).decode("utf-8")
    except (PydanticSerializationError, TypeError, ValueError) as e:
        logger.exception("Serialization failed")
        raise CacheSerializationError from e


def deserialize(value: str | bytes) -> Any:
    """
    Deserialize JSON string to value.

    Raises:
        CacheDeserializationError: If deserialization fails.
    """
    try:
        return orjson_loads(value)
    except (JSONDecodeError, TypeError) as e:
        logger.exception("Deserialization failed")
        raise CacheDeserializationError from e


def compress(data: str) -> str:
    """
    Compress data using gzip.

    Returns:
        Compressed data as base64-encoded string with marker.

    Raises:
        CacheCompressionError: If compression fails.
    """
    try:
        compressed = gzip_compress(data.encode("utf-8"))
        return COMPRESSION_MARKER + b64encode(compressed).decode("ascii")
    except (UnicodeEncodeError, ValueError) as e:
        logger.exception("Compression failed")
        raise CacheCompressionError from e


def decompress(data: str) -> str:
    """
    Decompress gzip data; data without the marker is returned unchanged.

    Raises:
        CacheDecompressionError: If decompression fails.
    """
    if not is_compressed(data):
        return data
    try:
        encoded = data[len(COMPRESSION_MARKER) :]
        return gzip_decompress(b64decode(encoded.encode("ascii"))).decode("utf-8")
    except (BinasciiError, OSError, EOFError, UnicodeError, ValueError) as e:
        logger.exception("Decompression failed")
        raise CacheDecompressionError from e


def is_compressed(data: str) -> bool:
    return data.startswith(COMPRESSION_MARKER)


def do_compress(data: str, threshold: int) -> bool:
    """
    Determine if data should be compressed.

    Returns:
        True if data size exceeds threshold.
    """
    return len(data.encode("utf-8")) > threshold


def serialize_document(document: BlogCacheDocument) -> str:
    """
    Serialize a cache document for its backing file.

    The payload is compressed when the document is flagged ``is_compressed``.
    """
    payload = document.model_dump(mode="json", by_alias=True)
    if document.is_compressed and not is_compressed(document.data):
        payload["Data"] = compress(document.data)
    return serialize(payload)


def deserialize_document(text: str | bytes) -> BlogCacheDocument:
    """
    Parse a backing file back into a document with a plain-text payload.

    Raises:
        CacheDeserializationError: If the file is not a valid document.
    """
    data = deserialize(text)
    try:
        document = BlogCacheDocument.model_validate(data)
    except ValidationError as e:
        logger.exception("Cache document validation failed")
        raise CacheDeserializationError from e
    document.data = decompress(document.data)
    return document
