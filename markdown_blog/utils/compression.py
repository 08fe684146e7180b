"""
Text <-> binary compression for published index artifacts.

``index.json.gz`` and the changeset ``.gz`` files must stay readable by any
gzip client, so the default compressor emits plain gzip streams of UTF-8
text. Other algorithms can be swapped in through the ``Compressor``
protocol.
"""

from gzip import BadGzipFile
from gzip import compress as gzip_compress
from gzip import decompress as gzip_decompress
from logging import getLogger
from typing import Protocol, runtime_checkable
from zlib import error as ZlibError

from markdown_blog.configs import file_logger
from markdown_blog.errors import IndexSerializationError

logger = file_logger(getLogger(__name__))


@runtime_checkable
class Compressor(Protocol):
    """Anything satisfying ``bytes = compress(text)`` / ``text = decompress(bytes)``."""

    def compress(self, content: str) -> bytes: ...

    def decompress(self, binary: bytes) -> str: ...


class GzipCompressor:
    """Gzip compressor for UTF-8 text."""

    def __init__(self, level: int = 9) -> None:
        self.level = level

    def compress(self, content: str) -> bytes:
        return gzip_compress(content.encode("utf-8"), compresslevel=self.level)

    def decompress(self, binary: bytes) -> str:
        """
        Decompress a gzip stream back to text.

        Raises:
            IndexSerializationError: If the data is not valid gzip or UTF-8.
        """
        try:
            return gzip_decompress(binary).decode("utf-8")
        except (BadGzipFile, EOFError, ZlibError, UnicodeDecodeError, OSError) as e:
            logger.exception("Decompression failed")
            mssg = f"Cannot decompress artifact: {e}"
            raise IndexSerializationError(mssg) from e
