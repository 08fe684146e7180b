"""
Persistence of index artifacts for one division root.

Layout under ``{root}/{metadata_dir}``::

    index.json                  full snapshot (UTF-8 JSON)
    index.json.gz               gzip of index.json
    index.version               decimal version of the published snapshot
    index.{v}.diff.json         changeset that produced version v
    index.{v}.diff.json.gz      gzip of the changeset

Publishing writes ``index.json``, then ``index.json.gz``, then
``index.version``. A reader that trusts the marker therefore never sees a
version whose artifacts are missing. The three writes are not a transaction:
concurrent publishers against the same root must be serialized by the caller
(one publisher process or lock per division).
"""

from logging import getLogger
from re import compile as re_compile

from markdown_blog.configs import (
    CHANGESET_COMPRESSED_FILE,
    CHANGESET_FILE,
    INDEX_COMPRESSED_FILE,
    INDEX_FILE,
    INDEX_VERSION_FILE,
    IndexConfig,
    file_logger,
)
from markdown_blog.errors import BASE_EXCEPTION, IndexStorageError
from markdown_blog.schemas.blog import BlogIndex, BlogIndexChangeset
from markdown_blog.services.storage.base import StorageBackend
from markdown_blog.utils.compression import Compressor, GzipCompressor
from markdown_blog.utils.serializer import (
    BlogIndexJsonSerializer,
    IndexSerializer,
    deserialize_changeset,
    serialize_changeset,
)

logger = file_logger(getLogger(__name__))

CHANGESET_NAME_PATTERN = re_compile(r"^index\.(\d+)\.diff\.json(?:\.gz)?$")


def changeset_version(name: str) -> int:
    """
    Extract the version embedded in a changeset file name.

    Returns:
        The version, or 0 when ``name`` is not a changeset artifact.
    """
    match = CHANGESET_NAME_PATTERN.match(name)
    return int(match.group(1)) if match else 0


class BlogIndexStorage:
    """Reads and writes the versioned artifacts of division roots."""

    def __init__(
        self,
        backend: StorageBackend,
        config: IndexConfig | None = None,
        serializer: IndexSerializer | None = None,
        compressor: Compressor | None = None,
    ) -> None:
        self.backend = backend
        self.config = config or IndexConfig()
        self.serializer = serializer or BlogIndexJsonSerializer()
        self.compressor = compressor or GzipCompressor()

    def artifact_name(self, file_name: str) -> str:
        """Artifact path relative to a division root."""
        directory = self.config.metadata_dir.strip("/")
        return f"{directory}/{file_name}" if directory else file_name

    # --- version marker ---

    async def get_current_version(self, root: str) -> int:
        """
        Read the published version of ``root``.

        Returns:
            The version, or 0 when nothing has been published (or the marker
            is unreadable as an integer).
        """
        raw = await self._read(root, INDEX_VERSION_FILE)
        if raw is None:
            return 0
        text = raw.decode("utf-8", errors="replace").strip()
        try:
            return int(text)
        except ValueError:
            logger.warning("Ignoring unparseable version marker %r in %s", text, root)
            return 0

    # --- full index ---

    async def save_index(self, root: str, blog_index: BlogIndex, new_version: int) -> tuple[int, int]:
        """
        Serialize, compress and publish ``blog_index`` as ``new_version``.

        Returns:
            (uncompressed bytes, compressed bytes)

        Raises:
            IndexStorageError: If any artifact cannot be written; the version
                marker is left untouched in that case.
        """
        json_text = self.serializer.serialize(blog_index)
        binary = self.compressor.compress(json_text)
        await self.save_artifacts(root, json_text, binary, new_version)
        return len(json_text.encode("utf-8")), len(binary)

    async def save_artifacts(self, root: str, json_text: str, binary: bytes, new_version: int) -> None:
        """Write already-encoded artifacts in publish order, marker last."""
        await self._write(root, INDEX_FILE, json_text.encode("utf-8"))
        await self._write(root, INDEX_COMPRESSED_FILE, binary)
        await self._write(root, INDEX_VERSION_FILE, str(new_version).encode("utf-8"))
        logger.info("Published index version %d to %s", new_version, root)

    async def try_get_index(self, root: str) -> tuple[bool, BlogIndex | None]:
        """
        Load the full JSON snapshot.

        Returns:
            (False, None) when absent, (True, index) otherwise.

        Raises:
            IndexSerializationError: If the artifact exists but is corrupt.
        """
        raw = await self._read(root, INDEX_FILE)
        if raw is None:
            return False, None
        return True, self.serializer.deserialize(raw)

    async def try_get_compressed_index(self, root: str) -> tuple[bool, BlogIndex | None]:
        """Load the snapshot from ``index.json.gz`` (what CDN readers fetch)."""
        raw = await self._read(root, INDEX_COMPRESSED_FILE)
        if raw is None:
            return False, None
        return True, self.serializer.deserialize(self.compressor.decompress(raw))

    # --- changesets ---

    async def save_changeset(self, root: str, changeset: BlogIndexChangeset) -> None:
        """Write the changeset named by its ``to_version`` (JSON, then gzip)."""
        json_text = serialize_changeset(changeset)
        await self._write(
            root,
            CHANGESET_FILE.format(version=changeset.to_version),
            json_text.encode("utf-8"),
        )
        if self.config.write_compressed_changeset:
            await self._write(
                root,
                CHANGESET_COMPRESSED_FILE.format(version=changeset.to_version),
                self.compressor.compress(json_text),
            )
        logger.info("Saved changeset %s to %s", changeset.summary(), root)

    async def try_get_changeset(self, root: str, version: int) -> tuple[bool, BlogIndexChangeset | None]:
        raw = await self._read(root, CHANGESET_FILE.format(version=version))
        if raw is None:
            return False, None
        return True, deserialize_changeset(raw)

    async def list_changeset_versions(self, root: str) -> list[int]:
        """Versions with a changeset artifact, newest first."""
        try:
            names = await self.backend.list_names(root, self.config.metadata_dir.strip("/"))
        except BASE_EXCEPTION as e:
            mssg = f"Cannot list changesets in {root}: {e}"
            raise IndexStorageError(mssg, path=root) from e
        versions = {changeset_version(name) for name in names}
        versions.discard(0)
        return sorted(versions, reverse=True)

    async def cleanup_old_changesets(self, root: str, keep_count: int) -> int:
        """
        Delete all but the newest ``keep_count`` changesets.

        Failures on individual files are logged and the sweep continues.

        Returns:
            Number of changeset versions fully deleted.
        """
        versions = await self.list_changeset_versions(root)
        deleted = 0
        for version in versions[max(keep_count, 0) :]:
            removed = True
            for pattern in (CHANGESET_FILE, CHANGESET_COMPRESSED_FILE):
                name = self.artifact_name(pattern.format(version=version))
                try:
                    await self.backend.delete(root, name)
                except (IndexStorageError, *BASE_EXCEPTION) as e:
                    removed = False
                    logger.warning("Error deleting old changeset file %s: %s", name, e)
            if removed:
                deleted += 1
        if deleted:
            logger.info("Removed %d old changesets from %s (kept %d)", deleted, root, keep_count)
        return deleted

    # --- backend access ---

    async def _read(self, root: str, file_name: str) -> bytes | None:
        name = self.artifact_name(file_name)
        try:
            return await self.backend.read_bytes(root, name)
        except IndexStorageError:
            raise
        except BASE_EXCEPTION as e:
            mssg = f"Cannot read {name} in {root}: {e}"
            raise IndexStorageError(mssg, path=name) from e

    async def _write(self, root: str, file_name: str, data: bytes) -> None:
        name = self.artifact_name(file_name)
        try:
            await self.backend.write_bytes(root, name, data)
        except IndexStorageError:
            raise
        except BASE_EXCEPTION as e:
            logger.exception("Failed to write %s in %s", name, root)
            mssg = f"Cannot write {name} in {root}: {e}"
            raise IndexStorageError(mssg, path=name) from e
