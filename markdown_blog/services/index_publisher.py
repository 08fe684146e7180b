"""
Use case service that publishes new index versions.

``update_index`` runs factory -> serializer -> compressor -> storage and
publishes exactly one new version per call. It is not safe to call
concurrently for the same root: two callers can read the same current
version and overwrite each other's artifacts. Callers must serialize
publishing per division (a single publisher process, or a lock held around
the call).
"""

from collections.abc import Sequence
from logging import getLogger
from time import perf_counter

from markdown_blog.configs import IndexConfig, file_logger
from markdown_blog.errors import IndexStorageError
from markdown_blog.schemas.blog import BlogIndex, BlogIndexUpdateResult, BlogMetadata
from markdown_blog.services.index_factory import BlogIndexFactory
from markdown_blog.services.storage.index_storage import BlogIndexStorage
from markdown_blog.services.validation import BlogMetadataValidator
from markdown_blog.utils.compression import Compressor, GzipCompressor
from markdown_blog.utils.helpers import time_taken, utc_now
from markdown_blog.utils.serializer import BlogIndexJsonSerializer, IndexSerializer

logger = file_logger(getLogger(__name__))


class BlogIndexPublisher:
    """Orchestrates building, encoding and storing index versions."""

    def __init__(
        self,
        storage: BlogIndexStorage,
        factory: BlogIndexFactory | None = None,
        serializer: IndexSerializer | None = None,
        compressor: Compressor | None = None,
        validator: BlogMetadataValidator | None = None,
        config: IndexConfig | None = None,
    ) -> None:
        self.storage = storage
        self.factory = factory or BlogIndexFactory()
        self.serializer = serializer or BlogIndexJsonSerializer()
        self.compressor = compressor or GzipCompressor()
        self.validator = validator or BlogMetadataValidator()
        self.config = config or storage.config

    async def update_index(
        self,
        root: str,
        metadata_list: Sequence[BlogMetadata],
        current_version: int | None = None,
    ) -> BlogIndexUpdateResult:
        """
        Publish ``metadata_list`` as the next version of ``root``.

        No changeset is written; use ``update_index_incremental`` for that.

        Args:
            root: Division storage root.
            metadata_list: Entries to publish, in order.
            current_version: Version already read by the caller, if any.

        Returns:
            Sizes of the JSON and gzip artifacts and the new version.

        Raises:
            IndexStorageError: If any artifact cannot be written.
            MetadataValidationError: If validation is enabled and an entry
                has no hierarchy.
        """
        result, _ = await self._publish(root, metadata_list, current_version)
        return result

    async def update_index_incremental(
        self,
        root: str,
        metadata_list: Sequence[BlogMetadata],
        keep_count: int | None = None,
    ) -> BlogIndexUpdateResult:
        """
        Publish a new version and record the changeset from the previous one.

        After the changeset is saved, changesets older than ``keep_count``
        (default: ``IndexConfig.changeset_keep_count``) are removed.

        The new version is committed before the changeset is written. If
        saving the changeset fails, the failure is logged and the result is
        returned with ``changeset=None``; readers then fall back to the full
        index for that version.
        """
        current_version = await self.storage.get_current_version(root)
        found, previous = await self.storage.try_get_index(root)
        if not found or previous is None or previous.id != current_version:
            previous = BlogIndex(id=current_version, date_time=utc_now(), blog_metadata_list=[])

        result, new_index = await self._publish(root, metadata_list, current_version)

        changeset = self.factory.compute_changeset(previous, new_index)
        try:
            await self.storage.save_changeset(root, changeset)
        except IndexStorageError:
            logger.exception("Changeset for version %d not saved to %s", result.version, root)
            return result

        retain = self.config.changeset_keep_count if keep_count is None else keep_count
        try:
            await self.storage.cleanup_old_changesets(root, retain)
        except IndexStorageError:
            logger.warning("Changeset cleanup skipped for %s", root, exc_info=True)

        return result.model_copy(update={"changeset": changeset})

    async def _publish(
        self,
        root: str,
        metadata_list: Sequence[BlogMetadata],
        current_version: int | None,
    ) -> tuple[BlogIndexUpdateResult, BlogIndex]:
        start_time = perf_counter()

        version = current_version
        if version is None:
            version = await self.storage.get_current_version(root)
        new_version = version + 1

        entries = list(metadata_list)
        if self.config.validate_metadata:
            entries = self.validator.filter_valid(entries)

        blog_index = self.factory.create(new_version, entries, utc_now())

        json_text = self.serializer.serialize(blog_index)
        binary = self.compressor.compress(json_text)

        await self.storage.save_artifacts(root, json_text, binary, new_version)

        result = BlogIndexUpdateResult(
            uncompressed_size=len(json_text.encode("utf-8")),
            compressed_size=len(binary),
            version=new_version,
        )
        logger.info(
            "Index %s: version %d -> %d, %d entries, %d bytes (%d gzip) in %s",
            root,
            version,
            new_version,
            len(entries),
            result.uncompressed_size,
            result.compressed_size,
            time_taken(start_time),
        )
        return result, blog_index
