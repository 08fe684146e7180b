"""Construction of index snapshots and diffs between two snapshots."""

from collections.abc import Sequence
from datetime import datetime
from logging import DEBUG, getLogger

from markdown_blog.configs import file_logger
from markdown_blog.errors import IndexVersionError
from markdown_blog.schemas.blog import BlogIndex, BlogIndexChangeset, BlogMetadata

logger = file_logger(getLogger(__name__))


class BlogIndexFactory:
    """
    Builds ``BlogIndex`` aggregates and computes changesets between them.

    Both operations are pure: nothing is read from or written to storage.
    """

    def create(
        self,
        version: int,
        metadata_list: Sequence[BlogMetadata],
        timestamp: datetime,
    ) -> BlogIndex:
        """
        Build an index snapshot.

        Version ordering is not checked here; the publisher owns it.

        Args:
            version: Version id of the new snapshot.
            metadata_list: Entries in the order they should be published.
            timestamp: Generation time (UTC).

        Returns:
            BlogIndex holding a copy of ``metadata_list`` in the same order.
        """
        return BlogIndex(
            id=version,
            date_time=timestamp,
            blog_metadata_list=list(metadata_list),
        )

    def compute_changeset(self, old_index: BlogIndex, new_index: BlogIndex) -> BlogIndexChangeset:
        """
        Diff two snapshots keyed by file path.

        - added: in ``new_index`` only (new index order)
        - updated: in both, with any field changed (new index order)
        - deleted: file paths in ``old_index`` only (old index order)

        Raises:
            IndexVersionError: If ``new_index.id`` is not greater than ``old_index.id``.
        """
        if new_index.id <= old_index.id:
            mssg = (
                f"Cannot diff index version {old_index.id} -> {new_index.id}: "
                "target version must be greater"
            )
            raise IndexVersionError(mssg, from_version=old_index.id, to_version=new_index.id)

        old_entries = old_index.by_file_path()
        new_paths = {metadata.file_path for metadata in new_index.blog_metadata_list}

        added: list[BlogMetadata] = []
        updated: list[BlogMetadata] = []
        for metadata in new_index.blog_metadata_list:
            previous = old_entries.get(metadata.file_path)
            if previous is None:
                added.append(metadata)
            elif previous.model_dump() != metadata.model_dump():
                updated.append(metadata)

        deleted = [
            metadata.file_path
            for metadata in old_index.blog_metadata_list
            if metadata.file_path not in new_paths
        ]

        changeset = BlogIndexChangeset(
            from_version=old_index.id,
            to_version=new_index.id,
            added=added,
            updated=updated,
            deleted=deleted,
        )
        if logger.isEnabledFor(DEBUG):
            logger.debug("Computed changeset: %s", changeset.summary())
        return changeset
