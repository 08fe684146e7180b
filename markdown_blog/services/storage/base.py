"""
Base storage protocol for index artifacts.

This module defines the byte-addressable interface the index storage runs
on, allowing different backends (local filesystem, read-only CDN/raw
hosting, ...). Every path is a division root plus a relative artifact name.
"""

from abc import abstractmethod
from typing import Protocol, runtime_checkable


@runtime_checkable
class StorageBackend(Protocol):
    """
    Protocol defining the interface for artifact storage backends.

    Absence is never an error: readers return ``None`` / ``False`` for
    missing artifacts and raise only on real I/O failures.
    """

    #: Whether write and delete operations are supported.
    writable: bool

    @abstractmethod
    async def read_bytes(self, root: str, name: str) -> bytes | None:
        """
        Read an artifact.

        Args:
            root: Division storage root
            name: Artifact name relative to the root

        Returns:
            bytes | None: Content, or None if the artifact does not exist
        """
        ...

    @abstractmethod
    async def write_bytes(self, root: str, name: str, data: bytes) -> None:
        """
        Write (create or replace) an artifact.

        Args:
            root: Division storage root
            name: Artifact name relative to the root
            data: Raw bytes to store
        """
        ...

    @abstractmethod
    async def exists(self, root: str, name: str) -> bool:
        """Check whether an artifact exists."""
        ...

    @abstractmethod
    async def delete(self, root: str, name: str) -> bool:
        """
        Delete an artifact.

        Returns:
            bool: True if something was deleted, False if it was absent
        """
        ...

    @abstractmethod
    async def list_names(self, root: str, directory: str = "") -> list[str]:
        """
        List artifact names directly under ``directory``.

        Returns:
            list[str]: Names relative to ``directory`` (empty if it does not exist)
        """
        ...
