"""
Storage services package.

This package provides artifact backends (local filesystem for publishers,
read-only HTTP for CDN readers) and the index storage built on them.
"""

from markdown_blog.services.storage.base import StorageBackend
from markdown_blog.services.storage.index_storage import BlogIndexStorage, changeset_version
from markdown_blog.services.storage.local import LocalStorage
from markdown_blog.services.storage.remote import RemoteStorage

__all__ = [
    "BlogIndexStorage",
    "LocalStorage",
    "RemoteStorage",
    "StorageBackend",
    "changeset_version",
]
