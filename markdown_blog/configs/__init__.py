from markdown_blog.configs.settings import (
    CHANGESET_COMPRESSED_FILE,
    CHANGESET_FILE,
    INDEX_COMPRESSED_FILE,
    INDEX_FILE,
    INDEX_VERSION_FILE,
    CacheConfig,
    ContentDeliveryConfig,
    IndexConfig,
    Settings,
    file_logger,
    settings,
)

__all__ = [
    "CHANGESET_COMPRESSED_FILE",
    "CHANGESET_FILE",
    "INDEX_COMPRESSED_FILE",
    "INDEX_FILE",
    "INDEX_VERSION_FILE",
    "CacheConfig",
    "ContentDeliveryConfig",
    "IndexConfig",
    "Settings",
    "file_logger",
    "settings",
]
