from markdown_blog.services.index_factory import BlogIndexFactory
from markdown_blog.services.index_publisher import BlogIndexPublisher
from markdown_blog.services.validation import (
    BlogMetadataValidator,
    ValidationMessage,
    ValidationOptions,
    ValidationResult,
    ValidationSeverity,
)

__all__ = [
    "BlogIndexFactory",
    "BlogIndexPublisher",
    "BlogMetadataValidator",
    "ValidationMessage",
    "ValidationOptions",
    "ValidationResult",
    "ValidationSeverity",
]
