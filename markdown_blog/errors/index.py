"""Custom exceptions for blog index publishing and storage."""

from markdown_blog.errors.base import BaseAppError


class IndexExceptionError(BaseAppError):
    """Base exception for index operations."""

    def __init__(self, detail: str = "Index exception occurred") -> None:
        super().__init__(detail)


class IndexStorageError(IndexExceptionError):
    """Raised when an index artifact cannot be written or read."""

    def __init__(self, detail: str = "Index storage failure", path: str | None = None) -> None:
        super().__init__(detail)
        self.path = path


class IndexSerializationError(IndexExceptionError):
    """Raised when an index artifact cannot be serialized or parsed."""

    def __init__(self, detail: str = "Cannot (de)serialize index artifact") -> None:
        super().__init__(detail)


class IndexVersionError(IndexExceptionError):
    """Raised when version ordering between two snapshots is violated."""

    def __init__(
        self,
        detail: str = "Invalid index version ordering",
        from_version: int | None = None,
        to_version: int | None = None,
    ) -> None:
        super().__init__(detail)
        self.from_version = from_version
        self.to_version = to_version
