"""Custom exceptions for blog metadata validation."""

from typing import TYPE_CHECKING

from markdown_blog.errors.base import BaseAppError

if TYPE_CHECKING:
    from markdown_blog.services.validation import ValidationMessage


class MetadataValidationError(BaseAppError):
    """Raised when a metadata batch violates a structural invariant."""

    def __init__(
        self,
        detail: str = "Blog metadata validation failed",
        messages: "list[ValidationMessage] | None" = None,
    ) -> None:
        super().__init__(detail)
        self.messages = messages or []
