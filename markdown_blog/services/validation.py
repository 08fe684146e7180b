"""
Domain rules for blog metadata.

Rules report errors (the entry must not be published) and warnings (the
entry is publishable but probably not what the author intended). The
validator is pure and can be used from the publisher, a pre-commit hook or
any other tool.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import timedelta
from enum import StrEnum
from logging import getLogger
from re import fullmatch

from markdown_blog.configs import file_logger
from markdown_blog.errors import MetadataValidationError
from markdown_blog.schemas.blog import BlogHierarchy, BlogMetadata
from markdown_blog.utils.helpers import utc_now

logger = file_logger(getLogger(__name__))

ILLEGAL_PATH_CHARS = frozenset('*"<>|')


class ValidationSeverity(StrEnum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ValidationMessage:
    code: str
    message: str
    severity: ValidationSeverity

    @classmethod
    def error(cls, code: str, message: str) -> "ValidationMessage":
        return cls(code, message, ValidationSeverity.ERROR)

    @classmethod
    def warning(cls, code: str, message: str) -> "ValidationMessage":
        return cls(code, message, ValidationSeverity.WARNING)


@dataclass(frozen=True)
class ValidationResult:
    messages: list[ValidationMessage]

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def errors(self) -> list[ValidationMessage]:
        return [m for m in self.messages if m.severity is ValidationSeverity.ERROR]

    @property
    def warnings(self) -> list[ValidationMessage]:
        return [m for m in self.messages if m.severity is ValidationSeverity.WARNING]

    def has_code(self, code: str) -> bool:
        return any(m.code == code for m in self.messages)


@dataclass
class ValidationOptions:
    """Knobs controlling how strict the metadata rules are."""

    max_title_length: int = 200
    max_description_length: int = 500
    max_tag_count: int = 10
    max_tag_length: int = 50
    require_description: bool = False
    allowed_future: timedelta = timedelta(0)
    max_age: timedelta = timedelta(days=365 * 5)
    allowed_image_extensions: tuple[str, ...] = (".png", ".jpg", ".jpeg", ".webp", ".gif")
    allowed_text_pattern: str = r"[A-Za-z0-9\-_\s]+"
    allowed_tag_pattern: str = r"[A-Za-z0-9\-\s]+"
    allowed_path_segment_pattern: str = r"[A-Za-z0-9\-\s]+"
    allowed_image_path_pattern: str = r"[A-Za-z0-9_\-./]+"
    allow_non_markdown_file: bool = True
    # Empty means unrestricted; compared case-insensitively
    allowed_divisions: frozenset[str] = field(default_factory=frozenset)
    allowed_categories: frozenset[str] = field(default_factory=frozenset)


class BlogMetadataValidator:
    """Applies ``ValidationOptions`` to single entries or whole batches."""

    def __init__(self, options: ValidationOptions | None = None) -> None:
        self.options = options or ValidationOptions()

    def validate(self, metadata: BlogMetadata | None) -> ValidationResult:
        if metadata is None:
            return ValidationResult([ValidationMessage.error("NullMetadata", "Metadata must not be None")])

        messages: list[ValidationMessage] = []
        self._check_file_path(metadata, messages)
        self._check_title(metadata, messages)
        self._check_description(metadata, messages)
        self._check_date(metadata, messages)
        self._check_tags(metadata, messages)
        self._check_cover_images(metadata, messages)
        if metadata.hierarchy is None:
            messages.append(ValidationMessage.error("Hierarchy.Required", "Hierarchy is required"))
        else:
            self._check_hierarchy(metadata.hierarchy, messages)
        if metadata.path_segments is not None:
            self._check_path_segments(metadata.path_segments, messages)
        return ValidationResult(messages)

    def filter_valid(self, metadata_list: Iterable[BlogMetadata]) -> list[BlogMetadata]:
        """
        Keep publishable entries in their original order.

        Entries with errors and repeated file paths (first one wins) are
        dropped with a warning.

        Raises:
            MetadataValidationError: If any entry has no hierarchy at all.
        """
        kept: list[BlogMetadata] = []
        seen: set[str] = set()
        structural: list[ValidationMessage] = []

        for metadata in metadata_list:
            result = self.validate(metadata)
            if result.has_code("Hierarchy.Required"):
                structural.extend(m for m in result.errors if m.code == "Hierarchy.Required")
                continue
            if not result.is_valid:
                logger.warning(
                    "Dropping %s: %s",
                    metadata.file_path,
                    ", ".join(m.code for m in result.errors),
                )
                continue
            if metadata.file_path in seen:
                logger.warning("Dropping duplicate entry for %s", metadata.file_path)
                continue
            seen.add(metadata.file_path)
            kept.append(metadata)

        if structural:
            mssg = f"{len(structural)} metadata entries have no hierarchy"
            raise MetadataValidationError(mssg, messages=structural)
        return kept

    # --- individual rules ---

    def _check_file_path(self, metadata: BlogMetadata, messages: list[ValidationMessage]) -> None:
        path = metadata.file_path
        if not path or not path.strip():
            messages.append(ValidationMessage.error("FilePath.Required", "FilePath is required"))
            return
        if not self.options.allow_non_markdown_file and not path.lower().endswith((".md", ".mdx")):
            messages.append(
                ValidationMessage.warning("FilePath.Extension", "Use .md or .mdx for blog files"),
            )
        if any(char in ILLEGAL_PATH_CHARS for char in path):
            messages.append(
                ValidationMessage.error("FilePath.IllegalChars", 'FilePath contains one of * " < > |'),
            )

    def _check_title(self, metadata: BlogMetadata, messages: list[ValidationMessage]) -> None:
        title = metadata.title
        if not title.strip():
            messages.append(ValidationMessage.error("Title.Required", "Title is required"))
            return
        if len(title) > self.options.max_title_length:
            messages.append(
                ValidationMessage.error(
                    "Title.Length",
                    f"Title must not exceed {self.options.max_title_length} characters",
                ),
            )
        if not fullmatch(self.options.allowed_text_pattern, title):
            messages.append(
                ValidationMessage.warning("Title.Pattern", "Title contains discouraged characters"),
            )

    def _check_description(self, metadata: BlogMetadata, messages: list[ValidationMessage]) -> None:
        description = metadata.description
        if not description.strip():
            if self.options.require_description:
                messages.append(ValidationMessage.error("Description.Required", "Description is required"))
            else:
                messages.append(ValidationMessage.warning("Description.Missing", "Description is empty"))
        elif len(description) > self.options.max_description_length:
            messages.append(
                ValidationMessage.warning(
                    "Description.Length",
                    f"Description should not exceed {self.options.max_description_length} characters",
                ),
            )

    def _check_date(self, metadata: BlogMetadata, messages: list[ValidationMessage]) -> None:
        if metadata.date is None:
            messages.append(ValidationMessage.error("Date.Required", "Date is required"))
            return
        now = utc_now()
        if metadata.date - now > self.options.allowed_future:
            messages.append(ValidationMessage.error("Date.Future", "Date is in the future"))
        if now - metadata.date > self.options.max_age:
            messages.append(ValidationMessage.warning("Date.Age", "Date is unusually old"))

    def _check_tags(self, metadata: BlogMetadata, messages: list[ValidationMessage]) -> None:
        if len(metadata.tags) > self.options.max_tag_count:
            messages.append(
                ValidationMessage.warning(
                    "Tags.Count",
                    f"Use at most {self.options.max_tag_count} tags",
                ),
            )
        seen: set[str] = set()
        for raw in metadata.tags:
            tag = (raw or "").strip()
            if not tag:
                messages.append(ValidationMessage.error("Tag.Empty", "Empty tag"))
                continue
            if len(tag) > self.options.max_tag_length:
                messages.append(ValidationMessage.warning("Tag.Length", f'Tag "{tag}" is too long'))
            if not fullmatch(self.options.allowed_tag_pattern, tag):
                messages.append(
                    ValidationMessage.warning("Tag.Pattern", f'Tag "{tag}" contains discouraged characters'),
                )
            if tag.lower() in seen:
                messages.append(ValidationMessage.warning("Tag.Duplicate", f'Tag "{tag}" is repeated'))
            seen.add(tag.lower())

    def _check_cover_images(self, metadata: BlogMetadata, messages: list[ValidationMessage]) -> None:
        for raw in metadata.cover_images:
            path = (raw or "").strip()
            if not path:
                messages.append(ValidationMessage.warning("Cover.Empty", "Empty cover image path"))
                continue
            if not fullmatch(self.options.allowed_image_path_pattern, path):
                messages.append(
                    ValidationMessage.warning("Cover.Path", f'Cover path "{path}" is not a plain relative path'),
                )
            if not path.lower().endswith(self.options.allowed_image_extensions):
                messages.append(
                    ValidationMessage.warning(
                        "Cover.Extension",
                        f'Cover path "{path}" does not use one of {", ".join(self.options.allowed_image_extensions)}',
                    ),
                )

    def _check_hierarchy(self, hierarchy: BlogHierarchy, messages: list[ValidationMessage]) -> None:
        pattern = self.options.allowed_text_pattern
        allowed_divisions = {d.lower() for d in self.options.allowed_divisions}
        allowed_categories = {c.lower() for c in self.options.allowed_categories}

        if not (hierarchy.division or "").strip():
            messages.append(
                ValidationMessage.error("Hierarchy.Division.Required", "Hierarchy.Division is required"),
            )
        else:
            if not fullmatch(pattern, hierarchy.division):
                messages.append(
                    ValidationMessage.warning("Hierarchy.Division.Pattern", "Division contains discouraged characters"),
                )
            if allowed_divisions and hierarchy.division.lower() not in allowed_divisions:
                messages.append(
                    ValidationMessage.warning(
                        "Hierarchy.Division.NotInAllowed",
                        f'Division "{hierarchy.division}" is not in the allowed set',
                    ),
                )

        if not (hierarchy.category or "").strip():
            messages.append(
                ValidationMessage.error("Hierarchy.Category.Required", "Hierarchy.Category is required"),
            )
        else:
            if not fullmatch(pattern, hierarchy.category):
                messages.append(
                    ValidationMessage.warning("Hierarchy.Category.Pattern", "Category contains discouraged characters"),
                )
            if allowed_categories and hierarchy.category.lower() not in allowed_categories:
                messages.append(
                    ValidationMessage.warning(
                        "Hierarchy.Category.NotInAllowed",
                        f'Category "{hierarchy.category}" is not in the allowed set',
                    ),
                )

        sub_category = (hierarchy.sub_category or "").strip()
        if sub_category and not fullmatch(pattern, sub_category):
            messages.append(
                ValidationMessage.warning("Hierarchy.SubCategory.Pattern", "SubCategory contains discouraged characters"),
            )

    def _check_path_segments(self, segments: Sequence[str], messages: list[ValidationMessage]) -> None:
        if not segments:
            messages.append(ValidationMessage.error("PathSegments.Empty", "PathSegments needs at least one segment"))
        for raw in segments:
            segment = (raw or "").strip()
            if not segment:
                messages.append(ValidationMessage.error("PathSegments.Blank", "PathSegments contains a blank segment"))
                continue
            if "/" in segment or "\\" in segment:
                messages.append(
                    ValidationMessage.error("PathSegments.Separator", "Path segments must not contain / or \\"),
                )
            if not fullmatch(self.options.allowed_path_segment_pattern, segment):
                messages.append(
                    ValidationMessage.warning(
                        "PathSegments.Pattern",
                        f'Path segment "{segment}" contains discouraged characters',
                    ),
                )
