"""
Blog metadata and index models.

JSON field names follow the published wire contract (PascalCase) so that
remote readers can consume ``index.json`` and changeset files directly;
Python attributes stay snake_case and either form is accepted on input.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from markdown_blog.utils.helpers import ensure_utc


class BlogHierarchy(BaseModel):
    """Division / category / subcategory placement of a post."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    division: str | None = Field(default=None, alias="Division")
    category: str | None = Field(default=None, alias="Category")
    sub_category: str | None = Field(default=None, alias="SubCategory")


class BlogMetadata(BaseModel):
    """
    Facts about one blog post.

    Identity is ``file_path``; two entries with the same path describe the
    same post. Instances are immutable once built.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    file_path: str = Field(alias="FilePath")
    title: str = Field(default="", alias="Title")
    description: str = Field(default="", alias="Description")
    date: datetime | None = Field(default=None, alias="Date")
    tags: list[str] = Field(default_factory=list, alias="Tags")
    cover_images: list[str] = Field(default_factory=list, alias="CoverImages")
    hierarchy: BlogHierarchy | None = Field(default=None, alias="Hierarchy")
    path_segments: list[str] | None = Field(default=None, alias="PathSegments")
    is_draft: bool = Field(default=False, alias="IsDraft")

    @field_validator("title", "description", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("tags", "cover_images", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("date")
    @classmethod
    def _date_to_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value) if value is not None else None

    @property
    def is_path_mode(self) -> bool:
        """Whether the post is addressed by path segments instead of hierarchy."""
        return self.path_segments is not None


class BlogIndex(BaseModel):
    """A numbered snapshot of every known post in one division."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(alias="Id", ge=0)
    date_time: datetime = Field(alias="DateTime")
    blog_metadata_list: list[BlogMetadata] = Field(
        default_factory=list,
        alias="BlogMetadataList",
    )

    @field_validator("date_time")
    @classmethod
    def _date_time_to_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @field_validator("blog_metadata_list", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value

    def by_file_path(self) -> dict[str, BlogMetadata]:
        """Map each entry's file path to the entry."""
        return {metadata.file_path: metadata for metadata in self.blog_metadata_list}


class BlogIndexChangeset(BaseModel):
    """Added / updated / deleted entries between two index versions."""

    model_config = ConfigDict(populate_by_name=True)

    from_version: int = Field(alias="FromVersion", ge=0)
    to_version: int = Field(alias="ToVersion")
    added: list[BlogMetadata] = Field(default_factory=list, alias="Added")
    updated: list[BlogMetadata] = Field(default_factory=list, alias="Updated")
    deleted: list[str] = Field(default_factory=list, alias="Deleted")

    @model_validator(mode="after")
    def _check_version_order(self) -> "BlogIndexChangeset":
        if self.to_version <= self.from_version:
            mssg = f"ToVersion ({self.to_version}) must be greater than FromVersion ({self.from_version})"
            raise ValueError(mssg)
        return self

    @property
    def is_empty(self) -> bool:
        """True when nothing was added, updated or deleted."""
        return not (self.added or self.updated or self.deleted)

    def summary(self) -> dict[str, int]:
        return {
            "from_version": self.from_version,
            "to_version": self.to_version,
            "added": len(self.added),
            "updated": len(self.updated),
            "deleted": len(self.deleted),
        }


class BlogIndexUpdateResult(BaseModel):
    """Outcome of publishing one index version."""

    model_config = ConfigDict(populate_by_name=True)

    uncompressed_size: int = Field(alias="UncompressedSize")
    compressed_size: int = Field(alias="CompressedSize")
    version: int = Field(alias="Version")
    changeset: BlogIndexChangeset | None = Field(default=None, alias="Changeset")
