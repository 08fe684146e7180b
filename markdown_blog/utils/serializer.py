"""
JSON serialization for index artifacts.

Uses orjson for serialization/deserialization and pydantic for shape
validation, so a corrupt or foreign ``index.json`` surfaces as an
``IndexSerializationError`` instead of a half-built snapshot.
"""

from logging import getLogger
from typing import Protocol, TypeVar

from orjson import JSONDecodeError
from orjson import dumps as orjson_dumps
from orjson import loads as orjson_loads
from pydantic import BaseModel, ValidationError

from markdown_blog.configs import file_logger
from markdown_blog.errors import IndexSerializationError
from markdown_blog.schemas.blog import BlogIndex, BlogIndexChangeset

logger = file_logger(getLogger(__name__))

ModelT = TypeVar("ModelT", bound=BaseModel)


class IndexSerializer(Protocol):
    """Anything satisfying ``text = serialize(index)`` / ``index = deserialize(text)``."""

    def serialize(self, index: BlogIndex) -> str: ...

    def deserialize(self, text: str | bytes) -> BlogIndex: ...


def dump_model(model: BaseModel) -> str:
    """Serialize a model to compact JSON using its wire aliases."""
    return orjson_dumps(model.model_dump(mode="json", by_alias=True)).decode("utf-8")


def load_model(text: str | bytes, model_type: type[ModelT]) -> ModelT:
    """
    Parse JSON text into ``model_type``.

    Raises:
        IndexSerializationError: If the text is not JSON or does not match the model.
    """
    try:
        return model_type.model_validate(orjson_loads(text))
    except (JSONDecodeError, ValidationError, TypeError) as e:
        logger.exception("Deserialization of %s failed", model_type.__name__)
        mssg = f"Cannot deserialize {model_type.__name__}: {e}"
        raise IndexSerializationError(mssg) from e


def serialize_index(index: BlogIndex) -> str:
    return dump_model(index)


def deserialize_index(text: str | bytes) -> BlogIndex:
    return load_model(text, BlogIndex)


def serialize_changeset(changeset: BlogIndexChangeset) -> str:
    return dump_model(changeset)


def deserialize_changeset(text: str | bytes) -> BlogIndexChangeset:
    return load_model(text, BlogIndexChangeset)


class BlogIndexJsonSerializer:
    """Default ``IndexSerializer`` producing the published JSON shape."""

    def serialize(self, index: BlogIndex) -> str:
        return serialize_index(index)

    def deserialize(self, text: str | bytes) -> BlogIndex:
        return deserialize_index(text)
