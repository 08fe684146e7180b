"""Application settings and configuration constants.

This module contains application settings, wire-format file names, and
configuration values for the markdown blog index and cache layers.
"""

from logging import INFO, Formatter, Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path
from tempfile import gettempdir
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).parent.parent.parent / ".env"

# --- Index artifact names (wire contract for remote readers) ---
INDEX_VERSION_FILE = "index.version"
INDEX_FILE = "index.json"
INDEX_COMPRESSED_FILE = "index.json.gz"
CHANGESET_FILE = "index.{version}.diff.json"
CHANGESET_COMPRESSED_FILE = "index.{version}.diff.json.gz"

# --- Cache document defaults ---
DEFAULT_DATA_TYPE = "String"
BLOG_INDEX_CACHE_HOURS = 12
HIERARCHY_CACHE_HOURS = 24


class Settings(BaseSettings):
    """Application settings with validation and default values."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Markdown Blog Index"
    DEBUG: bool = False

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_FILE: str = "logs/markdown_blog.log"


settings = Settings()


class IndexConfig(BaseSettings):
    """Blog index publishing configuration."""

    model_config = SettingsConfigDict(
        env_prefix="INDEX_",
        env_file=ENV_FILE,
        extra="ignore",
        case_sensitive=False,
    )

    metadata_dir: str = ".markdown.blog"
    changeset_keep_count: int = 10
    write_compressed_changeset: bool = True
    validate_metadata: bool = False


class CacheConfig(BaseSettings):
    """Cache configuration."""

    model_config = SettingsConfigDict(
        env_prefix="CACHE_",
        env_file=ENV_FILE,
        extra="ignore",
        case_sensitive=False,
    )

    cache_dir: Path = Path(gettempdir()) / "BlogCache"
    file_suffix: str = ".cache"
    default_expiration_hours: int = 24
    default_data_type: str = DEFAULT_DATA_TYPE
    default_priority: int = 1
    compression_threshold: int = 1024  # bytes
    key_limit: int = 1000


class ContentDeliveryConfig(BaseSettings):
    """Static content host (CDN / raw file hosting) configuration."""

    model_config = SettingsConfigDict(
        env_prefix="CDN_",
        env_file=ENV_FILE,
        extra="ignore",
        case_sensitive=False,
    )

    provider: Literal["github", "cloudflare", "custom"] = "github"
    base_url: str = "https://raw.githubusercontent.com"
    timeout: float = 10.0  # seconds
    max_retries: int = 3
    supports_etag: bool = False


_file_handler: RotatingFileHandler | None = None


def _shared_file_handler() -> RotatingFileHandler:
    global _file_handler  # noqa: PLW0603
    if _file_handler is None:
        log_file = Path(settings.LOG_FILE)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _file_handler = RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        _file_handler.setLevel(INFO)
        _file_handler.setFormatter(
            Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"),
        )
    return _file_handler


def file_logger(logger: Logger) -> Logger:
    """
    Attach the shared rotating file handler to a module logger.

    Does nothing unless ``LOG_TO_FILE`` is enabled.

    Args:
        logger: Module logger, usually ``getLogger(__name__)``.

    Returns:
        The same logger, for one-line module setup.
    """
    if settings.LOG_TO_FILE:
        handler = _shared_file_handler()
        if handler not in logger.handlers:
            logger.addHandler(handler)
    return logger
