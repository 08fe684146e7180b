"""
Structured logging for the index publisher and cache layers.

This module configures structlog on top of the standard library logging
module with:
- Pretty console output for development
- JSON output everywhere else
- Control-character escaping for values that originate from content
  (file paths, cache keys, tags)

Examples
--------
>>> from markdown_blog.monitoring import configure_logging, get_logger
>>> configure_logging()
>>> logger = get_logger("markdown_blog.services")
>>> logger.info("Index published", version=3)
"""

from logging import StreamHandler, root

from structlog import configure
from structlog import get_logger as struct_logger
from structlog.contextvars import merge_contextvars
from structlog.dev import ConsoleRenderer, RichTracebackFormatter
from structlog.processors import (
    JSONRenderer,
    StackInfoRenderer,
    UnicodeDecoder,
    add_log_level,
    format_exc_info,
)
from structlog.processors import json as struct_json
from structlog.stdlib import (
    BoundLogger,
    ExtraAdder,
    LoggerFactory,
    PositionalArgumentsFormatter,
    ProcessorFormatter,
    add_logger_name,
    filter_by_level,
)
from structlog.types import EventDict, Processor, WrappedLogger

from markdown_blog.configs.settings import settings
from markdown_blog.utils.helpers import utc_now_str

# Characters to sanitize to prevent log injection
CONTROL_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": ""})


def sanitize_log_message(message: str) -> str:
    r"""
    Escape control characters in a log message.

    Examples:
    --------
    >>> sanitize_log_message("posts/a.md\nINFO fake")
    'posts/a.md\\nINFO fake'
    """
    return message.translate(CONTROL_CHARS)


def add_timestamp(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add a UTC ISO timestamp to the log entry."""
    event_dict["timestamp"] = utc_now_str()
    return event_dict


def add_app_name(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    event_dict.setdefault("app", settings.APP_NAME)
    return event_dict


def sanitize_event_dict(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Escape control characters in every string value of the event."""
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = sanitize_log_message(value)
    return event_dict


def get_processors(*, colors: bool = True) -> list[Processor]:
    """
    Get the list of structlog processors based on environment.

    Args:
        colors: Whether to enable colors in ConsoleRenderer.

    Returns:
        List of processors for structlog configuration.
    """
    processors: list[Processor] = [
        filter_by_level,
        merge_contextvars,
        add_log_level,
        add_timestamp,
        add_app_name,
        sanitize_event_dict,
        ExtraAdder(),
    ]

    if settings.ENVIRONMENT == "development":
        processors.append(
            ConsoleRenderer(
                colors=colors,
                pad_level=False,
                exception_formatter=RichTracebackFormatter(),
            ),
        )
    else:
        processors.append(JSONRenderer(serializer=struct_json.dumps))

    return processors


def _formatter(*, colors: bool) -> ProcessorFormatter:
    return ProcessorFormatter(
        processor=get_processors(colors=colors)[-1],
        foreign_pre_chain=[
            add_log_level,
            add_timestamp,
            sanitize_event_dict,
        ],
    )


def configure_logging() -> None:
    """Configure structured logging for a host process."""
    # Clear any existing root handlers to prevent duplicates
    root.handlers.clear()
    root.setLevel("DEBUG" if settings.DEBUG else settings.LOG_LEVEL.upper())

    configure(
        processors=[
            filter_by_level,
            merge_contextvars,
            add_logger_name,
            add_log_level,
            PositionalArgumentsFormatter(),
            StackInfoRenderer(),
            format_exc_info,
            UnicodeDecoder(),
            ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=True,
    )

    console_handler = StreamHandler()
    console_handler.setFormatter(_formatter(colors=True))
    root.addHandler(console_handler)


def get_logger(name: str) -> BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: The name of the logger (typically __name__).

    Returns:
        Configured structlog BoundLogger instance.
    """
    return struct_logger(name)

