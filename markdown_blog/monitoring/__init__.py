from markdown_blog.monitoring.logging import (
    configure_logging,
    get_logger,
    sanitize_log_message,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "sanitize_log_message",
]
