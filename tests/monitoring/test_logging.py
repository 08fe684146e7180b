"""Tests for structured logging functionality."""

from logging import root
from unittest.mock import patch

from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer

from markdown_blog.monitoring import configure_logging, get_logger, sanitize_log_message
from markdown_blog.monitoring.logging import add_timestamp, get_processors, sanitize_event_dict


class TestSanitizeLogMessage:
    """Tests for log message sanitization."""

    def test_control_characters_escaped(self) -> None:
        """Newlines and tabs in file paths should not split log lines."""
        result = sanitize_log_message("posts/a.md\nINFO fake\r\tx\x00")
        assert result == "posts/a.md\\nINFO fake\\r\\tx"

    def test_normal_message_unchanged(self) -> None:
        """Normal messages should be unchanged."""
        assert sanitize_log_message("Published index version 3") == "Published index version 3"


class TestProcessors:
    """Tests for structlog processors."""

    def test_sanitize_event_dict(self) -> None:
        """Only string values should be sanitized."""
        event = sanitize_event_dict(None, "info", {"event": "a\nb", "version": 3})
        assert event == {"event": "a\\nb", "version": 3}

    def test_add_timestamp(self) -> None:
        """A timestamp should be added to each event."""
        assert "timestamp" in add_timestamp(None, "info", {"event": "x"})

    def test_console_renderer_in_development(self) -> None:
        """Development uses the console renderer."""
        with patch("markdown_blog.monitoring.logging.settings.ENVIRONMENT", "development"):
            assert isinstance(get_processors(colors=False)[-1], ConsoleRenderer)

    def test_json_renderer_elsewhere(self) -> None:
        """Other environments render JSON."""
        with patch("markdown_blog.monitoring.logging.settings.ENVIRONMENT", "production"):
            assert isinstance(get_processors()[-1], JSONRenderer)


def test_configure_logging_installs_single_handler() -> None:
    """Repeated configuration should not duplicate handlers."""
    saved = list(root.handlers)
    try:
        configure_logging()
        configure_logging()
        assert len(root.handlers) == 1
        assert get_logger(__name__) is not None
    finally:
        root.handlers[:] = saved
