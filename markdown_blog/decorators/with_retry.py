"""Retry policy for reads against a remote artifact host."""

from collections.abc import Awaitable, Callable
from logging import getLogger
from typing import ParamSpec, TypeVar

from httpx import TransportError
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from markdown_blog.configs import file_logger

logger = file_logger(getLogger(__name__))

P = ParamSpec("P")
T = TypeVar("T")


class RetriableStatusError(Exception):
    """A remote read answered with a status worth retrying (429 / 5xx)."""

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"HTTP {status_code} for {url}")
        self.status_code = status_code
        self.url = url


RETRIABLE_EXCEPTIONS = (TransportError, RetriableStatusError, ConnectionError, TimeoutError)


def _warn_before_sleep(attempts: int) -> Callable[[RetryCallState], None]:
    def warn(state: RetryCallState) -> None:
        error = state.outcome.exception() if state.outcome else None
        delay = state.next_action.sleep if state.next_action else 0
        name = state.fn.__name__ if state.fn else "remote read"
        logger.warning(
            "Remote read %s failed (attempt %d of %d), retrying in %.2fs: %s",
            name,
            state.attempt_number,
            attempts,
            delay,
            error,
        )

    return warn


def with_retry(
    max_retries: int = 3,
    base_delay: float = 0.1,
    max_delay: float = 2.0,
    exec_retry: tuple[type[Exception], ...] = RETRIABLE_EXCEPTIONS,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Retry an async callable with exponential backoff.

    ``max_retries`` counts attempts, not retries, and is clamped to at least
    one. Only ``exec_retry`` exceptions are retried; after the last attempt
    the original exception propagates so callers can map it to their own
    error type.
    """
    attempts = max(1, max_retries)
    return retry(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=base_delay, min=base_delay, max=max_delay),
        retry=retry_if_exception_type(exec_retry),
        before_sleep=_warn_before_sleep(attempts),
        reraise=True,
    )
