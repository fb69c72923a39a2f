"""Bounded retry with exponential backoff and jitter (tenacity).

Page fetches are not retried by default (``FETCH_MAX_ATTEMPTS=1``): a failed
fetch is recorded and the run moves on, which keeps the side effects of a
single run bounded. Raising the attempt count opts into retries of
transport-level failures only.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from src.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


# Exceptions that should trigger a retry
RETRYABLE_EXCEPTIONS: tuple[type[Exception], ...] = (
    httpx.TransportError,
)


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    max_attempts: int = 1
    initial_delay: float = 1.0
    max_delay: float = 30.0
    jitter: float = 1.0
    retryable_exceptions: tuple[type[Exception], ...] = field(
        default_factory=lambda: RETRYABLE_EXCEPTIONS
    )


def _log_retry(state: RetryCallState) -> None:
    error = state.outcome.exception() if state.outcome else None
    logger.warning(
        "fetch_retry",
        error=str(error),
        error_type=type(error).__name__,
        attempt=state.attempt_number,
    )


async def call_with_retry(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    config: RetryConfig | None = None,
    **kwargs: Any,
) -> T:
    """Await ``func(*args, **kwargs)`` with tenacity retries.

    Non-retryable exceptions and the last retryable one propagate unchanged.

    Usage:
        text = await call_with_retry(self._get, url, config=RetryConfig(max_attempts=3))
    """
    if config is None:
        config = RetryConfig()

    retrying = AsyncRetrying(
        stop=stop_after_attempt(config.max_attempts),
        wait=wait_exponential_jitter(
            initial=config.initial_delay,
            max=config.max_delay,
            jitter=config.jitter,
        ),
        retry=retry_if_exception_type(config.retryable_exceptions),
        before_sleep=_log_retry,
        reraise=True,
    )
    return await retrying(func, *args, **kwargs)
