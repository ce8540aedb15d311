"""Bounded retry with exponential backoff for async operations."""

import asyncio
from typing import Awaitable, Callable, TypeVar

import logfire

from huddle.domain.error import TransientStoreError
from huddle.util.error import RetryExhaustedError

T = TypeVar("T")


def is_retryable(error: Exception) -> bool:
    """Only transient store failures flagged as retryable are retried."""
    return isinstance(error, TransientStoreError) and error.retryable


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    *,
    name: str,
    attempts: int = 3,
    base_delay: float = 0.2,
    max_delay: float = 2.0,
    should_retry: Callable[[Exception], bool] = is_retryable,
) -> T:
    """Run ``operation`` until it succeeds or attempts run out.

    The delay before retry ``n`` (1-based) is ``base_delay * 2 ** (n - 1)``,
    capped at ``max_delay``. Errors rejected by ``should_retry`` propagate
    immediately.

    Args:
        operation: Zero-argument coroutine factory
        name: Operation name for logs
        attempts: Total attempts, at least 1
        base_delay: First backoff delay in seconds
        max_delay: Upper bound for a single delay
        should_retry: Decides whether an error is worth retrying

    Returns:
        Result of the first successful attempt

    Raises:
        RetryExhaustedError: If every attempt failed with a retryable error
    """
    attempts = max(1, attempts)
    attempt = 0
    while True:
        attempt += 1
        try:
            return await operation()
        except Exception as e:
            if not should_retry(e):
                raise
            if attempt == attempts:
                logfire.error(
                    "Retry attempts exhausted",
                    operation=name,
                    attempts=attempts,
                    error=str(e),
                )
                raise RetryExhaustedError(name, attempts, e) from e

            delay = min(max_delay, base_delay * 2 ** (attempt - 1))
            logfire.warn(
                "Retrying after transient failure",
                operation=name,
                attempt=attempt,
                delay=delay,
                error=str(e),
            )
            await asyncio.sleep(delay)
