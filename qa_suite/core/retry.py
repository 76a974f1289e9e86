"""
Retry utilities for flaky test operations.

Re-invokes a fallible async operation a fixed number of times with a fixed
delay between attempts. There is no backoff and no jitter. When every attempt
fails the exception from the final attempt is re-raised unchanged.
"""

import functools
import logging
from dataclasses import dataclass, field
from typing import (
    Any,
    Awaitable,
    Callable,
    Optional,
    Tuple,
    Type,
    TypeVar,
)

from .clock import sleep_ms
from .config import get_config


logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    # Total number of attempts, including the first one
    max_attempts: int = 3

    # Fixed delay between attempts (milliseconds)
    delay_ms: float = 1000

    # Exception types to retry on; anything else propagates immediately
    retry_on: Tuple[Type[BaseException], ...] = field(
        default_factory=lambda: (Exception,)
    )

    @classmethod
    def from_config(cls) -> "RetryConfig":
        waits = get_config().waits
        return cls(max_attempts=waits.retry_attempts, delay_ms=waits.retry_delay)


async def retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: Optional[int] = None,
    delay_ms: Optional[float] = None,
    retry_on: Optional[Tuple[Type[BaseException], ...]] = None,
) -> T:
    """
    Invoke ``operation`` until it succeeds or attempts run out.

    Usage:
        body = await retry(lambda: client.get("/produtos"), max_attempts=3, delay_ms=1000)

    Args:
        operation: Zero-argument async callable
        max_attempts: Total attempts (>= 1)
        delay_ms: Fixed wait between attempts in milliseconds
        retry_on: Exception types that trigger another attempt

    Returns:
        The first successful result

    Raises:
        The exception from the last attempt, unmodified
    """
    config = RetryConfig.from_config()
    if max_attempts is not None:
        config.max_attempts = max_attempts
    if delay_ms is not None:
        config.delay_ms = delay_ms
    if retry_on is not None:
        config.retry_on = retry_on

    if config.max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {config.max_attempts}")

    name = getattr(operation, "__name__", "operation")

    for attempt in range(1, config.max_attempts + 1):
        try:
            return await operation()
        except config.retry_on as e:
            if attempt >= config.max_attempts:
                logger.warning(
                    f"All {config.max_attempts} attempts failed for {name}: "
                    f"{type(e).__name__}: {e}"
                )
                raise

            logger.warning(
                f"Retry {attempt}/{config.max_attempts} for {name}: "
                f"{type(e).__name__}: {e}, waiting {config.delay_ms:.0f}ms"
            )
            await sleep_ms(config.delay_ms)

    # max_attempts >= 1 guarantees a return or raise inside the loop
    raise AssertionError("unreachable")


def with_retry(
    max_attempts: Optional[int] = None,
    delay_ms: Optional[float] = None,
    retry_on: Optional[Tuple[Type[BaseException], ...]] = None,
) -> Callable:
    """
    Decorator form of :func:`retry` for async functions.

    Usage:
        @with_retry(max_attempts=3, delay_ms=500)
        async def fill_search(locator, text):
            ...
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            async def attempt() -> T:
                return await func(*args, **kwargs)

            attempt.__name__ = func.__name__
            return await retry(
                attempt,
                max_attempts=max_attempts,
                delay_ms=delay_ms,
                retry_on=retry_on,
            )

        return wrapper

    return decorator
