"""
Retry decorators driven by RetryConfig.
"""

import functools
from typing import Awaitable, Callable, TypeVar, ParamSpec

from .backoff import delay_schedule
from .config import RetryConfig
from .loop import OnRetry, async_run_loop, run_loop
from ..cancellation import CancellationSignal

P = ParamSpec("P")
T = TypeVar("T")


def with_retry(
    config: RetryConfig | None = None,
    cancellation: CancellationSignal | None = None,
    on_retry: OnRetry | None = None,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    Decorator for synchronous functions with retry logic.

    Args:
        config: Retry configuration (default: RetryConfig())
        cancellation: Optional signal checked before every attempt
        on_retry: Optional callback(attempt, exception, delay) called after
            each failing attempt

    Returns:
        Decorated function with retry behavior
    """
    if config is None:
        config = RetryConfig()

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return run_loop(
                config.max_retries,
                lambda stop: func(*args, **kwargs),
                until_stopped=False,
                delays=delay_schedule(config),
                cancellation=cancellation,
                on_retry=on_retry,
            )

        return wrapper

    return decorator


def async_with_retry(
    config: RetryConfig | None = None,
    cancellation: CancellationSignal | None = None,
    on_retry: OnRetry | None = None,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Decorator for async functions with retry logic.

    Args:
        config: Retry configuration (default: RetryConfig())
        cancellation: Optional signal checked before every attempt
        on_retry: Optional callback(attempt, exception, delay) called after
            each failing attempt

    Returns:
        Decorated async function with retry behavior
    """
    if config is None:
        config = RetryConfig()

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return await async_run_loop(
                config.max_retries,
                lambda stop: func(*args, **kwargs),
                until_stopped=False,
                delays=delay_schedule(config),
                cancellation=cancellation,
                on_retry=on_retry,
            )

        return wrapper

    return decorator
