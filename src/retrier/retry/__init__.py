"""
Retrier - Retry Logic.

Bounded retry loops with optional fixed or exponential delays, explicit
stop handles and cancellation.
"""

from .config import RetryConfig, RetryStrategy
from .backoff import calculate_backoff, delay_schedule, round_delay
from .loop import (
    RetryState,
    Stop,
    retry,
    retry_with_delay,
    retry_with_stop,
    async_retry,
    async_retry_with_delay,
    async_retry_with_stop,
)
from .retrier import BackoffRetrier
from .decorators import with_retry, async_with_retry

__all__ = [
    "RetryConfig",
    "RetryStrategy",
    "calculate_backoff",
    "delay_schedule",
    "round_delay",
    "RetryState",
    "Stop",
    "retry",
    "retry_with_delay",
    "retry_with_stop",
    "async_retry",
    "async_retry_with_delay",
    "async_retry_with_stop",
    "BackoffRetrier",
    "with_retry",
    "async_with_retry",
]
