"""
Retrier - Bounded retry loops for fallible operations.

Retry with fixed delays or exponential backoff, explicit stop handles and
poll-based cancellation.
"""

from .cancellation import (
    CancellationSignal,
    CancellationToken,
    DeadlineToken,
    background,
)
from .exceptions import (
    RetrierError,
    CancelledError,
    DeadlineExceededError,
)
from .retry import (
    RetryConfig,
    RetryStrategy,
    calculate_backoff,
    delay_schedule,
    Stop,
    retry,
    retry_with_delay,
    retry_with_stop,
    async_retry,
    async_retry_with_delay,
    async_retry_with_stop,
    BackoffRetrier,
    with_retry,
    async_with_retry,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Cancellation
    "CancellationSignal",
    "CancellationToken",
    "DeadlineToken",
    "background",
    # Exceptions
    "RetrierError",
    "CancelledError",
    "DeadlineExceededError",
    # Retry
    "RetryConfig",
    "RetryStrategy",
    "calculate_backoff",
    "delay_schedule",
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
