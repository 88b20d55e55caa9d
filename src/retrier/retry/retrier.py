"""
Retrier that backs off exponentially between failing attempts.
"""

from typing import Awaitable, Callable, TypeVar

from .backoff import exponential_delays
from .config import RetryConfig, RetryStrategy
from .loop import OnRetry, Stop, async_run_loop, run_loop
from ..cancellation import CancellationSignal

T = TypeVar("T")


class BackoffRetrier:
    """
    Retries an operation, sleeping longer after each failure.

    The first pause is initial_delay; each later pause is the previous one
    multiplied by coefficient. The schedule restarts on every call, so one
    retrier can be shared by independent callers.

    Example:
        retrier = BackoffRetrier(initial_delay=0.1, coefficient=2.0)
        data = retrier.retry(5, fetch_data)
    """

    def __init__(self, initial_delay: float, coefficient: float):
        """
        Initialize the retrier.

        Args:
            initial_delay: Pause after the first failure, in seconds
            coefficient: Growth factor per failure (not validated)
        """
        self.initial_delay = initial_delay
        self.coefficient = coefficient

    @classmethod
    def from_config(cls, config: RetryConfig) -> "BackoffRetrier":
        """Create a retrier from an exponential RetryConfig."""
        if config.strategy != RetryStrategy.EXPONENTIAL:
            raise ValueError(
                f"BackoffRetrier needs an exponential config, got {config.strategy.value}"
            )
        return cls(config.delay, config.coefficient)

    def __repr__(self) -> str:
        return (
            f"BackoffRetrier(initial_delay={self.initial_delay!r}, "
            f"coefficient={self.coefficient!r})"
        )

    def retry(
        self,
        max_retries: int,
        operation: Callable[[], T],
        *,
        cancellation: CancellationSignal | None = None,
        on_retry: OnRetry | None = None,
    ) -> T:
        """
        Call operation until it succeeds, at most max_retries + 1 times.

        Every failing attempt is followed by a pause, including the last.

        Args:
            max_retries: Retries allowed after the first attempt
            operation: Zero-argument callable; raising means failure
            cancellation: Optional signal checked before every attempt
            on_retry: Optional callback(attempt, exception, delay)

        Returns:
            The first successful result. If every attempt fails, the last
            exception is raised.
        """
        return run_loop(
            max_retries,
            lambda stop: operation(),
            until_stopped=False,
            delays=exponential_delays(self.initial_delay, self.coefficient),
            cancellation=cancellation,
            on_retry=on_retry,
        )

    def retry_with_stop(
        self,
        max_retries: int,
        operation: Callable[[Stop], T],
        *,
        cancellation: CancellationSignal | None = None,
        on_retry: OnRetry | None = None,
    ) -> T:
        """
        Call operation until it calls stop(), at most max_retries + 1 times.

        A failing attempt is followed by a pause even if it called stop().
        Successful attempts never pause.
        """
        return run_loop(
            max_retries,
            operation,
            until_stopped=True,
            delays=exponential_delays(self.initial_delay, self.coefficient),
            cancellation=cancellation,
            on_retry=on_retry,
        )

    async def async_retry(
        self,
        max_retries: int,
        operation: Callable[[], Awaitable[T]],
        *,
        cancellation: CancellationSignal | None = None,
        on_retry: OnRetry | None = None,
    ) -> T:
        """Async version of retry()."""
        return await async_run_loop(
            max_retries,
            lambda stop: operation(),
            until_stopped=False,
            delays=exponential_delays(self.initial_delay, self.coefficient),
            cancellation=cancellation,
            on_retry=on_retry,
        )

    async def async_retry_with_stop(
        self,
        max_retries: int,
        operation: Callable[[Stop], Awaitable[T]],
        *,
        cancellation: CancellationSignal | None = None,
        on_retry: OnRetry | None = None,
    ) -> T:
        """Async version of retry_with_stop()."""
        return await async_run_loop(
            max_retries,
            operation,
            until_stopped=True,
            delays=exponential_delays(self.initial_delay, self.coefficient),
            cancellation=cancellation,
            on_retry=on_retry,
        )
