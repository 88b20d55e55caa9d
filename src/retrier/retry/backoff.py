"""
Delay calculation for retry loops.
"""

import itertools
from typing import Iterator

from .config import RetryConfig, RetryStrategy

# Delays are kept in whole microseconds.
DELAY_PRECISION = 6


def round_delay(seconds: float) -> float:
    """Round a delay to the nearest whole microsecond."""
    return round(seconds, DELAY_PRECISION)


def exponential_delays(initial_delay: float, coefficient: float) -> Iterator[float]:
    """
    Yield an endlessly compounding backoff schedule.

    The first value is initial_delay; every following value is the
    previous one multiplied by coefficient and rounded.

    Args:
        initial_delay: Delay after the first failure, in seconds
        coefficient: Growth factor per failure (values < 1 shrink the delay)
    """
    delay = initial_delay
    while True:
        yield delay
        delay = round_delay(delay * coefficient)


def delay_schedule(config: RetryConfig) -> Iterator[float]:
    """
    Build the sequence of pauses taken after each failing attempt.

    Every retry invocation must take a fresh schedule; the schedule
    carries the current backoff delay.

    Args:
        config: Retry configuration

    Returns:
        Iterator yielding the delay after the 1st, 2nd, ... failure.
        Empty for RetryStrategy.NONE.
    """
    if config.strategy == RetryStrategy.EXPONENTIAL:
        return exponential_delays(config.delay, config.coefficient)
    if config.strategy == RetryStrategy.FIXED:
        return itertools.repeat(config.delay)
    return iter(())


def calculate_backoff(failure: int, config: RetryConfig) -> float:
    """
    Calculate the delay after a given failure.

    Args:
        failure: One-based index of the failing attempt
        config: Retry configuration

    Returns:
        Delay in seconds (0.0 for RetryStrategy.NONE)
    """
    if failure < 1:
        raise ValueError(f"failure must be >= 1, got {failure}")
    if config.strategy == RetryStrategy.NONE:
        return 0.0
    return next(itertools.islice(delay_schedule(config), failure - 1, None))
