"""
Retry configuration and strategy definitions.
"""

from dataclasses import dataclass
from enum import Enum


class RetryStrategy(str, Enum):
    """Available delay strategies."""

    NONE = "none"  # retry immediately
    FIXED = "fixed"  # delay = delay
    EXPONENTIAL = "exponential"  # delay = delay * coefficient ** (failure - 1), compounded


@dataclass
class RetryConfig:
    """
    Configuration for retry behavior.

    Attributes:
        max_retries: Retries allowed after the first attempt (default: 3)
        strategy: Delay strategy to use (default: none)
        delay: Fixed delay, or initial delay for exponential backoff, in seconds
        coefficient: Multiplier applied to the delay after each failure
            (exponential only, not validated)
    """

    max_retries: int = 3
    strategy: RetryStrategy = RetryStrategy.NONE
    delay: float = 0.0
    coefficient: float = 2.0

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")

    @property
    def max_attempts(self) -> int:
        """Total number of attempts, including the first one."""
        return self.max_retries + 1

    @classmethod
    def no_retry(cls) -> "RetryConfig":
        """Preset for no retry (single attempt only)."""
        return cls(max_retries=0)

    @classmethod
    def fixed(cls, max_retries: int, delay: float) -> "RetryConfig":
        """Preset for a constant pause after every failure."""
        return cls(
            max_retries=max_retries,
            strategy=RetryStrategy.FIXED,
            delay=delay,
        )

    @classmethod
    def backoff(
        cls, max_retries: int, initial_delay: float, coefficient: float = 2.0
    ) -> "RetryConfig":
        """Preset for exponential backoff starting at initial_delay."""
        return cls(
            max_retries=max_retries,
            strategy=RetryStrategy.EXPONENTIAL,
            delay=initial_delay,
            coefficient=coefficient,
        )
