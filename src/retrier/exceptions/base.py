"""
Base exception classes for retry operations.

Operation failures are never wrapped in these types; they are raised
verbatim. These classes describe why a retry loop was cut short.
"""


class RetrierError(Exception):
    """Base exception for all retrier errors."""

    def __init__(self, message: str, *, reason: str | None = None):
        super().__init__(message)
        self.message = message
        self.reason = reason

    def __str__(self) -> str:
        if self.reason:
            return f"{self.message}: {self.reason}"
        return self.message


class CancelledError(RetrierError):
    """Raised when a cancellation signal is triggered before an attempt."""

    def __init__(self, message: str = "Operation cancelled", **kwargs):
        super().__init__(message, **kwargs)


class DeadlineExceededError(CancelledError):
    """Raised when a deadline-driven signal expires before an attempt."""

    def __init__(
        self,
        message: str = "Deadline exceeded",
        *,
        timeout: float | None = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.timeout = timeout

    def __str__(self) -> str:
        text = super().__str__()
        if self.timeout is not None:
            text = f"{text} (timeout: {self.timeout}s)"
        return text
