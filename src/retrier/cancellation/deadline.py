"""
Deadline-driven cancellation.
"""

import time

from .base import CancellationSignal, CancellationToken
from ..exceptions import DeadlineExceededError


class DeadlineToken(CancellationToken):
    """
    Token that cancels itself once a timeout has elapsed.

    Expiry is measured on the monotonic clock. The token can still be
    cancelled manually before the deadline, in which case the manual
    reason is reported.
    """

    def __init__(self, timeout: float, parent: CancellationSignal | None = None):
        """
        Initialize the token.

        Args:
            timeout: Seconds from now until the token expires
            parent: Optional signal whose cancellation propagates to this token
        """
        super().__init__(parent)
        self.timeout = timeout
        self._expires_at = time.monotonic() + timeout

    @property
    def remaining(self) -> float:
        """Seconds left before expiry, never negative."""
        return max(0.0, self._expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        return time.monotonic() >= self._expires_at

    def error(self) -> Exception | None:
        err = super().error()
        if err is None and self.expired:
            self.cancel(DeadlineExceededError(timeout=self.timeout))
            err = super().error()
        return err
