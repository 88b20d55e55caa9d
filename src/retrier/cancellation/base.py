"""
Cancellation signal interface.

Retry loops poll a signal before each attempt. A signal never interrupts
an attempt that is already running.
"""

import threading
from abc import ABC, abstractmethod

from ..exceptions import CancelledError


class CancellationSignal(ABC):
    """
    Abstract base class for cancellation signals.

    A signal is owned by the caller and may be cancelled at any time,
    from any thread. Retry loops only ever query it.
    """

    @abstractmethod
    def error(self) -> Exception | None:
        """
        Return the cancellation reason, or None if not cancelled.

        Returns:
            The exception a retry loop should raise when it observes
            the cancellation
        """
        ...

    @property
    def cancelled(self) -> bool:
        """True once the signal has been triggered."""
        return self.error() is not None

    def raise_if_cancelled(self) -> None:
        """Raise the cancellation reason if the signal has been triggered."""
        err = self.error()
        if err is not None:
            raise err.with_traceback(None)


class _Background(CancellationSignal):
    def error(self) -> Exception | None:
        return None


_BACKGROUND = _Background()


def background() -> CancellationSignal:
    """Return a signal that is never cancelled."""
    return _BACKGROUND


class CancellationToken(CancellationSignal):
    """
    Manually cancellable signal.

    Cancelling is one-shot: the first reason wins and later calls to
    cancel() are ignored. A token with a parent is also cancelled when
    its parent is.
    """

    def __init__(self, parent: CancellationSignal | None = None):
        """
        Initialize the token.

        Args:
            parent: Optional signal whose cancellation propagates to this token
        """
        self.parent = parent
        self._lock = threading.Lock()
        self._reason: Exception | None = None

    def cancel(self, reason: Exception | None = None) -> None:
        """
        Trigger the token.

        Args:
            reason: Exception reported to retry loops (default: CancelledError())
        """
        with self._lock:
            if self._reason is None:
                self._reason = reason if reason is not None else CancelledError()

    def error(self) -> Exception | None:
        with self._lock:
            reason = self._reason
        if reason is None and self.parent is not None:
            return self.parent.error()
        return reason
