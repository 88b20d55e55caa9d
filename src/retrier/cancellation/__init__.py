"""
Retrier - Cancellation.

Poll-based cancellation signals checked before each retry attempt.
"""

from .base import CancellationSignal, CancellationToken, background
from .deadline import DeadlineToken

__all__ = [
    "CancellationSignal",
    "CancellationToken",
    "DeadlineToken",
    "background",
]
