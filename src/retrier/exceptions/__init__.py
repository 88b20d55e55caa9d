"""
Retrier - Exception Hierarchy.

Errors raised when a retry loop is cancelled rather than exhausted.
"""

from .base import (
    RetrierError,
    CancelledError,
    DeadlineExceededError,
)

__all__ = [
    "RetrierError",
    "CancelledError",
    "DeadlineExceededError",
]
