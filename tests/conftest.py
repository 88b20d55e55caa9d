"""Shared fixtures for retrier tests."""

from unittest.mock import AsyncMock, patch

import pytest

from retrier.retry import loop


class Flaky:
    """Operation that fails a given number of times, then succeeds."""

    def __init__(self, failures: int, result: str = "ok"):
        self.failures = failures
        self.result = result
        self.calls = 0
        self.errors: list[Exception] = []

    def _attempt(self) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            error = ValueError(f"failure {self.calls}")
            self.errors.append(error)
            raise error
        return self.result

    def __call__(self) -> str:
        return self._attempt()

    async def run_async(self) -> str:
        return self._attempt()


@pytest.fixture
def flaky():
    """Factory for operations failing the first N attempts."""
    return Flaky


@pytest.fixture
def sleeps():
    """Intercept blocking sleeps taken by retry loops."""
    with patch.object(loop.time, "sleep") as mock_sleep:
        yield mock_sleep


@pytest.fixture
def async_sleeps():
    """Intercept asyncio sleeps taken by retry loops."""
    with patch.object(loop.asyncio, "sleep", new_callable=AsyncMock) as mock_sleep:
        yield mock_sleep

