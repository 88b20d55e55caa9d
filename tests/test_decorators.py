"""Tests for retry decorators - behavior focused."""

import pytest
from retrier.cancellation import CancellationToken
from retrier.exceptions import CancelledError
from retrier.retry import RetryConfig, with_retry, async_with_retry


class TestWithRetry:
    """Test the synchronous decorator."""

    def test_retries_until_success(self, flaky, sleeps):
        """Default config retries without pausing."""
        op = flaky(2)
        wrapped = with_retry()(op)

        assert wrapped() == "ok"
        assert op.calls == 3
        sleeps.assert_not_called()

    def test_passes_arguments_through(self):
        """Arguments reach the wrapped function on every attempt."""
        seen = []

        @with_retry(RetryConfig(max_retries=2))
        def add(a, b=0):
            seen.append((a, b))
            if len(seen) < 2:
                raise ValueError("not yet")
            return a + b

        assert add(1, b=2) == 3
        assert seen == [(1, 2), (1, 2)]

    def test_preserves_metadata(self):
        """functools.wraps keeps the name and docstring."""

        @with_retry()
        def fetch():
            """Fetch something."""
            return 1

        assert fetch.__name__ == "fetch"
        assert fetch.__doc__ == "Fetch something."

    def test_no_retry_preset_runs_once(self, flaky):
        """no_retry raises the first failure."""
        op = flaky(1)

        with pytest.raises(ValueError):
            with_retry(RetryConfig.no_retry())(op)()

        assert op.calls == 1

    def test_fixed_config_sleeps(self, flaky, sleeps):
        """Fixed config pauses after each failure."""
        with_retry(RetryConfig.fixed(max_retries=3, delay=0.2))(flaky(2))()

        assert [c.args[0] for c in sleeps.call_args_list] == [0.2, 0.2]

    def test_backoff_restarts_per_call(self, flaky, sleeps):
        """Each decorated call starts a fresh backoff schedule."""
        op = flaky(2)
        wrapped = with_retry(
            RetryConfig.backoff(max_retries=5, initial_delay=1.0, coefficient=3.0)
        )(op)

        wrapped()
        op.calls = 0
        op.failures = 1
        wrapped()

        assert [c.args[0] for c in sleeps.call_args_list] == [1.0, 3.0, 1.0]

    def test_cancellation_prevents_call(self, flaky):
        """A cancelled signal stops the decorated function from running."""
        token = CancellationToken()
        token.cancel()
        op = flaky(0)

        with pytest.raises(CancelledError):
            with_retry(cancellation=token)(op)()

        assert op.calls == 0

    def test_on_retry_hook(self, flaky):
        """The hook is called once per failure."""
        attempts = []

        with_retry(on_retry=lambda attempt, exc, delay: attempts.append(attempt))(
            flaky(2)
        )()

        assert attempts == [1, 2]


class TestAsyncWithRetry:
    """Test the async decorator."""

    @pytest.mark.asyncio
    async def test_retries_until_success(self, flaky, async_sleeps):
        """Async decorator retries with the configured delay."""
        op = flaky(2)
        wrapped = async_with_retry(RetryConfig.fixed(max_retries=3, delay=0.5))(
            op.run_async
        )

        assert await wrapped() == "ok"
        assert op.calls == 3
        assert async_sleeps.await_count == 2

    @pytest.mark.asyncio
    async def test_raises_last_error(self, flaky):
        """Async exhaustion raises the final failure."""
        op = flaky(100)

        with pytest.raises(ValueError) as exc_info:
            await async_with_retry(RetryConfig(max_retries=1))(op.run_async)()

        assert op.calls == 2
        assert exc_info.value is op.errors[-1]
