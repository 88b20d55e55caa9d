"""
Retry loops.

A failing attempt is one that raises an Exception. The final failure is
re-raised unchanged once the budget is spent; a cancellation signal's
reason is raised unchanged as soon as it is observed.
"""

import asyncio
import itertools
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterator, TypeVar

from ..cancellation import CancellationSignal

logger = logging.getLogger(__name__)

T = TypeVar("T")

OnRetry = Callable[[int, Exception, float | None], None]


@dataclass
class RetryState:
    """
    Bookkeeping for a single retry invocation.

    Attributes:
        max_retries: Retries allowed after the first attempt
        attempt: Number of attempts started so far
        stopped: Set once stop() has been called
        delay: Delay taken after the most recent failure, if any
    """

    max_retries: int
    attempt: int = 0
    stopped: bool = False
    delay: float | None = None

    @property
    def exhausted(self) -> bool:
        return self.attempt > self.max_retries

    @property
    def finished(self) -> bool:
        return self.stopped or self.exhausted


class Stop:
    """
    Handle given to stop-aware operations.

    Calling it prevents any further attempt once the current one
    returns. It never changes the current attempt's outcome, and calling
    it more than once has no extra effect.
    """

    def __init__(self, state: RetryState):
        self._state = state

    def __call__(self) -> None:
        if not self._state.stopped:
            logger.debug(f"Retry loop stopped at attempt {self._state.attempt}")
        self._state.stopped = True

    @property
    def stopped(self) -> bool:
        return self._state.stopped


def _new_state(max_retries: int) -> RetryState:
    if max_retries < 0:
        raise ValueError(f"max_retries must be >= 0, got {max_retries}")
    return RetryState(max_retries=max_retries)


def _raise_if_cancelled(
    state: RetryState,
    stop: Stop,
    cancellation: CancellationSignal | None,
    until_stopped: bool,
) -> None:
    if cancellation is None:
        return
    err = cancellation.error()
    if err is not None:
        logger.debug(f"Retry loop cancelled before attempt {state.attempt + 1}: {err}")
        if until_stopped:
            stop()
        raise err.with_traceback(None)


def _record_failure(
    state: RetryState,
    exc: Exception,
    delays: Iterator[float],
    on_retry: OnRetry | None,
) -> float | None:
    state.delay = next(delays, None)
    if on_retry:
        on_retry(state.attempt, exc, state.delay)
    elif state.delay is None:
        logger.warning(f"Attempt {state.attempt}/{state.max_retries + 1} failed: {exc}")
    else:
        logger.warning(
            f"Attempt {state.attempt}/{state.max_retries + 1} failed: {exc}, "
            f"waiting {state.delay:.3f}s"
        )
    return state.delay


def run_loop(
    max_retries: int,
    call: Callable[[Stop], T],
    *,
    until_stopped: bool,
    delays: Iterator[float],
    cancellation: CancellationSignal | None = None,
    on_retry: OnRetry | None = None,
) -> T:
    """
    Drive attempts until success (or stop), cancellation or exhaustion.

    Args:
        max_retries: Retries allowed after the first attempt
        call: Attempt body, always given the loop's Stop handle
        until_stopped: If True, success alone does not end the loop;
            only stop() or exhaustion does
        delays: Pause taken after each failing attempt, including the
            last one; an exhausted iterator means no pause and a
            non-positive delay is skipped
        cancellation: Signal polled before every attempt
        on_retry: Optional callback(attempt, exception, delay) called after
            each failing attempt instead of logging

    Returns:
        The value returned by the last attempt
    """
    state = _new_state(max_retries)
    stop = Stop(state)
    result = None
    failure: Exception | None = None

    while not state.finished:
        _raise_if_cancelled(state, stop, cancellation, until_stopped)
        state.attempt += 1
        try:
            result = call(stop)
        except Exception as e:
            failure = e
            delay = _record_failure(state, e, delays, on_retry)
            if delay is not None and delay > 0:
                time.sleep(delay)
            continue
        failure = None
        if not until_stopped:
            break

    if failure is not None:
        raise failure
    return result


async def async_run_loop(
    max_retries: int,
    call: Callable[[Stop], Awaitable[T]],
    *,
    until_stopped: bool,
    delays: Iterator[float],
    cancellation: CancellationSignal | None = None,
    on_retry: OnRetry | None = None,
) -> T:
    """Async version of run_loop; pauses with asyncio.sleep."""
    state = _new_state(max_retries)
    stop = Stop(state)
    result = None
    failure: Exception | None = None

    while not state.finished:
        _raise_if_cancelled(state, stop, cancellation, until_stopped)
        state.attempt += 1
        try:
            result = await call(stop)
        except Exception as e:
            failure = e
            delay = _record_failure(state, e, delays, on_retry)
            if delay is not None and delay > 0:
                await asyncio.sleep(delay)
            continue
        failure = None
        if not until_stopped:
            break

    if failure is not None:
        raise failure
    return result


def retry(
    max_retries: int,
    operation: Callable[[], T],
    *,
    cancellation: CancellationSignal | None = None,
    on_retry: OnRetry | None = None,
) -> T:
    """
    Call operation until it succeeds, at most max_retries + 1 times.

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
        delays=iter(()),
        cancellation=cancellation,
        on_retry=on_retry,
    )


def retry_with_delay(
    max_retries: int,
    delay: float,
    operation: Callable[[], T],
    *,
    cancellation: CancellationSignal | None = None,
    on_retry: OnRetry | None = None,
) -> T:
    """
    Like retry(), sleeping delay seconds after every failing attempt.

    The pause also follows the attempt that exhausts the budget.
    """
    return run_loop(
        max_retries,
        lambda stop: operation(),
        until_stopped=False,
        delays=itertools.repeat(delay),
        cancellation=cancellation,
        on_retry=on_retry,
    )


def retry_with_stop(
    max_retries: int,
    operation: Callable[[Stop], T],
    *,
    cancellation: CancellationSignal | None = None,
    on_retry: OnRetry | None = None,
) -> T:
    """
    Call operation until it calls stop(), at most max_retries + 1 times.

    Success does not end the loop by itself. The outcome of the last
    attempt is returned (or its exception raised). When cancellation is
    observed the loop stops itself and raises the signal's reason.
    """
    return run_loop(
        max_retries,
        operation,
        until_stopped=True,
        delays=iter(()),
        cancellation=cancellation,
        on_retry=on_retry,
    )


async def async_retry(
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
        delays=iter(()),
        cancellation=cancellation,
        on_retry=on_retry,
    )


async def async_retry_with_delay(
    max_retries: int,
    delay: float,
    operation: Callable[[], Awaitable[T]],
    *,
    cancellation: CancellationSignal | None = None,
    on_retry: OnRetry | None = None,
) -> T:
    """Async version of retry_with_delay()."""
    return await async_run_loop(
        max_retries,
        lambda stop: operation(),
        until_stopped=False,
        delays=itertools.repeat(delay),
        cancellation=cancellation,
        on_retry=on_retry,
    )


async def async_retry_with_stop(
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
        delays=iter(()),
        cancellation=cancellation,
        on_retry=on_retry,
    )
