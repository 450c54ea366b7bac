r"""Asynchronous retry executor.

This module provides the AsyncRetryExecutor class that drives the retry
loop for operations returning awaitables.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import logging
from typing import TYPE_CHECKING, Any

from aretry.evaluator import Success
from aretry.exceptions import InvariantViolationError
from aretry.retry.executor_core import (
    apply_condition,
    keep_going,
    raise_cancelled,
    schedule_retry,
)
from aretry.retry.manager import CallbackManager
from aretry.retry.state import AttemptState

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.retry.config import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRetryExecutor:
    """Executes an async operation with automatic retry logic.

    Same loop as ``RetryExecutor``, but the operation is awaited (when it
    returns an awaitable) and the waits suspend the current task instead
    of blocking the thread, letting other tasks run meanwhile. The two
    suspension points are the invocation and the wait; an in-flight
    invocation is never interrupted by a cancellation source, which only
    takes effect at the next checkpoint.

    Note:
        Hooks are invoked synchronously and should be fast operations.

    Attributes:
        policy: The retry policy.
        callbacks: Manager for invoking the policy hooks.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry.retry import AsyncRetryExecutor, RetryPolicy
        >>> async def fetch():
        ...     return "ok"
        ...
        >>> asyncio.run(AsyncRetryExecutor(RetryPolicy()).execute(fetch))
        'ok'

        ```
    """

    def __init__(self, policy: RetryPolicy) -> None:
        self.policy = policy
        self.callbacks: CallbackManager = CallbackManager(policy)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(policy={self.policy!r})"

    async def execute(self, operation: Callable[[], Any]) -> Any:
        """Execute the operation until success, exhaustion, or
        cancellation.

        Args:
            operation: The zero-argument callable to invoke. It may
                return a value or an awaitable.

        Returns:
            The (awaited) value of the first successful attempt.

        Raises:
            Exception: The error of the last attempt when retries are
                exhausted, the error is not eligible for retry, or the
                time budget would be exceeded.
            ConditionNotMetError: If the last value did not satisfy the
                policy's success condition.
            RetryCancelledError: If the cancellation source stopped the
                loop.
        """
        policy = self.policy
        state = AttemptState()

        while keep_going(policy, state):
            if policy.cancellation.is_cancelled():
                raise_cancelled(self.callbacks, state)
            logger.debug(f"Starting attempt {state.attempt + 1}")

            outcome = apply_condition(policy, await policy.evaluator.evaluate_async(operation))
            if isinstance(outcome, Success):
                self.callbacks.on_success(state, outcome.value)
                return outcome.value

            state.error = outcome.error
            delay = schedule_retry(policy, self.callbacks, state)
            if await policy.cancellation.wait_async(delay):
                raise_cancelled(self.callbacks, state)
            state.advance(delay)

        msg = f"retry loop exited without an outcome after {state.attempt} attempts"
        raise InvariantViolationError(msg)
