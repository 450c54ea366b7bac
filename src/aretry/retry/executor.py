r"""Synchronous retry executor.

This module provides the RetryExecutor class that drives the retry loop
for blocking operations.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

import logging
from typing import TYPE_CHECKING, Any, TypeVar

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

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class RetryExecutor:
    """Executes a blocking operation with automatic retry logic.

    The executor is a thin driver over the policy's collaborators:

    - the evaluator judges each invocation,
    - the backoff strategy computes the waits,
    - the cancellation source is polled before every attempt and
      performs the waits,
    - the callback manager invokes the lifecycle hooks.

    The executor holds no per-call state, so one executor can run any
    number of calls, including concurrently from several threads.

    Attributes:
        policy: The retry policy.
        callbacks: Manager for invoking the policy hooks.

    Example:
        ```pycon
        >>> from aretry.retry import RetryExecutor, RetryPolicy
        >>> from aretry.backoff import ConstantBackoff
        >>> calls = []
        >>> def flaky():
        ...     calls.append(1)
        ...     if len(calls) < 3:
        ...         raise ConnectionError("boom")
        ...     return "ok"
        ...
        >>> executor = RetryExecutor(RetryPolicy(backoff=ConstantBackoff(0.0)))
        >>> executor.execute(flaky)
        'ok'
        >>> len(calls)
        3

        ```
    """

    def __init__(self, policy: RetryPolicy) -> None:
        self.policy = policy
        self.callbacks: CallbackManager = CallbackManager(policy)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(policy={self.policy!r})"

    def execute(self, operation: Callable[[], T]) -> T:
        """Execute the operation until success, exhaustion, or
        cancellation.

        Args:
            operation: The zero-argument callable to invoke.

        Returns:
            The value of the first successful attempt.

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

            outcome = apply_condition(policy, policy.evaluator.evaluate(operation))
            if isinstance(outcome, Success):
                value: Any = outcome.value
                self.callbacks.on_success(state, value)
                return value

            state.error = outcome.error
            delay = schedule_retry(policy, self.callbacks, state)
            if policy.cancellation.wait(delay):
                raise_cancelled(self.callbacks, state)
            state.advance(delay)

        msg = f"retry loop exited without an outcome after {state.attempt} attempts"
        raise InvariantViolationError(msg)
