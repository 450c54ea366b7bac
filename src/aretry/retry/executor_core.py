r"""Shared core logic for retry executors.

This module provides the decision steps used by both the synchronous
and the asynchronous retry executors. Only the invocation of the
operation and the wait differ between the two; everything else lives
here.
"""

from __future__ import annotations

__all__ = [
    "apply_condition",
    "keep_going",
    "raise_cancelled",
    "raise_terminal",
    "schedule_retry",
]

import logging
from typing import TYPE_CHECKING, NoReturn

from aretry.evaluator import Failure, Outcome, Success
from aretry.exceptions import ConditionNotMetError, RetryCancelledError

if TYPE_CHECKING:
    from aretry.retry.config import RetryPolicy
    from aretry.retry.manager import CallbackManager
    from aretry.retry.state import AttemptState

logger: logging.Logger = logging.getLogger(__name__)


def keep_going(policy: RetryPolicy, state: AttemptState) -> bool:
    """Indicate whether the loop may start another attempt.

    Args:
        policy: The retry policy.
        state: The loop state.

    Returns:
        ``True`` while the attempt index is within the retry ceiling.
    """
    limit = policy.retry_limit
    return limit is None or state.attempt <= limit


def apply_condition(policy: RetryPolicy, outcome: Outcome) -> Outcome:
    """Apply the success condition of the policy to a successful outcome.

    Args:
        policy: The retry policy.
        outcome: The outcome produced by the evaluator.

    Returns:
        The outcome unchanged, or a ``Failure`` carrying a
        ``ConditionNotMetError`` if the condition rejects the value.
    """
    if isinstance(outcome, Success) and policy.until is not None and not policy.until(outcome.value):
        logger.debug(f"Condition not met by {outcome.value!r}")
        return Failure(ConditionNotMetError(outcome.value))
    return outcome


def raise_terminal(
    callbacks: CallbackManager,
    state: AttemptState,
    error: Exception,
    cause: Exception | None = None,
) -> NoReturn:
    """Invoke the ``on_failure`` hook and raise the terminal error.

    Args:
        callbacks: The callback manager.
        state: The loop state.
        error: The error to raise.
        cause: Optional error to chain as ``__cause__``.

    Raises:
        Exception: Always raises ``error``.
    """
    callbacks.on_failure(state, error)
    if cause is not None:
        raise error from cause
    raise error


def raise_cancelled(callbacks: CallbackManager, state: AttemptState) -> NoReturn:
    """Stop the loop with a ``RetryCancelledError``.

    The last operation error, if any, is chained as the cause.

    Args:
        callbacks: The callback manager.
        state: The loop state.

    Raises:
        RetryCancelledError: Always.
    """
    reason = callbacks.policy.cancellation.reason
    logger.debug(f"Cancellation observed after {state.attempt} retries: {reason}")
    raise_terminal(callbacks, state, RetryCancelledError(reason), cause=state.error)


def schedule_retry(policy: RetryPolicy, callbacks: CallbackManager, state: AttemptState) -> float:
    """Decide what to do with the failed attempt recorded in ``state``.

    The checks run in order: last permitted attempt, eligibility
    predicate, cancellation, then time budget. Any of them ends the loop
    by raising. Otherwise the ``on_retry`` hook is invoked and the wait
    before the next attempt is returned.

    Args:
        policy: The retry policy.
        callbacks: The callback manager.
        state: The loop state, with ``state.error`` set.

    Returns:
        The wait in seconds before the next attempt.

    Raises:
        Exception: The operation error when retries are exhausted, the
            error is not eligible, or the time budget would be exceeded.
        RetryCancelledError: If cancellation has been requested.
    """
    error = state.error
    limit = policy.retry_limit
    if limit is not None and state.attempt >= limit:
        logger.debug(f"Retries exhausted after {state.attempt + 1} attempts")
        raise_terminal(callbacks, state, error)
    if not policy.should_retry(error):
        logger.debug(f"{type(error).__name__} is not eligible for retry")
        raise_terminal(callbacks, state, error)
    if policy.cancellation.is_cancelled():
        raise_cancelled(callbacks, state)

    delay = policy.backoff.calculate(state)
    if policy.timeout is not None and state.elapsed + delay > policy.timeout:
        logger.debug(
            f"Waiting {delay:.3f}s would exceed the {policy.timeout:.3f}s time budget "
            f"({state.elapsed:.3f}s elapsed)"
        )
        raise_terminal(callbacks, state, error)

    callbacks.on_retry(state, delay)
    return delay
