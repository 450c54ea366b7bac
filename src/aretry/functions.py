r"""Synchronous retry entry points.

Each function builds a ``RetryPolicy`` preset (see ``aretry.policies``)
and runs the operation through ``RetryExecutor``. Durations are in
seconds.
"""

from __future__ import annotations

__all__ = [
    "execute",
    "retry",
    "retry_until_condition",
    "retry_with_cancellation_token",
    "retry_with_custom_execution",
    "retry_with_jitter",
    "retry_with_max_total_attempts",
    "retry_with_predicate_delay",
    "retry_with_randomized_backoff",
    "retry_with_schedule",
    "retry_with_signal",
    "retry_with_stop_predicate",
    "retry_with_timeout",
]

from typing import TYPE_CHECKING, Any, TypeVar

from aretry import policies
from aretry.retry.config import (
    DEFAULT_DELAY,
    DEFAULT_FACTOR,
    DEFAULT_JITTER,
    DEFAULT_MAX_DELAY,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
)
from aretry.retry.executor import RetryExecutor

if TYPE_CHECKING:
    import threading
    from collections.abc import Callable, Sequence

    from aretry.cancellation import SupportsCancelled
    from aretry.evaluator import ExecutionResult
    from aretry.retry.config import RetryPolicy

T = TypeVar("T")


def execute(operation: Callable[[], T], policy: RetryPolicy) -> T:
    """Run an operation with an arbitrary retry policy.

    Args:
        operation: The zero-argument callable to invoke.
        policy: The retry policy.

    Returns:
        The value of the first successful attempt.

    Example:
        ```pycon
        >>> from aretry import execute
        >>> from aretry.backoff import ScheduleBackoff
        >>> from aretry.retry import RetryPolicy
        >>> execute(lambda: "ok", RetryPolicy(backoff=ScheduleBackoff([0.1, 0.2])))
        'ok'

        ```
    """
    return RetryExecutor(policy).execute(operation)


def retry(
    operation: Callable[[], T],
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    on_retry: Callable[[Exception, int], None] | None = None,
    should_retry: Callable[[Exception], bool] | None = None,
) -> T:
    """Retry an operation with exponential backoff.

    The wait before retry ``n`` (1-indexed) is
    ``delay * factor ** (n - 1)``.

    Args:
        operation: The zero-argument callable to invoke.
        retries: Maximum number of retries after the first attempt
            (default: 3).
        delay: Wait before the first retry, in seconds (default: 0.5).
        factor: Multiplier applied to the wait after each retry
            (default: 2.0).
        on_retry: Optional hook ``(error, attempt_number)`` called after
            each failed attempt that will be retried.
        should_retry: Optional predicate ``(error) -> bool``. Errors it
            rejects are raised immediately.

    Returns:
        The value of the first successful attempt.

    Raises:
        Exception: The error of the last attempt if all retries fail, or
            the first error rejected by ``should_retry``.

    Example:
        ```pycon
        >>> from aretry import retry
        >>> attempts = iter([ValueError("flaky"), "ok"])
        >>> def operation():
        ...     item = next(attempts)
        ...     if isinstance(item, Exception):
        ...         raise item
        ...     return item
        ...
        >>> retry(operation, delay=0.0)
        'ok'

        ```
    """
    return execute(
        operation,
        policies.backoff_policy(
            retries=retries,
            delay=delay,
            factor=factor,
            on_retry=on_retry,
            should_retry=should_retry,
        ),
    )


def retry_with_jitter(
    operation: Callable[[], T],
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    jitter: float = DEFAULT_JITTER,
    on_retry: Callable[[Exception, int], None] | None = None,
    should_retry: Callable[[Exception], bool] | None = None,
) -> T:
    """Retry an operation with exponential backoff and random jitter.

    Each wait is the exponential delay plus a uniform random offset in
    ``[-jitter, +jitter]``, floored at 0.

    Args:
        operation: The zero-argument callable to invoke.
        retries: Maximum number of retries after the first attempt.
        delay: Wait before the first retry, in seconds.
        factor: Multiplier applied to the wait after each retry.
        jitter: Half-width of the jitter window, in seconds
            (default: 0.1).
        on_retry: Optional hook ``(error, attempt_number)``.
        should_retry: Optional eligibility predicate ``(error) -> bool``.

    Returns:
        The value of the first successful attempt.
    """
    return execute(
        operation,
        policies.jitter_policy(
            retries=retries,
            delay=delay,
            factor=factor,
            jitter=jitter,
            on_retry=on_retry,
            should_retry=should_retry,
        ),
    )


def retry_with_timeout(
    operation: Callable[[], T],
    *,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    timeout: float = DEFAULT_TIMEOUT,
    on_retry: Callable[[Exception, int], None] | None = None,
    should_retry: Callable[[Exception], bool] | None = None,
) -> T:
    """Retry an operation with exponential backoff until a total time
    budget is used up.

    A retry is only scheduled if the elapsed time plus its wait stays
    within ``timeout``; otherwise the last error is raised.

    Args:
        operation: The zero-argument callable to invoke.
        delay: Wait before the first retry, in seconds.
        factor: Multiplier applied to the wait after each retry.
        timeout: Total time budget in seconds (default: 2.0).
        on_retry: Optional hook ``(error, attempt_number)``.
        should_retry: Optional eligibility predicate ``(error) -> bool``.

    Returns:
        The value of the first successful attempt.
    """
    return execute(
        operation,
        policies.timeout_policy(
            delay=delay,
            factor=factor,
            timeout=timeout,
            on_retry=on_retry,
            should_retry=should_retry,
        ),
    )


def retry_with_schedule(
    operation: Callable[[], T],
    schedule: Sequence[float] = (),
    *,
    on_retry: Callable[[Exception, int], None] | None = None,
    should_retry: Callable[[Exception], bool] | None = None,
) -> T:
    """Retry an operation following a fixed schedule of waits.

    Args:
        operation: The zero-argument callable to invoke.
        schedule: The wait in seconds before each retry. Its length is
            the maximum number of retries.
        on_retry: Optional hook ``(error, attempt_number)``.
        should_retry: Optional eligibility predicate ``(error) -> bool``.

    Returns:
        The value of the first successful attempt.
    """
    return execute(
        operation,
        policies.schedule_policy(schedule, on_retry=on_retry, should_retry=should_retry),
    )


def retry_with_signal(
    operation: Callable[[], T],
    signal: threading.Event,
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    on_retry: Callable[[Exception, int], None] | None = None,
    should_retry: Callable[[Exception], bool] | None = None,
) -> T:
    """Retry an operation with exponential backoff until an event is set.

    Setting the event interrupts a pending wait immediately and prevents
    any further invocation.

    Args:
        operation: The zero-argument callable to invoke.
        signal: The cancellation event.
        retries: Maximum number of retries after the first attempt.
        delay: Wait before the first retry, in seconds.
        factor: Multiplier applied to the wait after each retry.
        on_retry: Optional hook ``(error, attempt_number)``.
        should_retry: Optional eligibility predicate ``(error) -> bool``.

    Returns:
        The value of the first successful attempt.

    Raises:
        RetryCancelledError: If the event was set.
    """
    return execute(
        operation,
        policies.signal_policy(
            signal,
            retries=retries,
            delay=delay,
            factor=factor,
            on_retry=on_retry,
            should_retry=should_retry,
        ),
    )


def retry_with_cancellation_token(
    operation: Callable[[], T],
    token: SupportsCancelled,
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    on_retry: Callable[[Exception, int], None] | None = None,
    should_retry: Callable[[Exception], bool] | None = None,
) -> T:
    """Retry an operation with exponential backoff until
    ``token.cancelled`` becomes true.

    The flag is polled every 0.1s during waits.

    Args:
        operation: The zero-argument callable to invoke.
        token: An object with a boolean ``cancelled`` attribute, for
            example a ``CancellationToken``.
        retries: Maximum number of retries after the first attempt.
        delay: Wait before the first retry, in seconds.
        factor: Multiplier applied to the wait after each retry.
        on_retry: Optional hook ``(error, attempt_number)``.
        should_retry: Optional eligibility predicate ``(error) -> bool``.

    Returns:
        The value of the first successful attempt.

    Raises:
        RetryCancelledError: If the token was cancelled.
    """
    return execute(
        operation,
        policies.token_policy(
            token,
            retries=retries,
            delay=delay,
            factor=factor,
            on_retry=on_retry,
            should_retry=should_retry,
        ),
    )


def retry_with_stop_predicate(
    operation: Callable[[], T],
    should_stop: Callable[[], bool],
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    on_retry: Callable[[Exception, int], None] | None = None,
    should_retry: Callable[[Exception], bool] | None = None,
) -> T:
    """Retry an operation with exponential backoff until ``should_stop()``
    returns true.

    The predicate is checked before each attempt, after each failure,
    and every 0.1s during waits.

    Args:
        operation: The zero-argument callable to invoke.
        should_stop: A function returning ``True`` to stop retrying.
        retries: Maximum number of retries after the first attempt.
        delay: Wait before the first retry, in seconds.
        factor: Multiplier applied to the wait after each retry.
        on_retry: Optional hook ``(error, attempt_number)``.
        should_retry: Optional eligibility predicate ``(error) -> bool``.

    Returns:
        The value of the first successful attempt.

    Raises:
        RetryCancelledError: If the predicate stopped the loop.
    """
    return execute(
        operation,
        policies.stop_predicate_policy(
            should_stop,
            retries=retries,
            delay=delay,
            factor=factor,
            on_retry=on_retry,
            should_retry=should_retry,
        ),
    )


def retry_with_max_total_attempts(
    operation: Callable[[], T],
    max_attempts: int = 3,
    *,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    on_retry: Callable[[Exception, int], None] | None = None,
    should_retry: Callable[[Exception], bool] | None = None,
) -> T:
    """Retry an operation with exponential backoff, invoking it at most
    ``max_attempts`` times in total.

    Args:
        operation: The zero-argument callable to invoke.
        max_attempts: Maximum number of invocations, first one included
            (default: 3).
        delay: Wait before the first retry, in seconds.
        factor: Multiplier applied to the wait after each retry.
        on_retry: Optional hook ``(error, attempt_number)``.
        should_retry: Optional eligibility predicate ``(error) -> bool``.

    Returns:
        The value of the first successful attempt.
    """
    return execute(
        operation,
        policies.max_attempts_policy(
            max_attempts,
            delay=delay,
            factor=factor,
            on_retry=on_retry,
            should_retry=should_retry,
        ),
    )


def retry_with_predicate_delay(
    operation: Callable[[], T],
    get_delay: Callable[[Exception | None, int], float],
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    on_retry: Callable[[Exception, int], None] | None = None,
    should_retry: Callable[[Exception], bool] | None = None,
) -> T:
    """Retry an operation with waits computed by ``get_delay``.

    Args:
        operation: The zero-argument callable to invoke.
        get_delay: A function ``(error, attempt_number) -> seconds``.
        retries: Maximum number of retries after the first attempt.
        on_retry: Optional hook ``(error, attempt_number)``.
        should_retry: Optional eligibility predicate ``(error) -> bool``.

    Returns:
        The value of the first successful attempt.
    """
    return execute(
        operation,
        policies.predicate_delay_policy(
            get_delay, retries=retries, on_retry=on_retry, should_retry=should_retry
        ),
    )


def retry_with_randomized_backoff(
    operation: Callable[[], T],
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    delay: float = DEFAULT_DELAY,
    max_delay: float = DEFAULT_MAX_DELAY,
    on_retry: Callable[[Exception, int], None] | None = None,
    should_retry: Callable[[Exception], bool] | None = None,
) -> T:
    """Retry an operation with decorrelated jitter backoff.

    Each wait is drawn uniformly from ``[delay, previous_wait * 3]`` and
    capped at ``max_delay``.

    Args:
        operation: The zero-argument callable to invoke.
        retries: Maximum number of retries after the first attempt.
        delay: Lower bound of every wait, in seconds.
        max_delay: Upper bound of every wait, in seconds
            (default: 30.0).
        on_retry: Optional hook ``(error, attempt_number)``.
        should_retry: Optional eligibility predicate ``(error) -> bool``.

    Returns:
        The value of the first successful attempt.
    """
    return execute(
        operation,
        policies.randomized_backoff_policy(
            retries=retries,
            delay=delay,
            max_delay=max_delay,
            on_retry=on_retry,
            should_retry=should_retry,
        ),
    )


def retry_until_condition(
    operation: Callable[[], T],
    condition: Callable[[T], bool],
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    on_retry: Callable[[Exception, int], None] | None = None,
) -> T:
    """Retry an operation until its returned value satisfies
    ``condition``.

    Errors raised by the operation are retried as well.

    Args:
        operation: The zero-argument callable to invoke.
        condition: A predicate ``(value) -> bool`` that must hold to stop.
        retries: Maximum number of retries after the first attempt.
        delay: Wait before the first retry, in seconds.
        factor: Multiplier applied to the wait after each retry.
        on_retry: Optional hook ``(error, attempt_number)``. Rejected
            values are reported as ``ConditionNotMetError``.

    Returns:
        The first value satisfying the condition.

    Raises:
        ConditionNotMetError: If the last value did not satisfy the
            condition.

    Example:
        ```pycon
        >>> import itertools
        >>> from aretry import retry_until_condition
        >>> counter = itertools.count(1)
        >>> retry_until_condition(lambda: next(counter), lambda value: value == 3, delay=0.0)
        3

        ```
    """
    return execute(
        operation,
        policies.condition_policy(
            condition, retries=retries, delay=delay, factor=factor, on_retry=on_retry
        ),
    )


def retry_with_custom_execution(
    operation: Callable[[], Any],
    execute_fn: Callable[[Callable[[], Any]], ExecutionResult[T]],
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    on_retry: Callable[[Exception, int], None] | None = None,
) -> T:
    """Retry an operation judged by a custom execution function instead
    of by exceptions.

    Args:
        operation: The zero-argument callable to invoke.
        execute_fn: A function ``(operation) -> ExecutionResult`` that
            invokes the operation and reports success or failure.
        retries: Maximum number of retries after the first attempt.
        delay: Wait before the first retry, in seconds.
        factor: Multiplier applied to the wait after each retry.
        on_retry: Optional hook ``(error, attempt_number)``.

    Returns:
        The value of the first successful result.

    Raises:
        Exception: The error of the last failed result, or an
            ``OperationFailedError`` if it carried no exception.
    """
    return execute(
        operation,
        policies.custom_execution_policy(
            execute_fn, retries=retries, delay=delay, factor=factor, on_retry=on_retry
        ),
    )
