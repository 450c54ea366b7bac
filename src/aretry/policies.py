r"""Policy builders behind the retry entry points.

Every public ``retry_*`` function, sync or async, is a thin preset: it
builds a ``RetryPolicy`` with one of the functions below and hands it to
the shared executor. The builders are public so that a preset can be
built once and reused, or tweaked with ``RetryPolicy.merge``.

Example:
    ```pycon
    >>> from aretry.policies import schedule_policy
    >>> policy = schedule_policy([0.1, 0.2, 0.4])
    >>> policy.retry_limit
    3

    ```
"""

from __future__ import annotations

__all__ = [
    "backoff_policy",
    "condition_policy",
    "custom_execution_policy",
    "jitter_policy",
    "max_attempts_policy",
    "predicate_delay_policy",
    "randomized_backoff_policy",
    "schedule_policy",
    "signal_policy",
    "stop_predicate_policy",
    "timeout_policy",
    "token_policy",
]

from typing import TYPE_CHECKING, Any

from aretry.backoff import (
    DecorrelatedJitterBackoff,
    ExponentialBackoff,
    JitteredBackoff,
    PredicateBackoff,
    ScheduleBackoff,
)
from aretry.cancellation import EventCancellation, FlagCancellation, PredicateCancellation
from aretry.evaluator import CustomEvaluator
from aretry.retry.config import (
    DEFAULT_DELAY,
    DEFAULT_FACTOR,
    DEFAULT_JITTER,
    DEFAULT_MAX_DELAY,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
    RetryPolicy,
)
from aretry.utils.validation import validate_max_attempts

if TYPE_CHECKING:
    import asyncio
    import threading
    from collections.abc import Awaitable, Callable, Sequence

    from aretry.cancellation import SupportsCancelled
    from aretry.evaluator import ExecutionResult

    OnRetry = Callable[[Exception, int], None]
    ShouldRetry = Callable[[Exception], bool]


def _hooks(on_retry: OnRetry | None, should_retry: ShouldRetry | None = None) -> dict[str, Any]:
    hooks: dict[str, Any] = {}
    if on_retry is not None:
        hooks["on_retry"] = on_retry
    if should_retry is not None:
        hooks["should_retry"] = should_retry
    return hooks


def backoff_policy(
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    on_retry: OnRetry | None = None,
    should_retry: ShouldRetry | None = None,
) -> RetryPolicy:
    """Build an exponential backoff policy.

    Args:
        retries: Maximum number of retries after the first attempt.
        delay: Wait before the first retry, in seconds.
        factor: Multiplier applied to the wait after each retry.
        on_retry: Optional hook ``(error, attempt_number)``.
        should_retry: Optional eligibility predicate ``(error) -> bool``.

    Returns:
        The retry policy.
    """
    return RetryPolicy(
        max_retries=retries,
        backoff=ExponentialBackoff(base_delay=delay, factor=factor),
        **_hooks(on_retry, should_retry),
    )


def jitter_policy(
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    jitter: float = DEFAULT_JITTER,
    on_retry: OnRetry | None = None,
    should_retry: ShouldRetry | None = None,
) -> RetryPolicy:
    """Build an exponential backoff policy with symmetric jitter.

    Args:
        retries: Maximum number of retries after the first attempt.
        delay: Wait before the first retry, in seconds.
        factor: Multiplier applied to the wait after each retry.
        jitter: Half-width of the uniform jitter window, in seconds.
        on_retry: Optional hook ``(error, attempt_number)``.
        should_retry: Optional eligibility predicate ``(error) -> bool``.

    Returns:
        The retry policy.
    """
    return RetryPolicy(
        max_retries=retries,
        backoff=JitteredBackoff(ExponentialBackoff(base_delay=delay, factor=factor), jitter=jitter),
        **_hooks(on_retry, should_retry),
    )


def timeout_policy(
    *,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    timeout: float = DEFAULT_TIMEOUT,
    on_retry: OnRetry | None = None,
    should_retry: ShouldRetry | None = None,
) -> RetryPolicy:
    """Build a policy bounded by a total time budget instead of a retry
    count.

    Args:
        delay: Wait before the first retry, in seconds.
        factor: Multiplier applied to the wait after each retry.
        timeout: Total time budget in seconds. No retry is scheduled if
            its wait would end past the budget.
        on_retry: Optional hook ``(error, attempt_number)``.
        should_retry: Optional eligibility predicate ``(error) -> bool``.

    Returns:
        The retry policy.
    """
    return RetryPolicy(
        max_retries=None,
        timeout=timeout,
        backoff=ExponentialBackoff(base_delay=delay, factor=factor),
        **_hooks(on_retry, should_retry),
    )


def schedule_policy(
    schedule: Sequence[float] = (),
    *,
    on_retry: OnRetry | None = None,
    should_retry: ShouldRetry | None = None,
) -> RetryPolicy:
    """Build a policy waiting ``schedule[i]`` seconds before retry ``i + 1``.

    Args:
        schedule: The waits in seconds. Its length is the retry count.
        on_retry: Optional hook ``(error, attempt_number)``.
        should_retry: Optional eligibility predicate ``(error) -> bool``.

    Returns:
        The retry policy.
    """
    backoff = ScheduleBackoff(schedule)
    return RetryPolicy(
        max_retries=backoff.limit, backoff=backoff, **_hooks(on_retry, should_retry)
    )


def signal_policy(
    signal: threading.Event | asyncio.Event,
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    on_retry: OnRetry | None = None,
    should_retry: ShouldRetry | None = None,
) -> RetryPolicy:
    """Build an exponential backoff policy cancelled by an event.

    Args:
        signal: The cancellation event.
        retries: Maximum number of retries after the first attempt.
        delay: Wait before the first retry, in seconds.
        factor: Multiplier applied to the wait after each retry.
        on_retry: Optional hook ``(error, attempt_number)``.
        should_retry: Optional eligibility predicate ``(error) -> bool``.

    Returns:
        The retry policy.
    """
    return backoff_policy(
        retries=retries, delay=delay, factor=factor, on_retry=on_retry, should_retry=should_retry
    ).merge(cancellation=EventCancellation(signal))


def token_policy(
    token: SupportsCancelled,
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    on_retry: OnRetry | None = None,
    should_retry: ShouldRetry | None = None,
) -> RetryPolicy:
    """Build an exponential backoff policy cancelled by a mutable flag.

    Args:
        token: An object with a boolean ``cancelled`` attribute.
        retries: Maximum number of retries after the first attempt.
        delay: Wait before the first retry, in seconds.
        factor: Multiplier applied to the wait after each retry.
        on_retry: Optional hook ``(error, attempt_number)``.
        should_retry: Optional eligibility predicate ``(error) -> bool``.

    Returns:
        The retry policy.
    """
    return backoff_policy(
        retries=retries, delay=delay, factor=factor, on_retry=on_retry, should_retry=should_retry
    ).merge(cancellation=FlagCancellation(token))


def stop_predicate_policy(
    should_stop: Callable[[], bool],
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    on_retry: OnRetry | None = None,
    should_retry: ShouldRetry | None = None,
) -> RetryPolicy:
    """Build an exponential backoff policy cancelled by a stop predicate.

    Args:
        should_stop: A function returning ``True`` to stop retrying.
        retries: Maximum number of retries after the first attempt.
        delay: Wait before the first retry, in seconds.
        factor: Multiplier applied to the wait after each retry.
        on_retry: Optional hook ``(error, attempt_number)``.
        should_retry: Optional eligibility predicate ``(error) -> bool``.

    Returns:
        The retry policy.
    """
    return backoff_policy(
        retries=retries, delay=delay, factor=factor, on_retry=on_retry, should_retry=should_retry
    ).merge(cancellation=PredicateCancellation(should_stop))


def max_attempts_policy(
    max_attempts: int = 3,
    *,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    on_retry: OnRetry | None = None,
    should_retry: ShouldRetry | None = None,
) -> RetryPolicy:
    """Build an exponential backoff policy bounded by a total number of
    invocations.

    Args:
        max_attempts: Maximum number of invocations, first one included.
            Must be >= 1.
        delay: Wait before the first retry, in seconds.
        factor: Multiplier applied to the wait after each retry.
        on_retry: Optional hook ``(error, attempt_number)``.
        should_retry: Optional eligibility predicate ``(error) -> bool``.

    Returns:
        The retry policy.
    """
    validate_max_attempts(max_attempts)
    return backoff_policy(
        retries=max_attempts - 1,
        delay=delay,
        factor=factor,
        on_retry=on_retry,
        should_retry=should_retry,
    )


def predicate_delay_policy(
    get_delay: Callable[[Exception | None, int], float],
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    on_retry: OnRetry | None = None,
    should_retry: ShouldRetry | None = None,
) -> RetryPolicy:
    """Build a policy whose waits are computed by the caller.

    Args:
        get_delay: A function ``(error, attempt_number) -> seconds``.
        retries: Maximum number of retries after the first attempt.
        on_retry: Optional hook ``(error, attempt_number)``.
        should_retry: Optional eligibility predicate ``(error) -> bool``.

    Returns:
        The retry policy.
    """
    return RetryPolicy(
        max_retries=retries,
        backoff=PredicateBackoff(get_delay),
        **_hooks(on_retry, should_retry),
    )


def randomized_backoff_policy(
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    delay: float = DEFAULT_DELAY,
    max_delay: float = DEFAULT_MAX_DELAY,
    on_retry: OnRetry | None = None,
    should_retry: ShouldRetry | None = None,
) -> RetryPolicy:
    """Build a decorrelated jitter policy.

    Args:
        retries: Maximum number of retries after the first attempt.
        delay: Lower bound of every wait, in seconds.
        max_delay: Upper bound of every wait, in seconds.
        on_retry: Optional hook ``(error, attempt_number)``.
        should_retry: Optional eligibility predicate ``(error) -> bool``.

    Returns:
        The retry policy.
    """
    return RetryPolicy(
        max_retries=retries,
        backoff=DecorrelatedJitterBackoff(base_delay=delay, max_delay=max_delay),
        **_hooks(on_retry, should_retry),
    )


def condition_policy(
    condition: Callable[[Any], bool],
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    on_retry: OnRetry | None = None,
) -> RetryPolicy:
    """Build an exponential backoff policy retrying until a condition
    holds on the returned value.

    Args:
        condition: A predicate ``(value) -> bool`` that must hold to stop.
        retries: Maximum number of retries after the first attempt.
        delay: Wait before the first retry, in seconds.
        factor: Multiplier applied to the wait after each retry.
        on_retry: Optional hook ``(error, attempt_number)``.

    Returns:
        The retry policy.
    """
    return backoff_policy(retries=retries, delay=delay, factor=factor, on_retry=on_retry).merge(
        until=condition
    )


def custom_execution_policy(
    execute: Callable[
        [Callable[[], Any]], ExecutionResult[Any] | Awaitable[ExecutionResult[Any]]
    ],
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    on_retry: OnRetry | None = None,
) -> RetryPolicy:
    """Build an exponential backoff policy judging attempts with a custom
    execution function.

    Args:
        execute: A function ``(operation) -> ExecutionResult``.
        retries: Maximum number of retries after the first attempt.
        delay: Wait before the first retry, in seconds.
        factor: Multiplier applied to the wait after each retry.
        on_retry: Optional hook ``(error, attempt_number)``.

    Returns:
        The retry policy.
    """
    return backoff_policy(retries=retries, delay=delay, factor=factor, on_retry=on_retry).merge(
        evaluator=CustomEvaluator(execute)
    )
