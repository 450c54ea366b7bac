r"""Asynchronous retry entry points.

Async twins of the functions in ``aretry.functions``. The operation may
be a coroutine function or any callable returning an awaitable (plain
values are accepted too). Waits use ``asyncio.sleep`` so other tasks
keep running while a call is backing off.

Example:
    ```pycon
    >>> import asyncio
    >>> from aretry import retry_async
    >>> async def fetch():
    ...     return "data"
    ...
    >>> asyncio.run(retry_async(fetch))
    'data'

    ```
"""

from __future__ import annotations

__all__ = [
    "execute_async",
    "retry_async",
    "retry_until_condition_async",
    "retry_with_cancellation_token_async",
    "retry_with_custom_execution_async",
    "retry_with_jitter_async",
    "retry_with_max_total_attempts_async",
    "retry_with_predicate_delay_async",
    "retry_with_randomized_backoff_async",
    "retry_with_schedule_async",
    "retry_with_signal_async",
    "retry_with_stop_predicate_async",
    "retry_with_timeout_async",
]

from typing import TYPE_CHECKING, Any

from aretry import policies
from aretry.retry.config import (
    DEFAULT_DELAY,
    DEFAULT_FACTOR,
    DEFAULT_JITTER,
    DEFAULT_MAX_DELAY,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
)
from aretry.retry.executor_async import AsyncRetryExecutor

if TYPE_CHECKING:
    import asyncio
    import threading
    from collections.abc import Awaitable, Callable, Sequence

    from aretry.cancellation import SupportsCancelled
    from aretry.evaluator import ExecutionResult
    from aretry.retry.config import RetryPolicy


async def execute_async(operation: Callable[[], Any], policy: RetryPolicy) -> Any:
    """Run an async operation with an arbitrary retry policy.

    Args:
        operation: The zero-argument callable to invoke.
        policy: The retry policy.

    Returns:
        The value of the first successful attempt.
    """
    return await AsyncRetryExecutor(policy).execute(operation)


async def retry_async(
    operation: Callable[[], Any],
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    on_retry: Callable[[Exception, int], None] | None = None,
    should_retry: Callable[[Exception], bool] | None = None,
) -> Any:
    """Retry an async operation with exponential backoff.

    See ``aretry.functions.retry`` for the parameters.

    Returns:
        The value of the first successful attempt.

    Raises:
        Exception: The error of the last attempt if all retries fail, or
            the first error rejected by ``should_retry``.
    """
    return await execute_async(
        operation,
        policies.backoff_policy(
            retries=retries,
            delay=delay,
            factor=factor,
            on_retry=on_retry,
            should_retry=should_retry,
        ),
    )


async def retry_with_jitter_async(
    operation: Callable[[], Any],
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    jitter: float = DEFAULT_JITTER,
    on_retry: Callable[[Exception, int], None] | None = None,
    should_retry: Callable[[Exception], bool] | None = None,
) -> Any:
    """Retry an async operation with exponential backoff and random
    jitter.

    See ``aretry.functions.retry_with_jitter`` for the parameters.
    """
    return await execute_async(
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


async def retry_with_timeout_async(
    operation: Callable[[], Any],
    *,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    timeout: float = DEFAULT_TIMEOUT,
    on_retry: Callable[[Exception, int], None] | None = None,
    should_retry: Callable[[Exception], bool] | None = None,
) -> Any:
    """Retry an async operation until a total time budget is used up.

    See ``aretry.functions.retry_with_timeout`` for the parameters.
    """
    return await execute_async(
        operation,
        policies.timeout_policy(
            delay=delay,
            factor=factor,
            timeout=timeout,
            on_retry=on_retry,
            should_retry=should_retry,
        ),
    )


async def retry_with_schedule_async(
    operation: Callable[[], Any],
    schedule: Sequence[float] = (),
    *,
    on_retry: Callable[[Exception, int], None] | None = None,
    should_retry: Callable[[Exception], bool] | None = None,
) -> Any:
    """Retry an async operation following a fixed schedule of waits.

    See ``aretry.functions.retry_with_schedule`` for the parameters.
    """
    return await execute_async(
        operation,
        policies.schedule_policy(schedule, on_retry=on_retry, should_retry=should_retry),
    )


async def retry_with_signal_async(
    operation: Callable[[], Any],
    signal: asyncio.Event | threading.Event,
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    on_retry: Callable[[Exception, int], None] | None = None,
    should_retry: Callable[[Exception], bool] | None = None,
) -> Any:
    """Retry an async operation until an event is set.

    With an ``asyncio.Event`` a pending wait is woken up as soon as the
    event is set; a ``threading.Event`` is polled every 0.1s.

    Raises:
        RetryCancelledError: If the event was set.
    """
    return await execute_async(
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


async def retry_with_cancellation_token_async(
    operation: Callable[[], Any],
    token: SupportsCancelled,
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    on_retry: Callable[[Exception, int], None] | None = None,
    should_retry: Callable[[Exception], bool] | None = None,
) -> Any:
    """Retry an async operation until ``token.cancelled`` becomes true.

    Raises:
        RetryCancelledError: If the token was cancelled.
    """
    return await execute_async(
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


async def retry_with_stop_predicate_async(
    operation: Callable[[], Any],
    should_stop: Callable[[], bool],
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    on_retry: Callable[[Exception, int], None] | None = None,
    should_retry: Callable[[Exception], bool] | None = None,
) -> Any:
    """Retry an async operation until ``should_stop()`` returns true.

    Raises:
        RetryCancelledError: If the predicate stopped the loop.
    """
    return await execute_async(
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


async def retry_with_max_total_attempts_async(
    operation: Callable[[], Any],
    max_attempts: int = 3,
    *,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    on_retry: Callable[[Exception, int], None] | None = None,
    should_retry: Callable[[Exception], bool] | None = None,
) -> Any:
    """Retry an async operation, invoking it at most ``max_attempts``
    times in total."""
    return await execute_async(
        operation,
        policies.max_attempts_policy(
            max_attempts,
            delay=delay,
            factor=factor,
            on_retry=on_retry,
            should_retry=should_retry,
        ),
    )


async def retry_with_predicate_delay_async(
    operation: Callable[[], Any],
    get_delay: Callable[[Exception | None, int], float],
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    on_retry: Callable[[Exception, int], None] | None = None,
    should_retry: Callable[[Exception], bool] | None = None,
) -> Any:
    """Retry an async operation with waits computed by ``get_delay``."""
    return await execute_async(
        operation,
        policies.predicate_delay_policy(
            get_delay, retries=retries, on_retry=on_retry, should_retry=should_retry
        ),
    )


async def retry_with_randomized_backoff_async(
    operation: Callable[[], Any],
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    delay: float = DEFAULT_DELAY,
    max_delay: float = DEFAULT_MAX_DELAY,
    on_retry: Callable[[Exception, int], None] | None = None,
    should_retry: Callable[[Exception], bool] | None = None,
) -> Any:
    """Retry an async operation with decorrelated jitter backoff."""
    return await execute_async(
        operation,
        policies.randomized_backoff_policy(
            retries=retries,
            delay=delay,
            max_delay=max_delay,
            on_retry=on_retry,
            should_retry=should_retry,
        ),
    )


async def retry_until_condition_async(
    operation: Callable[[], Any],
    condition: Callable[[Any], bool],
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    on_retry: Callable[[Exception, int], None] | None = None,
) -> Any:
    """Retry an async operation until its awaited value satisfies
    ``condition``.

    Raises:
        ConditionNotMetError: If the last value did not satisfy the
            condition.
    """
    return await execute_async(
        operation,
        policies.condition_policy(
            condition, retries=retries, delay=delay, factor=factor, on_retry=on_retry
        ),
    )


async def retry_with_custom_execution_async(
    operation: Callable[[], Any],
    execute_fn: Callable[
        [Callable[[], Any]], ExecutionResult[Any] | Awaitable[ExecutionResult[Any]]
    ],
    *,
    retries: int = DEFAULT_MAX_RETRIES,
    delay: float = DEFAULT_DELAY,
    factor: float = DEFAULT_FACTOR,
    on_retry: Callable[[Exception, int], None] | None = None,
) -> Any:
    """Retry an async operation judged by a custom execution function.

    ``execute_fn`` may be a coroutine function; it is responsible for
    awaiting the operation itself.
    """
    return await execute_async(
        operation,
        policies.custom_execution_policy(
            execute_fn, retries=retries, delay=delay, factor=factor, on_retry=on_retry
        ),
    )
