r"""aretry - Retry orchestration for fallible operations.

This package runs a zero-argument operation until it succeeds, the retry
budget is exhausted, or the caller cancels it. All the entry points,
sync and async, are thin presets over a single retry engine configured
by a ``RetryPolicy``.

Key Features:
    - Exponential, jittered, decorrelated jitter, scheduled, and
      caller-computed backoff
    - Attempt ceilings and total time budgets
    - Cancellation through events, shared flags, or stop predicates,
      observed during waits
    - Success conditions on the returned value and custom execution
      functions
    - Lifecycle hooks (on_retry, on_success, on_failure) and structured
      logging
    - Full async support
    - HTTP helpers for ``httpx`` (status codes, Retry-After)

Example:
    ```pycon
    >>> from aretry import retry, retry_with_schedule
    >>> retry(lambda: "data")
    'data'
    >>> retry_with_schedule(lambda: "data", [0.1, 0.5, 1.0])
    'data'

    ```
"""

from __future__ import annotations

__all__ = [
    "CancellationToken",
    "ConditionNotMetError",
    "ExecutionResult",
    "InvariantViolationError",
    "OperationFailedError",
    "RetryCancelledError",
    "RetryError",
    "RetryPolicy",
    "__version__",
    "execute",
    "execute_async",
    "retry",
    "retry_async",
    "retry_until_condition",
    "retry_until_condition_async",
    "retry_with_cancellation_token",
    "retry_with_cancellation_token_async",
    "retry_with_custom_execution",
    "retry_with_custom_execution_async",
    "retry_with_jitter",
    "retry_with_jitter_async",
    "retry_with_max_total_attempts",
    "retry_with_max_total_attempts_async",
    "retry_with_predicate_delay",
    "retry_with_predicate_delay_async",
    "retry_with_randomized_backoff",
    "retry_with_randomized_backoff_async",
    "retry_with_schedule",
    "retry_with_schedule_async",
    "retry_with_signal",
    "retry_with_signal_async",
    "retry_with_stop_predicate",
    "retry_with_stop_predicate_async",
    "retry_with_timeout",
    "retry_with_timeout_async",
]

from importlib.metadata import PackageNotFoundError, version

from aretry.cancellation import CancellationToken
from aretry.evaluator import ExecutionResult
from aretry.exceptions import (
    ConditionNotMetError,
    InvariantViolationError,
    OperationFailedError,
    RetryCancelledError,
    RetryError,
)
from aretry.functions import (
    execute,
    retry,
    retry_until_condition,
    retry_with_cancellation_token,
    retry_with_custom_execution,
    retry_with_jitter,
    retry_with_max_total_attempts,
    retry_with_predicate_delay,
    retry_with_randomized_backoff,
    retry_with_schedule,
    retry_with_signal,
    retry_with_stop_predicate,
    retry_with_timeout,
)
from aretry.functions_async import (
    execute_async,
    retry_async,
    retry_until_condition_async,
    retry_with_cancellation_token_async,
    retry_with_custom_execution_async,
    retry_with_jitter_async,
    retry_with_max_total_attempts_async,
    retry_with_predicate_delay_async,
    retry_with_randomized_backoff_async,
    retry_with_schedule_async,
    retry_with_signal_async,
    retry_with_stop_predicate_async,
    retry_with_timeout_async,
)
from aretry.retry.config import RetryPolicy

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
