r"""Retry policy dataclass and defaults.

A ``RetryPolicy`` bundles everything that governs one retry call: the
attempt ceiling, the delay strategy, the optional time budget, the
cancellation source, the outcome evaluator, and the lifecycle hooks.
Policies are immutable, so a single policy can safely drive any number
of sequential or concurrent retry calls.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_DELAY",
    "DEFAULT_FACTOR",
    "DEFAULT_JITTER",
    "DEFAULT_MAX_DELAY",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_TIMEOUT",
    "RetryPolicy",
    "always_retry",
    "ignore",
]

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from aretry.backoff import BaseBackoffStrategy, ExponentialBackoff
from aretry.cancellation import BaseCancellationSource, NeverCancel
from aretry.evaluator import BaseEvaluator, ExceptionEvaluator
from aretry.utils.validation import validate_retry_params

if TYPE_CHECKING:
    from collections.abc import Callable

# Default maximum number of retries
# Total attempts = max_retries + 1 (initial attempt)
DEFAULT_MAX_RETRIES = 3

# Default wait before the first retry, in seconds
DEFAULT_DELAY = 0.5

# Default backoff multiplier
# With the defaults: 1st retry waits 0.5s, 2nd waits 1.0s, 3rd waits 2.0s
DEFAULT_FACTOR = 2.0

# Default half-width of the jitter window, in seconds
DEFAULT_JITTER = 0.1

# Default cap of the decorrelated jitter backoff, in seconds
DEFAULT_MAX_DELAY = 30.0

# Default total time budget of the timeout preset, in seconds
DEFAULT_TIMEOUT = 2.0


def always_retry(error: Exception) -> bool:  # noqa: ARG001
    """Default eligibility predicate: every error may be retried."""
    return True


def ignore(*args: Any) -> None:  # noqa: ARG001
    """Default lifecycle hook: do nothing."""


@dataclass(frozen=True)
class RetryPolicy:
    """Configuration of one retry call.

    Args:
        max_retries: Maximum number of retries after the first attempt.
            Must be >= 0. ``None`` means unbounded, which requires a
            ``timeout``.
        backoff: The strategy computing the wait before each retry.
            Defaults to ``ExponentialBackoff(base_delay=0.5, factor=2.0)``.
        timeout: Optional total time budget in seconds. A retry is not
            scheduled when the elapsed time plus its wait would exceed it.
        cancellation: The cancellation source polled before every
            attempt and during every wait. Defaults to ``NeverCancel()``.
        evaluator: The evaluator judging each invocation. Defaults to
            ``ExceptionEvaluator()``.
        until: Optional success condition over the returned value. A
            value rejected by the condition is handled as a failure
            carrying a ``ConditionNotMetError``.
        on_retry: Hook ``(error, attempt_number)`` called once per failed
            attempt that will be retried, before the wait. The attempt
            number is 1-indexed.
        should_retry: Eligibility predicate ``(error) -> bool``. An error
            it rejects is raised immediately.
        on_success: Hook ``(value, attempts)`` called when the loop
            returns a value.
        on_failure: Hook ``(error, attempts)`` called right before the
            terminal error is raised.

    Example:
        ```pycon
        >>> from aretry.retry import RetryPolicy
        >>> policy = RetryPolicy()
        >>> policy.max_retries
        3
        >>> policy = policy.merge(max_retries=5)
        >>> policy.retry_limit
        5

        ```
    """

    max_retries: int | None = DEFAULT_MAX_RETRIES
    backoff: BaseBackoffStrategy = field(default_factory=ExponentialBackoff)
    timeout: float | None = None
    cancellation: BaseCancellationSource = field(default_factory=NeverCancel)
    evaluator: BaseEvaluator = field(default_factory=ExceptionEvaluator)
    until: Callable[[Any], bool] | None = None
    on_retry: Callable[[Exception, int], None] = ignore
    should_retry: Callable[[Exception], bool] = always_retry
    on_success: Callable[[Any, int], None] = ignore
    on_failure: Callable[[Exception, int], None] = ignore

    def __post_init__(self) -> None:
        validate_retry_params(max_retries=self.max_retries, timeout=self.timeout)

    @property
    def retry_limit(self) -> int | None:
        """The effective retry ceiling.

        A bounded backoff strategy (for example a fixed schedule) caps
        ``max_retries``. ``None`` means the loop is only bounded by the
        timeout.
        """
        limits = [limit for limit in (self.max_retries, self.backoff.limit) if limit is not None]
        if not limits:
            return None
        return min(limits)

    def merge(self, **overrides: Any) -> RetryPolicy:
        """Create a new policy with the specified fields overridden.

        Only non-None override values are applied.

        Args:
            **overrides: The fields to override.

        Returns:
            A new validated ``RetryPolicy``.

        Example:
            ```pycon
            >>> from aretry.retry import RetryPolicy
            >>> policy = RetryPolicy(max_retries=3)
            >>> policy.merge(max_retries=5, timeout=None).max_retries
            5
            >>> policy.max_retries  # Original unchanged
            3

            ```
        """
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
