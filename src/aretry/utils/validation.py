r"""Parameter validation utilities for retry policies.

This module provides validation functions for retry parameters to
ensure they meet the required constraints before a retry loop starts.
"""

from __future__ import annotations

__all__ = ["validate_max_attempts", "validate_retry_params"]


def validate_retry_params(
    max_retries: int | None,
    timeout: float | None = None,
) -> None:
    """Validate retry parameters.

    Args:
        max_retries: Maximum number of retry attempts after the first
            one. Must be >= 0. ``None`` means unbounded, which is only
            allowed together with a timeout.
        timeout: Maximum total time budget in seconds for all attempts.
            Must be >= 0 if provided. A budget of 0 allows a single
            attempt.

    Raises:
        ValueError: If max_retries is negative, timeout is negative,
            or neither bounds the retry loop.

    Example:
        ```pycon
        >>> from aretry.utils import validate_retry_params
        >>> validate_retry_params(max_retries=3)
        >>> validate_retry_params(max_retries=None, timeout=2.0)
        >>> validate_retry_params(max_retries=-1)
        Traceback (most recent call last):
        ...
        ValueError: max_retries must be >= 0, got -1

        ```
    """
    if max_retries is not None and max_retries < 0:
        msg = f"max_retries must be >= 0, got {max_retries}"
        raise ValueError(msg)
    if timeout is not None and timeout < 0:
        msg = f"timeout must be >= 0, got {timeout}"
        raise ValueError(msg)
    if max_retries is None and timeout is None:
        msg = "max_retries=None requires a timeout to bound the retry loop"
        raise ValueError(msg)


def validate_max_attempts(max_attempts: int) -> None:
    """Validate a total-attempts ceiling.

    Args:
        max_attempts: Maximum number of invocations, including the
            first one. Must be >= 1.

    Raises:
        ValueError: If max_attempts is lower than 1.

    Example:
        ```pycon
        >>> from aretry.utils import validate_max_attempts
        >>> validate_max_attempts(5)
        >>> validate_max_attempts(0)
        Traceback (most recent call last):
        ...
        ValueError: max_attempts must be >= 1, got 0

        ```
    """
    if max_attempts < 1:
        msg = f"max_attempts must be >= 1, got {max_attempts}"
        raise ValueError(msg)
