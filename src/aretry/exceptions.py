r"""Exceptions raised by the retry engine.

Errors produced by the wrapped operation are never wrapped: they are
re-raised as-is when retries are exhausted or the error is not eligible
for retry. The classes below cover the failures that the engine itself
synthesizes.
"""

from __future__ import annotations

__all__ = [
    "ConditionNotMetError",
    "InvariantViolationError",
    "OperationFailedError",
    "RetryCancelledError",
    "RetryError",
]

from typing import Any


class RetryError(RuntimeError):
    """Base class of all the errors synthesized by ``aretry``.

    Example:
        ```pycon
        >>> from aretry.exceptions import RetryError
        >>> raise RetryError("something went wrong")
        Traceback (most recent call last):
            ...
        aretry.exceptions.RetryError: something went wrong

        ```
    """


class ConditionNotMetError(RetryError):
    """Raised when a value never satisfied the success condition.

    Args:
        value: The last value returned by the operation.
        message: A descriptive error message.

    Example:
        ```pycon
        >>> from aretry.exceptions import ConditionNotMetError
        >>> err = ConditionNotMetError(42)
        >>> err.value
        42
        >>> str(err)
        'Condition not met'

        ```
    """

    def __init__(self, value: Any, message: str = "Condition not met") -> None:
        super().__init__(message)
        self.value = value


class RetryCancelledError(RetryError):
    """Raised when a cancellation source stops the retry loop.

    Args:
        reason: Human readable cancellation reason, reported as the
            error message.

    Example:
        ```pycon
        >>> from aretry.exceptions import RetryCancelledError
        >>> err = RetryCancelledError("Retry aborted")
        >>> err.reason
        'Retry aborted'

        ```
    """

    def __init__(self, reason: str = "Retry cancelled") -> None:
        super().__init__(reason)
        self.reason = reason


class OperationFailedError(RetryError):
    """Raised when a custom evaluator reports a failure without an
    exception.

    Args:
        message: A descriptive error message.
        error: The raw error payload reported by the evaluator, if any.
    """

    def __init__(self, message: str = "Operation failed", error: Any = None) -> None:
        super().__init__(message)
        self.error = error


class InvariantViolationError(RetryError):
    """Raised if the retry loop exits without a terminal outcome.

    This signals a bug in the engine, not a caller error.
    """
