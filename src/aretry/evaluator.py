r"""Outcome evaluators turning one invocation into a success or a
failure.

The default evaluator follows the usual Python convention: an exception
is a failure, a normal return is a success. A custom evaluator lets the
caller decide from the returned value instead, for example from an HTTP
status code.
"""

from __future__ import annotations

__all__ = [
    "BaseEvaluator",
    "CustomEvaluator",
    "ExceptionEvaluator",
    "ExecutionResult",
    "Failure",
    "Outcome",
    "Success",
]

import inspect
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar, Union

from aretry.exceptions import OperationFailedError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Success(Generic[T]):
    """Outcome of a successful attempt.

    Attributes:
        value: The value produced by the operation.
    """

    value: T


@dataclass(frozen=True)
class Failure:
    """Outcome of a failed attempt.

    Attributes:
        error: The error carried forward by the retry loop.
    """

    error: Exception


Outcome = Union[Success[Any], Failure]


@dataclass
class ExecutionResult(Generic[T]):
    """Structured result returned by a custom execution function.

    Attributes:
        success: Whether the invocation succeeded.
        value: The value to return on success.
        error: The error describing the failure, if any.

    Example:
        ```pycon
        >>> from aretry.evaluator import ExecutionResult
        >>> ExecutionResult(success=True, value="ok").to_outcome()
        Success(value='ok')
        >>> ExecutionResult(success=False).to_outcome()
        Failure(error=OperationFailedError('Operation failed'))

        ```
    """

    success: bool
    value: T | None = None
    error: Any = None

    def to_outcome(self) -> Outcome:
        """Convert the result to a ``Success`` or a ``Failure``.

        A failure without an exception is reported as an
        ``OperationFailedError`` keeping the raw error payload.

        Returns:
            The outcome of the attempt.
        """
        if self.success:
            return Success(self.value)
        if isinstance(self.error, Exception):
            return Failure(self.error)
        if self.error is None:
            return Failure(OperationFailedError())
        return Failure(OperationFailedError(f"Operation failed: {self.error!r}", error=self.error))


class BaseEvaluator(ABC):
    """Abstract base class for outcome evaluators."""

    @abstractmethod
    def evaluate(self, operation: Callable[[], Any]) -> Outcome:
        """Invoke the operation once and judge the result.

        Args:
            operation: The zero-argument callable to invoke.

        Returns:
            The outcome of the attempt.
        """

    @abstractmethod
    async def evaluate_async(self, operation: Callable[[], Any]) -> Outcome:
        """Invoke the operation once, awaiting its result if needed, and
        judge it.

        Args:
            operation: The zero-argument callable to invoke. It may
                return a value or an awaitable.

        Returns:
            The outcome of the attempt.
        """


class ExceptionEvaluator(BaseEvaluator):
    """Default evaluator: an ``Exception`` is a failure, a normal return
    is a success.

    ``BaseException`` subclasses that are not ``Exception``
    (``KeyboardInterrupt``, ``asyncio.CancelledError``, ...) propagate.

    Example:
        ```pycon
        >>> from aretry.evaluator import ExceptionEvaluator
        >>> evaluator = ExceptionEvaluator()
        >>> evaluator.evaluate(lambda: 42)
        Success(value=42)
        >>> evaluator.evaluate(lambda: 1 / 0)
        Failure(error=ZeroDivisionError('division by zero'))

        ```
    """

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"

    def evaluate(self, operation: Callable[[], Any]) -> Outcome:
        try:
            value = operation()
        except Exception as exc:
            logger.debug(f"Operation raised {type(exc).__name__}: {exc}")
            return Failure(exc)
        return Success(value)

    async def evaluate_async(self, operation: Callable[[], Any]) -> Outcome:
        try:
            value = operation()
            if inspect.isawaitable(value):
                value = await value
        except Exception as exc:
            logger.debug(f"Operation raised {type(exc).__name__}: {exc}")
            return Failure(exc)
        return Success(value)


class CustomEvaluator(BaseEvaluator):
    """Evaluator delegating to a caller-supplied execution function.

    The execution function invokes the operation itself and returns an
    ``ExecutionResult``. Exceptions raised by the execution function are
    not caught.

    Args:
        execute: A function ``(operation) -> ExecutionResult``. With the
            async executor it may also return an awaitable resolving to
            an ``ExecutionResult``.

    Example:
        ```pycon
        >>> from aretry.evaluator import CustomEvaluator, ExecutionResult
        >>> def execute(operation):
        ...     value = operation()
        ...     return ExecutionResult(success=value == "valid", value=value)
        ...
        >>> evaluator = CustomEvaluator(execute)
        >>> evaluator.evaluate(lambda: "valid")
        Success(value='valid')

        ```
    """

    def __init__(
        self,
        execute: Callable[
            [Callable[[], Any]], ExecutionResult[Any] | Awaitable[ExecutionResult[Any]]
        ],
    ) -> None:
        self.execute = execute

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(execute={self.execute!r})"

    def evaluate(self, operation: Callable[[], Any]) -> Outcome:
        result = self.execute(operation)
        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            msg = "the execution function returned an awaitable, use the async executor"
            raise TypeError(msg)
        return result.to_outcome()

    async def evaluate_async(self, operation: Callable[[], Any]) -> Outcome:
        result = self.execute(operation)
        if inspect.isawaitable(result):
            result = await result
        return result.to_outcome()
