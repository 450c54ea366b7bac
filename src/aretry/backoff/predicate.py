r"""Caller-computed backoff strategy."""

from __future__ import annotations

__all__ = ["PredicateBackoff"]

from typing import TYPE_CHECKING

from aretry.backoff.base import BaseBackoffStrategy

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.retry.state import AttemptState


class PredicateBackoff(BaseBackoffStrategy):
    """Delegate the delay computation to a caller-supplied function.

    Args:
        func: A function ``(error, attempt_number) -> seconds``. The
            attempt number is 1-indexed: it is 1 for the wait after the
            first failure. Negative delays are treated as 0.

    Example:
        ```pycon
        >>> from aretry.backoff import PredicateBackoff
        >>> from aretry.retry import AttemptState
        >>> backoff = PredicateBackoff(lambda err, attempt: attempt * 0.5)
        >>> backoff.calculate(AttemptState(attempt=2))
        1.5

        ```
    """

    def __init__(self, func: Callable[[Exception | None, int], float]) -> None:
        self.func = func

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(func={self.func!r})"

    def calculate(self, state: AttemptState) -> float:
        return max(0.0, self.func(state.error, state.attempt + 1))
