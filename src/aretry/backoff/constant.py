r"""Constant backoff strategy."""

from __future__ import annotations

__all__ = ["ConstantBackoff"]

from typing import TYPE_CHECKING

from aretry.backoff.base import BaseBackoffStrategy

if TYPE_CHECKING:
    from aretry.retry.state import AttemptState


class ConstantBackoff(BaseBackoffStrategy):
    """Fixed backoff strategy.

    Waits the same delay before every retry.

    Args:
        delay: The delay in seconds (default: 0.5).

    Example:
        ```pycon
        >>> from aretry.backoff import ConstantBackoff
        >>> from aretry.retry import AttemptState
        >>> backoff = ConstantBackoff(delay=2.5)
        >>> backoff.calculate(AttemptState(attempt=0))
        2.5
        >>> backoff.calculate(AttemptState(attempt=10))
        2.5

        ```
    """

    def __init__(self, delay: float = 0.5) -> None:
        if delay < 0:
            msg = f"delay must be non-negative, got {delay}"
            raise ValueError(msg)
        self.delay = delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(delay={self.delay})"

    def calculate(self, state: AttemptState) -> float:  # noqa: ARG002
        return self.delay
