r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

import math
from typing import TYPE_CHECKING

from aretry.backoff.base import BaseBackoffStrategy

if TYPE_CHECKING:
    from aretry.retry.state import AttemptState


class ExponentialBackoff(BaseBackoffStrategy):
    """Exponential backoff strategy.

    Calculates delay as: base_delay * (factor ** attempt), with optional
    max_delay cap. This is the default strategy of ``RetryPolicy``.

    Args:
        base_delay: The wait before the first retry in seconds
            (default: 0.5).
        factor: The multiplier applied after each retry (default: 2.0).
        max_delay: Optional maximum delay cap in seconds.

    Example:
        ```pycon
        >>> from aretry.backoff import ExponentialBackoff
        >>> from aretry.retry import AttemptState
        >>> backoff = ExponentialBackoff(base_delay=0.5)
        >>> [backoff.calculate(AttemptState(attempt=i)) for i in range(4)]
        [0.5, 1.0, 2.0, 4.0]
        >>> backoff = ExponentialBackoff(base_delay=1.0, factor=3.0, max_delay=5.0)
        >>> [backoff.calculate(AttemptState(attempt=i)) for i in range(3)]
        [1.0, 3.0, 5.0]

        ```
    """

    def __init__(
        self, base_delay: float = 0.5, factor: float = 2.0, max_delay: float | None = None
    ) -> None:
        if base_delay < 0:
            msg = f"base_delay must be non-negative, got {base_delay}"
            raise ValueError(msg)
        if factor < 0:
            msg = f"factor must be non-negative, got {factor}"
            raise ValueError(msg)
        if max_delay is not None and max_delay <= 0:
            msg = f"max_delay must be positive if specified, got {max_delay}"
            raise ValueError(msg)

        self.base_delay = base_delay
        self.factor = factor
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base_delay={self.base_delay}, "
            f"factor={self.factor}, max_delay={self.max_delay})"
        )

    def calculate(self, state: AttemptState) -> float:
        try:
            delay = self.base_delay * (self.factor**state.attempt)
        except OverflowError:
            delay = math.inf
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay
