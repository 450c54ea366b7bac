r"""Decorrelated jitter backoff strategy.

See https://aws.amazon.com/blogs/architecture/exponential-backoff-and-jitter/
"""

from __future__ import annotations

__all__ = ["DecorrelatedJitterBackoff"]

import random
from typing import TYPE_CHECKING

from aretry.backoff.base import BaseBackoffStrategy

if TYPE_CHECKING:
    from aretry.retry.state import AttemptState


class DecorrelatedJitterBackoff(BaseBackoffStrategy):
    """Randomized backoff where each wait is drawn from
    ``[base_delay, previous * 3]`` and capped at ``max_delay``.

    ``previous`` is the wait computed for the preceding retry of the
    same loop (``state.delay``), or ``base_delay`` for the first retry.

    Args:
        base_delay: The lower bound of every wait in seconds
            (default: 0.5).
        max_delay: The upper bound of every wait in seconds
            (default: 30.0).

    Example:
        ```pycon
        >>> from aretry.backoff import DecorrelatedJitterBackoff
        >>> from aretry.retry import AttemptState
        >>> backoff = DecorrelatedJitterBackoff(base_delay=1.0, max_delay=2.0)
        >>> 1.0 <= backoff.calculate(AttemptState()) <= 2.0
        True

        ```
    """

    def __init__(self, base_delay: float = 0.5, max_delay: float = 30.0) -> None:
        if base_delay < 0:
            msg = f"base_delay must be non-negative, got {base_delay}"
            raise ValueError(msg)
        if max_delay < base_delay:
            msg = f"max_delay must be >= base_delay ({base_delay}), got {max_delay}"
            raise ValueError(msg)
        self.base_delay = base_delay
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base_delay={self.base_delay}, "
            f"max_delay={self.max_delay})"
        )

    def calculate(self, state: AttemptState) -> float:
        previous = state.delay if state.delay is not None else self.base_delay
        return min(self.max_delay, random.uniform(self.base_delay, previous * 3))  # noqa: S311
