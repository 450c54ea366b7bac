r"""Symmetric jitter applied on top of another backoff strategy."""

from __future__ import annotations

__all__ = ["JitteredBackoff"]

import logging
import random
from typing import TYPE_CHECKING

from aretry.backoff.base import BaseBackoffStrategy
from aretry.backoff.exponential import ExponentialBackoff

if TYPE_CHECKING:
    from aretry.retry.state import AttemptState

logger: logging.Logger = logging.getLogger(__name__)


class JitteredBackoff(BaseBackoffStrategy):
    """Add a uniform random offset in ``[-jitter, +jitter]`` to the delay
    of an inner strategy.

    Jitter spreads the retries of concurrent callers so that they do not
    hit a recovering service at the same instant. The result is floored
    at 0.

    Args:
        strategy: The inner strategy. Defaults to ``ExponentialBackoff()``.
        jitter: The half-width of the jitter window in seconds
            (default: 0.1).

    Example:
        ```pycon
        >>> from aretry.backoff import ExponentialBackoff, JitteredBackoff
        >>> from aretry.retry import AttemptState
        >>> backoff = JitteredBackoff(ExponentialBackoff(base_delay=1.0), jitter=0.2)
        >>> 0.8 <= backoff.calculate(AttemptState(attempt=0)) <= 1.2
        True

        ```
    """

    def __init__(self, strategy: BaseBackoffStrategy | None = None, jitter: float = 0.1) -> None:
        if jitter < 0:
            msg = f"jitter must be non-negative, got {jitter}"
            raise ValueError(msg)
        self.strategy: BaseBackoffStrategy = (
            strategy if strategy is not None else ExponentialBackoff()
        )
        self.jitter = jitter

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(strategy={self.strategy!r}, jitter={self.jitter})"

    @property
    def limit(self) -> int | None:
        return self.strategy.limit

    def calculate(self, state: AttemptState) -> float:
        delay = self.strategy.calculate(state)
        offset = random.uniform(-self.jitter, self.jitter)  # noqa: S311
        total = max(0.0, delay + offset)
        logger.debug(f"Jittered delay {total:.3f}s (base={delay:.3f}s, jitter={offset:+.3f}s)")
        return total
