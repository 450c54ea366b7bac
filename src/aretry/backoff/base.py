r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy"]

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aretry.retry.state import AttemptState


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    A backoff strategy determines how long to wait before retrying a
    failed attempt. Strategies are stateless: anything that must be
    carried from one retry to the next is read from the
    ``AttemptState`` owned by the running loop, so the same strategy
    instance can be shared by concurrent retry calls.
    """

    @property
    def limit(self) -> int | None:
        """The maximum number of retries the strategy can schedule, or
        ``None`` if unbounded."""
        return None

    @abstractmethod
    def calculate(self, state: AttemptState) -> float:
        """Calculate the delay before the next retry.

        Args:
            state: The state of the running retry loop. ``state.attempt``
                is the index of the attempt that just failed (0-indexed),
                so ``attempt=0`` computes the wait before the first retry.

        Returns:
            The delay in seconds before the next attempt.
        """
