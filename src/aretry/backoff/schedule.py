r"""Fixed schedule backoff strategy."""

from __future__ import annotations

__all__ = ["ScheduleBackoff"]

from typing import TYPE_CHECKING

from aretry.backoff.base import BaseBackoffStrategy

if TYPE_CHECKING:
    from collections.abc import Sequence

    from aretry.retry.state import AttemptState


class ScheduleBackoff(BaseBackoffStrategy):
    """Look the delay up in a precomputed schedule.

    The length of the schedule bounds the number of retries: a schedule
    of length N allows at most N retries (N + 1 invocations).

    Args:
        schedule: The delays in seconds, one per retry.

    Example:
        ```pycon
        >>> from aretry.backoff import ScheduleBackoff
        >>> from aretry.retry import AttemptState
        >>> backoff = ScheduleBackoff([0.1, 0.5, 2.0])
        >>> backoff.limit
        3
        >>> backoff.calculate(AttemptState(attempt=1))
        0.5

        ```
    """

    def __init__(self, schedule: Sequence[float]) -> None:
        for delay in schedule:
            if delay < 0:
                msg = f"schedule delays must be non-negative, got {delay}"
                raise ValueError(msg)
        self.schedule: tuple[float, ...] = tuple(schedule)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(schedule={self.schedule})"

    @property
    def limit(self) -> int:
        return len(self.schedule)

    def calculate(self, state: AttemptState) -> float:
        return self.schedule[state.attempt]
