r"""Per-call state of a retry loop."""

from __future__ import annotations

__all__ = ["AttemptState"]

import time
from dataclasses import dataclass, field


@dataclass
class AttemptState:
    """Mutable state owned by exactly one in-flight retry loop.

    Attributes:
        attempt: The current attempt index (0-indexed). The first
            invocation of the operation is attempt 0.
        delay: The last computed wait in seconds, or ``None`` before
            the first retry.
        error: The error of the last failed attempt, if any.
        start_time: The ``time.monotonic()`` timestamp of the loop
            start.

    Example:
        ```pycon
        >>> from aretry.retry import AttemptState
        >>> state = AttemptState()
        >>> state.attempt
        0
        >>> state.advance(0.5)
        >>> state.attempt, state.delay
        (1, 0.5)

        ```
    """

    attempt: int = 0
    delay: float | None = None
    error: Exception | None = None
    start_time: float = field(default_factory=time.monotonic)

    @property
    def elapsed(self) -> float:
        """The number of seconds since the loop started."""
        return time.monotonic() - self.start_time

    def advance(self, delay: float) -> None:
        """Move to the next attempt after waiting ``delay`` seconds.

        Args:
            delay: The wait that preceded the next attempt.
        """
        self.delay = delay
        self.attempt += 1
