r"""Cancellation sources for the retry loop.

A cancellation source answers "has cancellation been requested?". The
retry engine polls it before every attempt and after every failure, and
asks it to perform the wait between two attempts so that a cancellation
event cuts the wait short instead of stalling until its end.

Example:
    ```pycon
    >>> import threading
    >>> from aretry.cancellation import EventCancellation
    >>> event = threading.Event()
    >>> source = EventCancellation(event)
    >>> source.is_cancelled()
    False
    >>> event.set()
    >>> source.wait(10.0)  # returns immediately
    True

    ```
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_POLL_INTERVAL",
    "BaseCancellationSource",
    "CancellationToken",
    "EventCancellation",
    "FlagCancellation",
    "NeverCancel",
    "PredicateCancellation",
]

import asyncio
import threading
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable

# Sources without a native wake-up event are polled at this interval
# (seconds) while waiting, which bounds the cancellation latency.
DEFAULT_POLL_INTERVAL = 0.1


class BaseCancellationSource(ABC):
    """Abstract base class for cancellation sources.

    Subclasses only have to implement ``is_cancelled``. The default waits
    poll it every ``poll_interval`` seconds; sources backed by a real
    event override them to wake up as soon as the event fires.

    Args:
        reason: The message of the ``RetryCancelledError`` raised when
            this source stops the loop.
        poll_interval: The polling period in seconds.
    """

    def __init__(
        self, reason: str = "Retry cancelled", poll_interval: float = DEFAULT_POLL_INTERVAL
    ) -> None:
        if poll_interval <= 0:
            msg = f"poll_interval must be > 0, got {poll_interval}"
            raise ValueError(msg)
        self.reason = reason
        self.poll_interval = poll_interval

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(reason={self.reason!r})"

    @abstractmethod
    def is_cancelled(self) -> bool:
        """Indicate whether cancellation has been requested.

        Returns:
            ``True`` if the retry loop must stop, otherwise ``False``.
        """

    def wait(self, delay: float) -> bool:
        """Block for up to ``delay`` seconds, or until cancellation.

        Args:
            delay: The wait duration in seconds.

        Returns:
            ``True`` if cancellation was observed during or at the end of
            the wait, otherwise ``False``.
        """
        remaining = delay
        while remaining > 0:
            if self.is_cancelled():
                return True
            step = min(self.poll_interval, remaining)
            time.sleep(step)
            remaining -= step
        return self.is_cancelled()

    async def wait_async(self, delay: float) -> bool:
        """Suspend for up to ``delay`` seconds, or until cancellation.

        Args:
            delay: The wait duration in seconds.

        Returns:
            ``True`` if cancellation was observed during or at the end of
            the wait, otherwise ``False``.
        """
        remaining = delay
        while remaining > 0:
            if self.is_cancelled():
                return True
            step = min(self.poll_interval, remaining)
            await asyncio.sleep(step)
            remaining -= step
        return self.is_cancelled()


class NeverCancel(BaseCancellationSource):
    """Cancellation source that never cancels.

    Its waits are a single plain sleep.

    Example:
        ```pycon
        >>> from aretry.cancellation import NeverCancel
        >>> NeverCancel().is_cancelled()
        False

        ```
    """

    def is_cancelled(self) -> bool:
        return False

    def wait(self, delay: float) -> bool:
        time.sleep(delay)
        return False

    async def wait_async(self, delay: float) -> bool:
        await asyncio.sleep(delay)
        return False


class EventCancellation(BaseCancellationSource):
    """Signal-based cancellation backed by a ``threading.Event`` or an
    ``asyncio.Event``.

    Setting the event cancels the retry loop. A ``threading.Event``
    wakes up synchronous waits immediately, an ``asyncio.Event`` wakes up
    asynchronous waits immediately; the other combinations fall back to
    polling.

    Args:
        event: The cancellation signal.
        reason: The cancellation error message (default:
            ``"Retry aborted"``).
        poll_interval: The polling period in seconds, used only by the
            fallback combinations.
    """

    def __init__(
        self,
        event: threading.Event | asyncio.Event,
        reason: str = "Retry aborted",
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        super().__init__(reason=reason, poll_interval=poll_interval)
        self.event = event

    def is_cancelled(self) -> bool:
        return self.event.is_set()

    def wait(self, delay: float) -> bool:
        if isinstance(self.event, threading.Event):
            return self.event.wait(timeout=delay)
        return super().wait(delay)

    async def wait_async(self, delay: float) -> bool:
        if not isinstance(self.event, asyncio.Event):
            return await super().wait_async(delay)
        if self.event.is_set():
            return True
        # wait_for cancels the pending event waiter on timeout
        try:
            await asyncio.wait_for(self.event.wait(), timeout=delay)
        except asyncio.TimeoutError:
            return False
        return True


class SupportsCancelled(Protocol):
    cancelled: bool


class CancellationToken:
    """Mutable cancellation flag shared between a caller and a retry
    loop.

    Example:
        ```pycon
        >>> from aretry.cancellation import CancellationToken
        >>> token = CancellationToken()
        >>> token.cancelled
        False
        >>> token.cancel()
        >>> token.cancelled
        True

        ```
    """

    def __init__(self) -> None:
        self.cancelled = False

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(cancelled={self.cancelled})"

    def cancel(self) -> None:
        """Request cancellation."""
        self.cancelled = True


class FlagCancellation(BaseCancellationSource):
    """Flag-based cancellation reading ``token.cancelled`` by reference.

    There is no wake-up event for a plain attribute, so waits poll the
    flag every ``poll_interval`` seconds.

    Args:
        token: Any object with a boolean ``cancelled`` attribute, for
            example a ``CancellationToken``.
        reason: The cancellation error message (default:
            ``"Retry cancelled"``).
        poll_interval: The polling period in seconds.

    Example:
        ```pycon
        >>> from aretry.cancellation import CancellationToken, FlagCancellation
        >>> token = CancellationToken()
        >>> source = FlagCancellation(token)
        >>> source.is_cancelled()
        False
        >>> token.cancel()
        >>> source.is_cancelled()
        True

        ```
    """

    def __init__(
        self,
        token: SupportsCancelled,
        reason: str = "Retry cancelled",
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        super().__init__(reason=reason, poll_interval=poll_interval)
        self.token = token

    def is_cancelled(self) -> bool:
        return bool(self.token.cancelled)


class PredicateCancellation(BaseCancellationSource):
    """Cancellation decided by a caller-supplied stop predicate.

    Args:
        should_stop: A function returning ``True`` when the retry loop
            must stop.
        reason: The cancellation error message (default:
            ``"Retry stopped by predicate"``).
        poll_interval: The polling period in seconds.

    Example:
        ```pycon
        >>> from aretry.cancellation import PredicateCancellation
        >>> PredicateCancellation(lambda: True).is_cancelled()
        True

        ```
    """

    def __init__(
        self,
        should_stop: Callable[[], bool],
        reason: str = "Retry stopped by predicate",
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        super().__init__(reason=reason, poll_interval=poll_interval)
        self.should_stop = should_stop

    def is_cancelled(self) -> bool:
        return bool(self.should_stop())
