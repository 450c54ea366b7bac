r"""Callback manager for retry lifecycle events.

This module provides the CallbackManager class that invokes the hooks
of a ``RetryPolicy`` at the right points of the retry loop and logs
each event.
"""

from __future__ import annotations

__all__ = ["CallbackManager"]

import logging
from typing import TYPE_CHECKING, Any

from aretry.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from aretry.retry.config import RetryPolicy
    from aretry.retry.state import AttemptState

logger: logging.Logger = logging.getLogger(__name__)


class CallbackManager:
    """Manages hook invocations during the retry lifecycle.

    Exceptions raised by a hook are not caught: they propagate to the
    caller of the retry loop as the effective failure of that attempt.

    Attributes:
        policy: The policy holding the hooks.
    """

    def __init__(self, policy: RetryPolicy) -> None:
        self.policy = policy

    def on_retry(self, state: AttemptState, delay: float) -> None:
        """Invoke the ``on_retry`` hook for the attempt that just failed.

        Args:
            state: The loop state. ``state.error`` is the error passed
                to the hook and ``state.attempt + 1`` the attempt number.
            delay: The wait that will follow, in seconds (logged only).
        """
        log_structured(
            logger,
            logging.DEBUG,
            f"Attempt {state.attempt + 1} failed with {type(state.error).__name__}, "
            f"retrying in {delay:.3f}s",
            attempt=state.attempt + 1,
            delay=delay,
            error_type=type(state.error).__name__,
        )
        self.policy.on_retry(state.error, state.attempt + 1)

    def on_success(self, state: AttemptState, value: Any) -> None:
        """Invoke the ``on_success`` hook.

        Args:
            state: The loop state.
            value: The value returned by the loop.
        """
        log_structured(
            logger,
            logging.DEBUG,
            f"Attempt {state.attempt + 1} succeeded after {state.elapsed:.3f}s",
            attempt=state.attempt + 1,
            total_time=state.elapsed,
        )
        self.policy.on_success(value, state.attempt + 1)

    def on_failure(self, state: AttemptState, error: Exception) -> None:
        """Invoke the ``on_failure`` hook with the terminal error.

        Args:
            state: The loop state.
            error: The error about to be raised to the caller.
        """
        log_structured(
            logger,
            logging.DEBUG,
            f"Giving up after {state.attempt + 1} attempts: {type(error).__name__}: {error}",
            attempt=state.attempt + 1,
            total_time=state.elapsed,
            error_type=type(error).__name__,
        )
        self.policy.on_failure(error, state.attempt + 1)
