r"""Retry engine.

This package provides the retry loop and its configuration:

    - RetryPolicy: Immutable configuration of one retry call
    - AttemptState: Mutable state of one running loop
    - CallbackManager: Invocation of the lifecycle hooks
    - RetryExecutor: Synchronous retry executor
    - AsyncRetryExecutor: Asynchronous retry executor
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "AttemptState",
    "CallbackManager",
    "RetryExecutor",
    "RetryPolicy",
]

from aretry.retry.config import RetryPolicy
from aretry.retry.executor import RetryExecutor
from aretry.retry.executor_async import AsyncRetryExecutor
from aretry.retry.manager import CallbackManager
from aretry.retry.state import AttemptState
