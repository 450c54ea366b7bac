r"""Backoff strategies for retry delays.

This package provides the strategies used to compute the wait between
two attempts: constant, exponential, jittered, decorrelated jitter,
fixed schedule, and caller-computed delays.
"""

from __future__ import annotations

__all__ = [
    "BaseBackoffStrategy",
    "ConstantBackoff",
    "DecorrelatedJitterBackoff",
    "ExponentialBackoff",
    "JitteredBackoff",
    "PredicateBackoff",
    "ScheduleBackoff",
]

from aretry.backoff.base import BaseBackoffStrategy
from aretry.backoff.constant import ConstantBackoff
from aretry.backoff.decorrelated import DecorrelatedJitterBackoff
from aretry.backoff.exponential import ExponentialBackoff
from aretry.backoff.jitter import JitteredBackoff
from aretry.backoff.predicate import PredicateBackoff
from aretry.backoff.schedule import ScheduleBackoff
