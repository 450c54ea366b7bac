r"""Unit tests for ScheduleBackoff strategy."""

from __future__ import annotations

import pytest

from aretry.backoff import ScheduleBackoff
from aretry.retry import AttemptState


def test_schedule_backoff_returns_schedule_entries() -> None:
    """Test that the wait before retry i + 1 is schedule[i]."""
    backoff = ScheduleBackoff([0.1, 0.5, 2.0])
    assert [backoff.calculate(AttemptState(attempt=i)) for i in range(3)] == [0.1, 0.5, 2.0]


def test_schedule_backoff_limit_is_length() -> None:
    """Test that the schedule length bounds the retry count."""
    assert ScheduleBackoff([0.1, 0.2, 0.3, 0.4]).limit == 4


def test_schedule_backoff_empty() -> None:
    """Test that an empty schedule allows no retry."""
    assert ScheduleBackoff([]).limit == 0


def test_schedule_backoff_copies_schedule() -> None:
    """Test that later changes to the input list have no effect."""
    schedule = [0.1, 0.2]
    backoff = ScheduleBackoff(schedule)
    schedule.append(0.3)
    assert backoff.schedule == (0.1, 0.2)
    assert backoff.limit == 2


def test_schedule_backoff_invalid_delay() -> None:
    """Test that a negative entry raises ValueError."""
    with pytest.raises(ValueError, match=r"schedule delays must be non-negative"):
        ScheduleBackoff([0.1, -0.2])
