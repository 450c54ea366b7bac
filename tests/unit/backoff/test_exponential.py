r"""Unit tests for ExponentialBackoff strategy."""

from __future__ import annotations

import math

import pytest

from aretry.backoff import ExponentialBackoff
from aretry.retry import AttemptState


def test_exponential_backoff_basic() -> None:
    """Test basic exponential backoff calculation."""
    backoff = ExponentialBackoff(base_delay=0.25)
    assert backoff.calculate(AttemptState(attempt=0)) == 0.25  # 0.25 * 2^0
    assert backoff.calculate(AttemptState(attempt=1)) == 0.5  # 0.25 * 2^1
    assert backoff.calculate(AttemptState(attempt=2)) == 1.0  # 0.25 * 2^2
    assert backoff.calculate(AttemptState(attempt=3)) == 2.0  # 0.25 * 2^3


def test_exponential_backoff_custom_factor() -> None:
    """Test exponential backoff with a factor other than 2."""
    backoff = ExponentialBackoff(base_delay=1.0, factor=3.0)
    assert [backoff.calculate(AttemptState(attempt=i)) for i in range(4)] == [
        1.0,
        3.0,
        9.0,
        27.0,
    ]


def test_exponential_backoff_each_wait_is_previous_times_factor() -> None:
    """Test that wait(n + 1) == wait(n) * factor."""
    backoff = ExponentialBackoff(base_delay=0.5, factor=1.5)
    waits = [backoff.calculate(AttemptState(attempt=i)) for i in range(6)]
    for previous, current in zip(waits, waits[1:]):
        assert current == pytest.approx(previous * 1.5)


def test_exponential_backoff_with_max_delay() -> None:
    """Test exponential backoff with max_delay cap."""
    backoff = ExponentialBackoff(base_delay=1.0, max_delay=5.0)
    assert backoff.calculate(AttemptState(attempt=2)) == 4.0
    assert backoff.calculate(AttemptState(attempt=3)) == 5.0  # Would be 8.0, but capped
    assert backoff.calculate(AttemptState(attempt=10)) == 5.0  # Would be 1024.0, but capped


def test_exponential_backoff_default_values() -> None:
    """Test exponential backoff with default values."""
    backoff = ExponentialBackoff()
    assert backoff.base_delay == 0.5
    assert backoff.factor == 2.0
    assert backoff.max_delay is None
    assert backoff.limit is None


def test_exponential_backoff_zero_base_delay() -> None:
    """Test exponential backoff with zero base_delay."""
    backoff = ExponentialBackoff(base_delay=0.0)
    assert backoff.calculate(AttemptState(attempt=0)) == 0.0
    assert backoff.calculate(AttemptState(attempt=5)) == 0.0


def test_exponential_backoff_invalid_base_delay() -> None:
    """Test that negative base_delay raises ValueError."""
    with pytest.raises(ValueError, match=r"base_delay must be non-negative"):
        ExponentialBackoff(base_delay=-1.0)


def test_exponential_backoff_invalid_factor() -> None:
    """Test that negative factor raises ValueError."""
    with pytest.raises(ValueError, match=r"factor must be non-negative"):
        ExponentialBackoff(factor=-2.0)


@pytest.mark.parametrize("max_delay", [0, -5.0])
def test_exponential_backoff_invalid_max_delay(max_delay: float) -> None:
    """Test that non-positive max_delay raises ValueError."""
    with pytest.raises(ValueError, match=r"max_delay must be positive"):
        ExponentialBackoff(base_delay=1.0, max_delay=max_delay)


def test_exponential_backoff_large_attempt_capped() -> None:
    """Test that a huge attempt index saturates at max_delay instead of
    overflowing."""
    backoff = ExponentialBackoff(base_delay=0.01, max_delay=1.0)
    assert backoff.calculate(AttemptState(attempt=1024)) == 1.0
    assert backoff.calculate(AttemptState(attempt=5000)) == 1.0


def test_exponential_backoff_large_attempt_uncapped() -> None:
    """Test that a huge attempt index without cap gives an infinite delay."""
    backoff = ExponentialBackoff(base_delay=0.01)
    assert backoff.calculate(AttemptState(attempt=5000)) == math.inf
