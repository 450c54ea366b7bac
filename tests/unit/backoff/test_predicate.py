r"""Unit tests for PredicateBackoff strategy."""

from __future__ import annotations

from unittest.mock import Mock

from aretry.backoff import PredicateBackoff
from aretry.retry import AttemptState


def test_predicate_backoff_calls_function_with_error_and_attempt_number() -> None:
    """Test that the function receives the error and a 1-indexed attempt
    number."""
    func = Mock(return_value=0.25)
    error = ValueError("boom")
    backoff = PredicateBackoff(func)
    assert backoff.calculate(AttemptState(attempt=0, error=error)) == 0.25
    func.assert_called_once_with(error, 1)


def test_predicate_backoff_linear_delay() -> None:
    """Test a caller-computed linear delay."""
    backoff = PredicateBackoff(lambda error, attempt: attempt * 0.5)  # noqa: ARG005
    assert [backoff.calculate(AttemptState(attempt=i)) for i in range(3)] == [0.5, 1.0, 1.5]


def test_predicate_backoff_unbounded() -> None:
    """Test that PredicateBackoff does not bound the retry count."""
    assert PredicateBackoff(lambda error, attempt: 0.0).limit is None  # noqa: ARG005


def test_predicate_backoff_negative_delay_is_zero() -> None:
    """Test that a negative caller delay is treated as no wait."""
    backoff = PredicateBackoff(lambda error, attempt: -1.0)  # noqa: ARG005
    assert backoff.calculate(AttemptState(attempt=0)) == 0.0
