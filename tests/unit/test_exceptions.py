r"""Unit tests for the retry exceptions."""

from __future__ import annotations

import pytest

from aretry.exceptions import (
    ConditionNotMetError,
    InvariantViolationError,
    OperationFailedError,
    RetryCancelledError,
    RetryError,
)


@pytest.mark.parametrize(
    "error",
    [
        ConditionNotMetError(1),
        InvariantViolationError("bug"),
        OperationFailedError(),
        RetryCancelledError(),
    ],
)
def test_errors_derive_from_retry_error(error: Exception) -> None:
    """Test that every synthesized error is a RetryError."""
    assert isinstance(error, RetryError)
    assert isinstance(error, RuntimeError)


def test_condition_not_met_error_keeps_value() -> None:
    """Test that ConditionNotMetError exposes the rejected value."""
    error = ConditionNotMetError([1, 2])
    assert error.value == [1, 2]
    assert str(error) == "Condition not met"


def test_condition_not_met_error_custom_message() -> None:
    """Test ConditionNotMetError with a custom message."""
    error = ConditionNotMetError(None, message="still pending")
    assert error.value is None
    assert str(error) == "still pending"


def test_retry_cancelled_error_default_reason() -> None:
    """Test RetryCancelledError default reason."""
    error = RetryCancelledError()
    assert error.reason == "Retry cancelled"
    assert str(error) == "Retry cancelled"


def test_retry_cancelled_error_custom_reason() -> None:
    """Test RetryCancelledError with a custom reason."""
    error = RetryCancelledError("Retry aborted")
    assert error.reason == "Retry aborted"
    assert str(error) == "Retry aborted"


def test_operation_failed_error_defaults() -> None:
    """Test OperationFailedError default values."""
    error = OperationFailedError()
    assert str(error) == "Operation failed"
    assert error.error is None


def test_operation_failed_error_keeps_payload() -> None:
    """Test that OperationFailedError keeps the raw error payload."""
    error = OperationFailedError("Operation failed: 'invalid'", error="invalid")
    assert error.error == "invalid"
    assert str(error) == "Operation failed: 'invalid'"


def test_retry_error_can_be_raised_and_caught() -> None:
    """Test catching a subclass through the base class."""
    with pytest.raises(RetryError, match=r"Retry aborted"):
        raise RetryCancelledError("Retry aborted")
