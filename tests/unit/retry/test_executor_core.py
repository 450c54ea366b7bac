r"""Unit tests for the shared retry decision steps."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from aretry.backoff import ConstantBackoff, ScheduleBackoff
from aretry.cancellation import PredicateCancellation
from aretry.evaluator import Failure, Success
from aretry.exceptions import ConditionNotMetError, RetryCancelledError
from aretry.retry import AttemptState, CallbackManager, RetryPolicy
from aretry.retry.executor_core import (
    apply_condition,
    keep_going,
    raise_cancelled,
    raise_terminal,
    schedule_retry,
)

################################
#     Tests for keep_going     #
################################


def test_keep_going_within_limit() -> None:
    policy = RetryPolicy(max_retries=2)
    assert [keep_going(policy, AttemptState(attempt=i)) for i in range(4)] == [
        True,
        True,
        True,
        False,
    ]


def test_keep_going_unbounded() -> None:
    policy = RetryPolicy(max_retries=None, timeout=1.0)
    assert keep_going(policy, AttemptState(attempt=1000))


#####################################
#     Tests for apply_condition     #
#####################################


def test_apply_condition_without_condition() -> None:
    outcome = Success(1)
    assert apply_condition(RetryPolicy(), outcome) is outcome


def test_apply_condition_accepted_value() -> None:
    outcome = Success(3)
    assert apply_condition(RetryPolicy(until=lambda v: v == 3), outcome) is outcome


def test_apply_condition_rejected_value() -> None:
    outcome = apply_condition(RetryPolicy(until=lambda v: v == 3), Success(2))
    assert isinstance(outcome, Failure)
    assert isinstance(outcome.error, ConditionNotMetError)
    assert outcome.error.value == 2


def test_apply_condition_failure_unchanged() -> None:
    outcome = Failure(ValueError())
    assert apply_condition(RetryPolicy(until=lambda v: False), outcome) is outcome  # noqa: ARG005


##########################################
#     Tests for raise_terminal/cancel     #
##########################################


def test_raise_terminal_calls_on_failure() -> None:
    on_failure = Mock()
    callbacks = CallbackManager(RetryPolicy(on_failure=on_failure))
    error = ValueError("final")

    with pytest.raises(ValueError, match=r"final"):
        raise_terminal(callbacks, AttemptState(attempt=1), error)

    on_failure.assert_called_once_with(error, 2)


def test_raise_cancelled_chains_last_error() -> None:
    policy = RetryPolicy(cancellation=PredicateCancellation(lambda: True, reason="shutdown"))
    error = OSError()

    with pytest.raises(RetryCancelledError, match=r"shutdown") as exc_info:
        raise_cancelled(CallbackManager(policy), AttemptState(error=error))

    assert exc_info.value.__cause__ is error


####################################
#     Tests for schedule_retry     #
####################################


def test_schedule_retry_returns_delay_and_calls_hook() -> None:
    on_retry = Mock()
    policy = RetryPolicy(backoff=ConstantBackoff(0.3), on_retry=on_retry)
    error = ValueError()
    state = AttemptState(error=error)

    assert schedule_retry(policy, CallbackManager(policy), state) == 0.3
    on_retry.assert_called_once_with(error, 1)


def test_schedule_retry_last_attempt_raises() -> None:
    policy = RetryPolicy(backoff=ScheduleBackoff([0.1]))
    state = AttemptState(attempt=1, error=ValueError("last"))

    with pytest.raises(ValueError, match=r"last"):
        schedule_retry(policy, CallbackManager(policy), state)


def test_schedule_retry_timeout_raises_before_hook() -> None:
    on_retry = Mock()
    policy = RetryPolicy(
        max_retries=None, timeout=1.0, backoff=ConstantBackoff(2.0), on_retry=on_retry
    )

    with pytest.raises(ValueError, match=r"slow"):
        schedule_retry(policy, CallbackManager(policy), AttemptState(error=ValueError("slow")))

    on_retry.assert_not_called()
