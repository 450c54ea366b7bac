r"""Unit tests for the asynchronous retry entry points."""

from __future__ import annotations

import asyncio
import threading
from unittest.mock import AsyncMock, Mock, call

import pytest

from aretry import (
    CancellationToken,
    ConditionNotMetError,
    ExecutionResult,
    RetryCancelledError,
    RetryPolicy,
    execute_async,
    retry_async,
    retry_until_condition_async,
    retry_with_cancellation_token_async,
    retry_with_custom_execution_async,
    retry_with_jitter_async,
    retry_with_max_total_attempts_async,
    retry_with_predicate_delay_async,
    retry_with_randomized_backoff_async,
    retry_with_schedule_async,
    retry_with_signal_async,
    retry_with_stop_predicate_async,
    retry_with_timeout_async,
)


@pytest.mark.asyncio
async def test_retry_async_success(mock_asleep: Mock) -> None:
    """Test that a successful coroutine is awaited once."""
    operation = AsyncMock(return_value="data")
    assert await retry_async(operation) == "data"
    operation.assert_awaited_once()
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_retry_async_always_failing(mock_asleep: Mock, mock_callback: Mock) -> None:
    """Test R + 1 invocations and hook attempt numbers 1..R."""
    error = ValueError("boom")
    operation = AsyncMock(side_effect=error)

    with pytest.raises(ValueError, match=r"boom") as exc_info:
        await retry_async(operation, retries=3, delay=0.1, on_retry=mock_callback)

    assert exc_info.value is error
    assert operation.await_count == 4
    assert mock_callback.call_args_list == [call(error, 1), call(error, 2), call(error, 3)]
    assert mock_asleep.call_args_list == [call(0.1), call(0.2), call(0.4)]


@pytest.mark.asyncio
async def test_retry_async_should_retry_false(mock_asleep: Mock) -> None:
    """Test that an ineligible error is raised after one invocation."""
    operation = AsyncMock(side_effect=KeyError())
    with pytest.raises(KeyError):
        await retry_async(operation, should_retry=lambda exc: False)  # noqa: ARG005
    operation.assert_awaited_once()
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_retry_async_sync_operation(mock_asleep: Mock) -> None:  # noqa: ARG001
    """Test that a plain callable is accepted."""
    assert await retry_async(Mock(side_effect=[ValueError(), "ok"])) == "ok"


@pytest.mark.asyncio
async def test_retry_with_jitter_async(mock_asleep: Mock) -> None:
    """Test that the async jittered waits stay in the jitter window."""
    with pytest.raises(ValueError):  # noqa: PT011
        await retry_with_jitter_async(
            AsyncMock(side_effect=ValueError()), retries=2, delay=1.0, jitter=0.2
        )
    waits = [c.args[0] for c in mock_asleep.call_args_list]
    assert 0.8 <= waits[0] <= 1.2
    assert 1.8 <= waits[1] <= 2.2


@pytest.mark.asyncio
async def test_retry_with_timeout_async(mock_asleep: Mock) -> None:
    """Test that async retries stop at the time budget."""
    operation = AsyncMock(side_effect=ConnectionError())
    with pytest.raises(ConnectionError):
        await retry_with_timeout_async(operation, delay=0.5, factor=2.0, timeout=1.5)
    assert mock_asleep.call_args_list == [call(0.5), call(1.0)]
    assert operation.await_count == 3


@pytest.mark.asyncio
async def test_retry_with_schedule_async(mock_asleep: Mock) -> None:
    """Test L + 1 invocations with the exact scheduled waits."""
    operation = AsyncMock(side_effect=ValueError())
    with pytest.raises(ValueError):  # noqa: PT011
        await retry_with_schedule_async(operation, [0.1, 0.2])
    assert operation.await_count == 3
    assert mock_asleep.call_args_list == [call(0.1), call(0.2)]


@pytest.mark.asyncio
async def test_retry_with_signal_async_asyncio_event() -> None:
    """Test that setting an asyncio.Event wakes up the wait."""
    event = asyncio.Event()
    operation = AsyncMock(side_effect=ValueError())
    asyncio.get_running_loop().call_later(0.02, event.set)

    with pytest.raises(RetryCancelledError, match=r"Retry aborted"):
        await asyncio.wait_for(retry_with_signal_async(operation, event, delay=60.0), 5.0)

    operation.assert_awaited_once()


@pytest.mark.asyncio
async def test_retry_with_signal_async_threading_event(mock_asleep: Mock) -> None:
    """Test that a threading.Event is polled by the async wait."""
    event = threading.Event()
    mock_asleep.side_effect = lambda _: event.set()
    operation = AsyncMock(side_effect=ValueError())

    with pytest.raises(RetryCancelledError):
        await retry_with_signal_async(operation, event, delay=5.0)

    operation.assert_awaited_once()


@pytest.mark.asyncio
async def test_retry_with_cancellation_token_async(mock_asleep: Mock) -> None:
    """Test that cancelling the token stops the async loop."""
    token = CancellationToken()
    mock_asleep.side_effect = lambda _: token.cancel()
    operation = AsyncMock(side_effect=ValueError())

    with pytest.raises(RetryCancelledError, match=r"Retry cancelled"):
        await retry_with_cancellation_token_async(operation, token, delay=1.0)

    operation.assert_awaited_once()


@pytest.mark.asyncio
async def test_retry_with_stop_predicate_async(mock_asleep: Mock) -> None:  # noqa: ARG001
    """Test that the stop predicate cancels the async loop."""
    operation = AsyncMock(side_effect=ValueError())
    with pytest.raises(RetryCancelledError, match=r"Retry stopped by predicate"):
        await retry_with_stop_predicate_async(operation, lambda: operation.await_count >= 3)
    assert operation.await_count == 3


@pytest.mark.asyncio
async def test_retry_with_max_total_attempts_async(mock_asleep: Mock) -> None:  # noqa: ARG001
    """Test that max_attempts=5 awaits the operation exactly 5 times."""
    operation = AsyncMock(side_effect=ValueError())
    with pytest.raises(ValueError):  # noqa: PT011
        await retry_with_max_total_attempts_async(operation, 5, delay=0.1)
    assert operation.await_count == 5


@pytest.mark.asyncio
async def test_retry_with_predicate_delay_async(mock_asleep: Mock) -> None:
    """Test that the async waits come from get_delay."""
    with pytest.raises(ValueError):  # noqa: PT011
        await retry_with_predicate_delay_async(
            AsyncMock(side_effect=ValueError()),
            lambda error, attempt: attempt * 0.25,  # noqa: ARG005
            retries=2,
        )
    assert mock_asleep.call_args_list == [call(0.25), call(0.5)]


@pytest.mark.asyncio
async def test_retry_with_predicate_delay_async_negative_delay(mock_asleep: Mock) -> None:
    """Test that a negative delay from get_delay waits 0 seconds."""
    operation = AsyncMock(side_effect=[ValueError(), "ok"])
    result = await retry_with_predicate_delay_async(
        operation,
        lambda error, attempt: -1.0,  # noqa: ARG005
    )
    assert result == "ok"
    assert mock_asleep.call_args_list == [call(0.0)]
    assert operation.await_count == 2


@pytest.mark.asyncio
async def test_retry_with_randomized_backoff_async(mock_asleep: Mock) -> None:
    """Test that the async waits are in [delay, max_delay]."""
    with pytest.raises(ValueError):  # noqa: PT011
        await retry_with_randomized_backoff_async(
            AsyncMock(side_effect=ValueError()), retries=5, delay=0.1, max_delay=0.5
        )
    assert all(0.1 <= c.args[0] <= 0.5 for c in mock_asleep.call_args_list)


@pytest.mark.asyncio
async def test_retry_until_condition_async(mock_asleep: Mock) -> None:  # noqa: ARG001
    """Test that values 1, 2, 3 with condition 'is 3' return 3."""
    operation = AsyncMock(side_effect=[1, 2, 3])
    assert await retry_until_condition_async(operation, lambda v: v == 3, retries=5) == 3
    assert operation.await_count == 3


@pytest.mark.asyncio
async def test_retry_until_condition_async_never_met(mock_asleep: Mock) -> None:  # noqa: ARG001
    """Test ConditionNotMetError with the last awaited value."""
    with pytest.raises(ConditionNotMetError) as exc_info:
        await retry_until_condition_async(
            AsyncMock(side_effect=["a", "b"]), lambda v: v == "c", retries=1
        )
    assert exc_info.value.value == "b"


@pytest.mark.asyncio
async def test_retry_with_custom_execution_async(mock_asleep: Mock) -> None:  # noqa: ARG001
    """Test an async custom execution function."""
    operation = AsyncMock(side_effect=["invalid", "invalid", "valid"])

    async def execute_fn(op):  # noqa: ANN001, ANN202
        value = await op()
        return ExecutionResult(success=value == "valid", value=value)

    assert await retry_with_custom_execution_async(operation, execute_fn) == "valid"
    assert operation.await_count == 3


@pytest.mark.asyncio
async def test_execute_async_with_custom_policy(mock_asleep: Mock) -> None:
    """Test running an arbitrary policy asynchronously."""
    policy = RetryPolicy(max_retries=2, on_failure=Mock())
    with pytest.raises(OSError):  # noqa: PT011
        await execute_async(AsyncMock(side_effect=OSError()), policy)
    assert mock_asleep.call_count == 2
    policy.on_failure.assert_called_once()
