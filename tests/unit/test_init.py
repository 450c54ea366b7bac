r"""Unit tests for package initialization and metadata."""

from __future__ import annotations

import inspect

import pytest

import aretry


def test_package_version_is_string() -> None:
    """Test that __version__ is a string."""
    assert isinstance(aretry.__version__, str)


def test_package_version_format() -> None:
    """Test that __version__ follows semantic versioning."""
    assert "." in aretry.__version__


def test_all_exports_defined() -> None:
    """Test that all items in __all__ are defined in the module."""
    for name in aretry.__all__:
        assert hasattr(aretry, name), f"{name} is in __all__ but not defined in module"


@pytest.mark.parametrize(
    "func_name",
    [
        "retry",
        "retry_until_condition",
        "retry_with_cancellation_token",
        "retry_with_custom_execution",
        "retry_with_jitter",
        "retry_with_max_total_attempts",
        "retry_with_predicate_delay",
        "retry_with_randomized_backoff",
        "retry_with_schedule",
        "retry_with_signal",
        "retry_with_stop_predicate",
        "retry_with_timeout",
    ],
)
def test_sync_and_async_variants(func_name: str) -> None:
    """Test that each entry point has an async twin."""
    sync_func = getattr(aretry, func_name)
    async_func = getattr(aretry, f"{func_name}_async")
    assert callable(sync_func)
    assert not inspect.iscoroutinefunction(sync_func)
    assert inspect.iscoroutinefunction(async_func)


def test_exceptions_share_base_class() -> None:
    """Test the exported exception hierarchy."""
    for name in (
        "ConditionNotMetError",
        "InvariantViolationError",
        "OperationFailedError",
        "RetryCancelledError",
    ):
        assert issubclass(getattr(aretry, name), aretry.RetryError)
