r"""Utility functions for parameter validation and structured
logging."""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "log_structured",
    "retry_label",
    "validate_max_attempts",
    "validate_retry_params",
]

from aretry.utils.structured_logging import StructuredFormatter, log_structured, retry_label
from aretry.utils.validation import validate_max_attempts, validate_retry_params
