r"""Structured logging utilities for machine-readable retry logs.

The retry engine logs every attempt, retry, and terminal outcome at
DEBUG level with structured ``extra`` fields (``attempt``, ``delay``,
``error_type``, ...). By default these are plain log lines; configuring
a handler with ``StructuredFormatter`` turns them into JSON objects,
which is convenient for log aggregation systems.

A retry label can be attached to the current context (thread or asyncio
task) to tell apart the logs of concurrent retry calls.

Example:
    ```python
    import logging
    from aretry import retry
    from aretry.utils.structured_logging import StructuredFormatter, retry_label

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logger = logging.getLogger("aretry")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    with retry_label("fetch-user-42"):
        retry(fetch_user, retries=5)
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_retry_label",
    "get_retry_label",
    "log_structured",
    "retry_label",
    "set_retry_label",
]

import contextvars
import json
import logging
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Generator

_retry_label: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "aretry_retry_label", default=None
)

# Attributes present on every LogRecord; anything else came from ``extra``.
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}


def get_retry_label() -> str | None:
    """Get the retry label of the current context.

    Returns:
        The current label, or ``None`` if not set.

    Example:
        ```pycon
        >>> from aretry.utils.structured_logging import get_retry_label, set_retry_label
        >>> set_retry_label("sync-orders")
        >>> get_retry_label()
        'sync-orders'

        ```
    """
    return _retry_label.get()


def set_retry_label(label: str) -> None:
    """Set the retry label of the current context.

    Args:
        label: The label to attach to the following log records.
    """
    _retry_label.set(label)


def clear_retry_label() -> None:
    """Clear the retry label of the current context.

    Example:
        ```pycon
        >>> from aretry.utils.structured_logging import (
        ...     clear_retry_label,
        ...     get_retry_label,
        ...     set_retry_label,
        ... )
        >>> set_retry_label("sync-orders")
        >>> clear_retry_label()
        >>> get_retry_label() is None
        True

        ```
    """
    _retry_label.set(None)


@contextmanager
def retry_label(label: str) -> Generator[None, None, None]:
    """Attach a retry label to the log records emitted inside the block.

    The previous label is restored on exit.

    Args:
        label: The label to attach.

    Example:
        ```pycon
        >>> from aretry.utils.structured_logging import get_retry_label, retry_label
        >>> with retry_label("inner"):
        ...     get_retry_label()
        ...
        'inner'

        ```
    """
    token = _retry_label.set(label)
    try:
        yield
    finally:
        _retry_label.reset(token)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Each record becomes one JSON object with the fields ``timestamp``
    (ISO 8601, UTC), ``level``, ``logger``, ``message``, ``module``,
    ``function``, ``line``, the optional ``retry_label`` and
    ``exception``, plus every field passed through ``extra``. Values
    that are not JSON serializable are rendered with ``repr``.

    Example:
        ```pycon
        >>> import json
        >>> import logging
        >>> from io import StringIO
        >>> from aretry.utils.structured_logging import StructuredFormatter
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("doctest_structured")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.INFO)
        >>> logger.info("retrying", extra={"attempt": 2})
        >>> json.loads(stream.getvalue())["attempt"]
        2

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        label = get_retry_label()
        if label is not None:
            payload["retry_label"] = label
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        payload.update(
            {key: value for key, value in record.__dict__.items() if key not in _RESERVED_ATTRS}
        )
        return json.dumps(payload, default=repr)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: ARG002, N802
        """Format the record timestamp as ISO 8601 with millisecond
        precision, ignoring ``datefmt``."""
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(logger: logging.Logger, level: int, message: str, **extra: Any) -> None:
    """Log a message with structured fields.

    The record is only built when ``logger`` is enabled for ``level``.

    Args:
        logger: Logger to use.
        level: Log level (e.g., ``logging.DEBUG``).
        message: Log message.
        **extra: Structured fields attached to the record.
    """
    if logger.isEnabledFor(level):
        logger.log(level, message, extra=extra)
