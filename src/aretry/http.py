r"""Helpers for retrying HTTP calls made with ``httpx``.

The retry engine itself knows nothing about HTTP. This module provides
ready-made collaborators for the common case of wrapping an ``httpx``
request:

- ``HttpStatusEvaluator`` treats retryable status codes as failures, so
  that the operation does not have to call ``raise_for_status``.
- ``is_retryable_http_error`` is an eligibility predicate accepting
  transport errors and retryable status errors only.
- ``retry_after_delay`` honours the ``Retry-After`` response header,
  falling back to another backoff strategy.

Example:
    ```pycon
    >>> import httpx
    >>> from aretry import execute
    >>> from aretry.backoff import PredicateBackoff
    >>> from aretry.http import HttpStatusEvaluator, is_retryable_http_error, retry_after_delay
    >>> from aretry.retry import RetryPolicy
    >>> policy = RetryPolicy(
    ...     max_retries=5,
    ...     evaluator=HttpStatusEvaluator(),
    ...     should_retry=is_retryable_http_error,
    ...     backoff=PredicateBackoff(retry_after_delay()),
    ... )
    >>> with httpx.Client() as client:  # doctest: +SKIP
    ...     response = execute(lambda: client.get("https://api.example.com/data"), policy)
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "RETRY_STATUS_CODES",
    "HttpStatusEvaluator",
    "is_retryable_http_error",
    "parse_retry_after",
    "retry_after_delay",
]

import inspect
import logging
from contextlib import suppress
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import TYPE_CHECKING, Any

import httpx

from aretry.backoff import BaseBackoffStrategy, ExponentialBackoff
from aretry.evaluator import BaseEvaluator, Failure, Outcome, Success
from aretry.retry.state import AttemptState

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)

# HTTP status codes that signal a transient failure
# 429: Too Many Requests - Rate limiting
# 500: Internal Server Error - Temporary server issue
# 502: Bad Gateway - Upstream server error
# 503: Service Unavailable - Server overloaded or down
# 504: Gateway Timeout - Upstream server timeout
RETRY_STATUS_CODES = (429, 500, 502, 503, 504)


class HttpStatusEvaluator(BaseEvaluator):
    """Evaluator for operations returning an ``httpx.Response``.

    A response whose status code is in ``status_forcelist`` is a failure
    carrying an ``httpx.HTTPStatusError``; an ``httpx.TransportError``
    (connection errors, timeouts, ...) is a failure carrying that error.
    Any other response is a success, whatever its status code, and any
    other exception propagates.

    Args:
        status_forcelist: The status codes handled as failures.

    Example:
        ```pycon
        >>> import httpx
        >>> from aretry.http import HttpStatusEvaluator
        >>> request = httpx.Request("GET", "https://example.com")
        >>> evaluator = HttpStatusEvaluator()
        >>> evaluator.evaluate(lambda: httpx.Response(200, request=request))
        Success(value=<Response [200 OK]>)
        >>> outcome = evaluator.evaluate(lambda: httpx.Response(503, request=request))
        >>> outcome.error.response.status_code
        503

        ```
    """

    def __init__(self, status_forcelist: tuple[int, ...] = RETRY_STATUS_CODES) -> None:
        self.status_forcelist = status_forcelist

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(status_forcelist={self.status_forcelist})"

    def evaluate(self, operation: Callable[[], httpx.Response]) -> Outcome:
        try:
            response = operation()
        except httpx.TransportError as exc:
            logger.debug(f"HTTP request failed with {type(exc).__name__}: {exc}")
            return Failure(exc)
        return self._judge(response)

    async def evaluate_async(self, operation: Callable[[], Any]) -> Outcome:
        try:
            response = operation()
            if inspect.isawaitable(response):
                response = await response
        except httpx.TransportError as exc:
            logger.debug(f"HTTP request failed with {type(exc).__name__}: {exc}")
            return Failure(exc)
        return self._judge(response)

    def _judge(self, response: httpx.Response) -> Outcome:
        if response.status_code not in self.status_forcelist:
            return Success(response)
        logger.debug(
            f"{response.request.method} request to {response.request.url} "
            f"failed with retryable status {response.status_code}"
        )
        return Failure(
            httpx.HTTPStatusError(
                f"{response.request.method} request to {response.request.url} "
                f"failed with status {response.status_code}",
                request=response.request,
                response=response,
            )
        )


def is_retryable_http_error(
    error: Exception, status_forcelist: tuple[int, ...] = RETRY_STATUS_CODES
) -> bool:
    """Eligibility predicate for HTTP errors.

    Args:
        error: The error of the failed attempt.
        status_forcelist: The retryable status codes.

    Returns:
        ``True`` for ``httpx.TransportError`` and for
        ``httpx.HTTPStatusError`` with a status in ``status_forcelist``,
        otherwise ``False``.

    Example:
        ```pycon
        >>> import httpx
        >>> from aretry.http import is_retryable_http_error
        >>> is_retryable_http_error(httpx.ConnectError("refused"))
        True
        >>> is_retryable_http_error(ValueError("bad payload"))
        False

        ```
    """
    if isinstance(error, httpx.TransportError):
        return True
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code in status_forcelist
    return False


def parse_retry_after(value: str | None) -> float | None:
    """Parse the value of a ``Retry-After`` header (RFC 7231).

    Both formats are supported: a number of seconds (``"120"``) and an
    HTTP-date (``"Wed, 21 Oct 2015 07:28:00 GMT"``). Dates in the past
    give 0.0.

    Args:
        value: The header value, or ``None`` if the header is absent.

    Returns:
        The number of seconds to wait, or ``None`` if the header is
        absent or cannot be parsed.

    Example:
        ```pycon
        >>> from aretry.http import parse_retry_after
        >>> parse_retry_after("120")
        120.0
        >>> parse_retry_after("Wed, 21 Oct 2015 07:28:00 GMT")
        0.0
        >>> parse_retry_after("soon") is None
        True

        ```
    """
    if value is None:
        return None

    with suppress(ValueError):
        return max(0.0, float(value))

    try:
        retry_date = parsedate_to_datetime(value)
    except (ValueError, TypeError, OverflowError):
        logger.debug(f"Failed to parse Retry-After header: {value!r}")
        return None
    if retry_date.tzinfo is None:
        retry_date = retry_date.replace(tzinfo=timezone.utc)
    return max(0.0, (retry_date - datetime.now(timezone.utc)).total_seconds())


def retry_after_delay(
    fallback: BaseBackoffStrategy | None = None, max_delay: float | None = None
) -> Callable[[Exception | None, int], float]:
    """Build a delay function honouring the ``Retry-After`` header.

    The returned function is meant for ``PredicateBackoff`` or
    ``retry_with_predicate_delay``.

    Args:
        fallback: The strategy used when the failed attempt carries no
            usable ``Retry-After`` header. Defaults to
            ``ExponentialBackoff()``.
        max_delay: Optional cap applied to every delay, in seconds.

    Returns:
        A function ``(error, attempt_number) -> seconds``.

    Example:
        ```pycon
        >>> import httpx
        >>> from aretry.http import retry_after_delay
        >>> get_delay = retry_after_delay()
        >>> request = httpx.Request("GET", "https://example.com")
        >>> response = httpx.Response(429, headers={"Retry-After": "3"}, request=request)
        >>> error = httpx.HTTPStatusError("limited", request=request, response=response)
        >>> get_delay(error, 1)
        3.0
        >>> get_delay(ValueError(), 2)
        1.0

        ```
    """
    strategy = fallback if fallback is not None else ExponentialBackoff()

    def get_delay(error: Exception | None, attempt: int) -> float:
        delay = None
        if isinstance(error, httpx.HTTPStatusError):
            delay = parse_retry_after(error.response.headers.get("Retry-After"))
            if delay is not None:
                logger.debug(f"Using Retry-After header value: {delay:.2f}s")
        if delay is None:
            delay = strategy.calculate(AttemptState(attempt=attempt - 1, error=error))
        if max_delay is not None:
            delay = min(delay, max_delay)
        return delay

    return get_delay
