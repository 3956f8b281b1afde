"""
Retrying call executor.

Wraps a one-shot async model call with bounded exponential backoff
(tenacity AsyncRetrying, classify_error as the retry predicate).

Classification (closed set, see ErrorKind):
- RETRYABLE: rate limit / quota exhaustion
    1. structured fields: code or status_code == 429, status contains RESOURCE_EXHAUSTED
    2. string fallback: "429", "RESOURCE_EXHAUSTED" or "quota" in the message,
       repr, or serialised error details (case-sensitive substring match)
- FATAL: everything else

Invariants:
- The same callable is awaited on every attempt
- Attempts are strictly sequential, never parallel
- Fatal errors and the final retryable error are re-raised unchanged
- Backoff suspends only the calling coroutine (asyncio.sleep, no jitter)
"""

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from .types import ErrorKind, RetryPolicy

logger = logging.getLogger(__name__)

T = TypeVar("T")

_RATE_LIMIT_CODE = 429
_RETRYABLE_MARKERS = ("429", "RESOURCE_EXHAUSTED", "quota")

Sleep = Callable[[float], Awaitable[Any]]


def _serialize_error(error: BaseException) -> str:
    """Best-effort serialisation of whatever structured payload the error carries."""
    payload = {}
    for attr in ("code", "status_code", "status", "details", "response_json"):
        value = getattr(error, attr, None)
        if value is not None:
            payload[attr] = value
    try:
        return json.dumps(payload, default=str)
    except (TypeError, ValueError):
        return str(payload)


def classify_error(error: BaseException) -> ErrorKind:
    """Return RETRYABLE for rate/quota exhaustion signatures, FATAL otherwise."""
    for attr in ("code", "status_code"):
        if getattr(error, attr, None) == _RATE_LIMIT_CODE:
            return ErrorKind.RETRYABLE

    status = getattr(error, "status", None)
    if isinstance(status, str) and "RESOURCE_EXHAUSTED" in status:
        return ErrorKind.RETRYABLE

    message = getattr(error, "message", None)
    haystacks = [
        message if isinstance(message, str) else "",
        str(error),
        repr(error),
        _serialize_error(error),
    ]
    for text in haystacks:
        if any(marker in text for marker in _RETRYABLE_MARKERS):
            return ErrorKind.RETRYABLE

    return ErrorKind.FATAL


def _is_retryable(error: BaseException) -> bool:
    return classify_error(error) is ErrorKind.RETRYABLE


def _log_before_sleep(policy: RetryPolicy) -> Callable[[RetryCallState], None]:
    """Build a before_sleep hook that logs attempt number and delay in ms."""

    def log(retry_state: RetryCallState) -> None:
        attempt = retry_state.attempt_number
        error = retry_state.outcome.exception()
        logger.warning(
            f"Model quota reached (429). Retrying in {policy.delay_ms(attempt - 1)}ms... "
            f"(Attempt {attempt}/{policy.max_retries}) reason={type(error).__name__}: {error}"
        )

    return log


async def call_with_retry(
    call: Callable[[], Awaitable[T]],
    policy: Optional[RetryPolicy] = None,
    sleep: Sleep = asyncio.sleep,
) -> T:
    """
    Await `call()` until it succeeds or the policy gives up.

    Args:
        call:   Zero-argument coroutine factory, invoked once per attempt
        policy: RetryPolicy (defaults: 5 attempts, 5000 ms base delay)
        sleep:  Awaitable sleep taking seconds (unit-test hook)

    Returns:
        Whatever `call()` returned on the first successful attempt.

    Raises:
        The exception from the failing attempt, unchanged, when it is
        fatal or when the last allowed attempt was rate-limited.
    """
    policy = policy or RetryPolicy()

    retrying = AsyncRetrying(
        stop=stop_after_attempt(policy.max_retries),
        wait=wait_exponential(multiplier=policy.initial_delay_ms / 1000, exp_base=2),
        retry=retry_if_exception(_is_retryable),
        before_sleep=_log_before_sleep(policy),
        sleep=sleep,
        reraise=True,
    )

    try:
        return await retrying(call)
    except Exception as e:
        if _is_retryable(e):
            logger.error(f"Retries exhausted after {policy.max_retries} attempts: {e}")
        raise
