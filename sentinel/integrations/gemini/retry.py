"""
Retry policy for Gemini calls.

`classify_error` sorts a failure into RATE_LIMITED or FATAL; `with_backoff`
retries only the former, sequentially, with exponential delays.

The google-genai SDK surfaces throttling as `errors.ClientError` with
`code=429` and `status="RESOURCE_EXHAUSTED"`; proxies and older SDK versions
sometimes only mention it in the message, so the message is checked too.
"""

import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Iterator, TypeVar

from sentinel.integrations.gemini.errors import GeminiError

logger = logging.getLogger(__name__)

T = TypeVar("T")

RATE_LIMIT_CODES = (429, "RESOURCE_EXHAUSTED")
RATE_LIMIT_MARKERS = ("429", "quota", "RESOURCE_EXHAUSTED")


class FailureKind(str, Enum):
    RATE_LIMITED = "rate_limited"
    FATAL = "fatal"


def _error_codes(exc: BaseException) -> Iterator[Any]:
    yield getattr(exc, "status", None)
    yield getattr(exc, "code", None)

    # Raw API payload: {"error": {"code": 429, "status": "RESOURCE_EXHAUSTED", ...}}
    details = getattr(exc, "details", None)
    if isinstance(details, dict):
        inner = details.get("error", details)
        if isinstance(inner, dict):
            yield inner.get("code")
            yield inner.get("status")


def _error_message(exc: BaseException) -> str:
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc)


def classify_error(exc: BaseException) -> FailureKind:
    # Our own errors (missing key, unusable response) are never throttling.
    if isinstance(exc, GeminiError):
        return FailureKind.FATAL

    if any(code in RATE_LIMIT_CODES for code in _error_codes(exc) if code is not None):
        return FailureKind.RATE_LIMITED

    message = _error_message(exc)
    if any(marker in message for marker in RATE_LIMIT_MARKERS):
        return FailureKind.RATE_LIMITED

    return FailureKind.FATAL


async def with_backoff(
    call: Callable[[], Awaitable[T]],
    *,
    max_attempts: int,
    initial_delay: float,
    multiplier: float = 2.0,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> T:
    """
    Await `call()` up to `max_attempts` times.

    Rate-limited failures sleep `initial_delay`, then `initial_delay * multiplier`,
    and so on before the next attempt. Fatal failures, and the rate-limited
    failure of the last attempt, are re-raised unchanged.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    delay = initial_delay
    attempt = 0
    while True:
        attempt += 1
        try:
            return await call()
        except Exception as e:
            if classify_error(e) is FailureKind.RATE_LIMITED and attempt < max_attempts:
                logger.warning(
                    f"[GEMINI] Rate limit hit. Retrying in {delay:.1f}s... (Attempt {attempt}/{max_attempts})"
                )
                await sleep(delay)
                delay *= multiplier
                continue
            raise
