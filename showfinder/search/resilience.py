"""Shared resilience helpers for transient API failures and payload guards."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

from aiohttp import ClientConnectionError, ClientResponseError, ServerTimeoutError

RETRYABLE_HTTP_STATUSES = {429, 500, 502, 503, 504}
THROTTLE_SHAPE_HINT = "possible rate-limit/throttle response"

_T = TypeVar("_T")


def expect_dict(value: object, context: str) -> dict:
    if isinstance(value, dict):
        return value
    value_type = type(value).__name__
    raise ValueError(f"{context} has unexpected type '{value_type}' ({THROTTLE_SHAPE_HINT})")


def optional_list(container: dict, key: str, context: str) -> list:
    value = container.get(key, [])
    if value is None:
        return []
    if isinstance(value, list):
        return value
    value_type = type(value).__name__
    raise ValueError(f"{context}.{key} has unexpected type '{value_type}' ({THROTTLE_SHAPE_HINT})")


def optional_list_of_dicts(container: dict, key: str, context: str) -> list[dict]:
    values = optional_list(container, key, context)
    output: list[dict] = []
    for idx, value in enumerate(values):
        output.append(expect_dict(value, f"{context}.{key}[{idx}]"))
    return output


def is_retryable_status(status: int) -> bool:
    return status in RETRYABLE_HTTP_STATUSES


def is_retryable_exception(exc: Exception) -> bool:
    return (
        isinstance(exc, (asyncio.TimeoutError, ClientConnectionError, ServerTimeoutError))
        or (isinstance(exc, ClientResponseError) and exc.status in RETRYABLE_HTTP_STATUSES)
    )


def retry_delay_seconds(*, attempt: int, retry_after: str | None) -> int:
    """Honor a positive Retry-After header, else back off exponentially."""
    if retry_after:
        try:
            value = int(float(retry_after))
        except (TypeError, ValueError):
            value = 0
        if value > 0:
            return value
    return 2 ** attempt


async def run_with_retries(
    operation: Callable[[], Awaitable[_T]],
    *,
    max_attempts: int,
    on_retry: Callable[[int, int, int, Exception], None] | None = None,
) -> _T:
    for attempt in range(1, max_attempts + 1):
        try:
            return await operation()
        except Exception as exc:
            if attempt >= max_attempts or not is_retryable_exception(exc):
                raise
            delay = 2 ** attempt
            if on_retry is not None:
                on_retry(attempt, max_attempts, delay, exc)
            await asyncio.sleep(delay)
    raise RuntimeError("Unreachable retry exit")
