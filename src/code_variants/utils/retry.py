"""Async retry utility with exponential backoff for overloaded remote services."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from code_variants.constants import TRANSIENT_ERROR_MARKERS

T = TypeVar("T")
LOGGER = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[object]]


def is_transient_error(error: BaseException) -> bool:
    """Best-effort check for overload signals in the remote error text.

    The remote service exposes no stable error codes to callers, so this
    matches on wording and may misclassify if that wording changes.
    """

    message = str(error)
    return any(marker in message for marker in TRANSIENT_ERROR_MARKERS)


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    initial_delay_ms: float = 1000,
    *,
    sleep: SleepFn | None = None,
) -> T:
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1.")
    if initial_delay_ms < 0:
        raise ValueError("initial_delay_ms cannot be negative.")

    pause = sleep or asyncio.sleep
    for attempt in range(max_attempts):
        try:
            return await operation()
        except Exception as error:
            if attempt == max_attempts - 1 or not is_transient_error(error):
                raise

            delay_ms = initial_delay_ms * (2**attempt)
            LOGGER.warning(
                "Attempt %s/%s failed. Retrying in %sms...",
                attempt + 1,
                max_attempts,
                delay_ms,
            )
            await pause(delay_ms / 1000)

    # Unreachable: the last attempt always returns or raises.
    raise RuntimeError("Retry loop exited without a result.")  # pragma: no cover


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    initial_delay_ms: float = 1000

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        if self.initial_delay_ms < 0:
            raise ValueError("initial_delay_ms cannot be negative.")

    async def run(self, operation: Callable[[], Awaitable[T]], *, sleep: SleepFn | None = None) -> T:
        return await retry_with_backoff(
            operation,
            max_attempts=self.max_attempts,
            initial_delay_ms=self.initial_delay_ms,
            sleep=sleep,
        )
