"""
QuickNotes Backend — Startup Readiness Gate
=============================================

What:  Waits for the store to become reachable before the service starts.
How:   `await_readiness()` calls an async probe under a tenacity retry loop:
       fixed interval between failures, bounded number of attempts.
Who:   Called by the application lifespan with `store.ping` as the probe.
When:  Once, before the first request is served.

Policy (defaults from settings):
    max_attempts = 10      STARTUP_MAX_ATTEMPTS
    interval     = 3.0 s   STARTUP_RETRY_INTERVAL

Outcome:
    probe succeeds on attempt n ≤ max_attempts → returns n
    every attempt fails                        → StoreUnavailableError
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from quicknotes.config import Settings
from quicknotes.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Bounded, fixed-interval retry policy.

    Attributes:
        max_attempts: Total probe calls allowed (including the first)
        interval:     Seconds slept between a failed attempt and the next
    """
    max_attempts: int = 10
    interval: float = 3.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.interval < 0:
            raise ValueError("interval must not be negative")

    @classmethod
    def from_settings(cls, app_settings: Settings) -> "RetryPolicy":
        return cls(
            max_attempts=app_settings.startup_max_attempts,
            interval=app_settings.startup_retry_interval,
        )


async def await_readiness(
    probe: Callable[[], Awaitable[object]],
    policy: RetryPolicy,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> int:
    """
    Call `probe` until it succeeds or the policy's attempt budget is spent.

    Args:
        probe:  Async callable; any exception counts as a failed attempt
        policy: Attempt budget and fixed wait
        sleep:  Awaitable sleep used between attempts

    Returns:
        The 1-based attempt number on which the probe succeeded.

    Raises:
        StoreUnavailableError: All attempts failed. The last probe error is
            chained as __cause__.
    """

    def log_wait(retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            "Waiting for database... (%d/%d): %s",
            retry_state.attempt_number,
            policy.max_attempts,
            error,
        )

    retrying = AsyncRetrying(
        retry=retry_if_exception_type(Exception),
        stop=stop_after_attempt(policy.max_attempts),
        wait=wait_fixed(policy.interval),
        before_sleep=log_wait,
        sleep=sleep,
    )

    attempts = 0
    try:
        async for attempt in retrying:
            with attempt:
                await probe()
            attempts = attempt.retry_state.attempt_number
    except RetryError as e:
        last_error = e.last_attempt.exception() if e.last_attempt else None
        logger.error(
            "Database unreachable after %d attempts: %s",
            policy.max_attempts,
            last_error,
        )
        raise StoreUnavailableError(
            attempts=policy.max_attempts,
            context={"error_type": type(last_error).__name__ if last_error else None},
        ) from last_error

    logger.info("Connected to database (attempt %d/%d)", attempts, policy.max_attempts)
    return attempts
