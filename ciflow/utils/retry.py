"""Retry utilities with a fixed backoff schedule for eventually-consistent calls."""
from __future__ import annotations

import asyncio
import functools
import logging
import random
from dataclasses import dataclass, field
from typing import (
    Any,
    Awaitable,
    Callable,
    Iterable,
    List,
    Optional,
    Tuple,
    Type,
    TypeVar,
)

logger = logging.getLogger(__name__)

R = TypeVar("R")
AsyncF = TypeVar("AsyncF", bound=Callable[..., Any])

SleepFunc = Callable[[float], Awaitable[Any]]


class RetryExhaustedError(Exception):
    """Raised when the delays ran out without any failure being recorded.

    Attributes:
        attempts: Number of attempts made
        last_exception: The final exception seen, if any
    """

    def __init__(self, attempts: int, last_exception: Optional[BaseException] = None) -> None:
        self.attempts = attempts
        self.last_exception = last_exception
        super().__init__(
            f"Retry exhausted after {attempts} attempts. Last error: {last_exception}"
        )


def calculate_delay(
    attempt: int, base_delay: float, max_delay: float, exponential_base: float, jitter: bool = True
) -> float:
    """Calculate delay for a given retry attempt with exponential backoff and jitter.

    Args:
        attempt: Current attempt number (0-based)
        base_delay: Base delay in seconds
        max_delay: Maximum delay in seconds
        exponential_base: Base for exponential calculation
        jitter: Whether to add random jitter

    Returns:
        Calculated delay in seconds, always between 0 and max_delay
    """
    if attempt == 0:
        return 0.0

    base_backoff = min(base_delay * (exponential_base ** (attempt - 1)), max_delay)

    if jitter:
        # ±25% random jitter
        jitter_range = base_backoff * 0.25
        base_backoff += random.uniform(-jitter_range, jitter_range)

    return max(0, min(base_backoff, max_delay))


@dataclass
class RetryPolicy:
    """Ordered sequence of delays, consumed left to right.

    Attributes:
        delays: Remaining delays in seconds
    """

    delays: List[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.delays = [float(delay) for delay in self.delays]
        for delay in self.delays:
            if delay < 0:
                raise ValueError("retry delays must be non-negative")

    @classmethod
    def exponential(
        cls,
        retries: int,
        base_delay: float = 1.0,
        max_delay: float = 60.0,
        exponential_base: float = 2.0,
        jitter: bool = False,
    ) -> "RetryPolicy":
        """Build a policy whose delays follow exponential backoff.

        Args:
            retries: Number of retries (delays) to generate
            base_delay: Delay before the first retry
            max_delay: Ceiling for any single delay
            exponential_base: Growth factor between delays
            jitter: Whether to add ±25% jitter to each delay

        Returns:
            RetryPolicy with ``retries`` delays
        """
        if retries < 0:
            raise ValueError("retries must be non-negative")
        return cls(
            [
                calculate_delay(attempt, base_delay, max_delay, exponential_base, jitter)
                for attempt in range(1, retries + 1)
            ]
        )

    @property
    def exhausted(self) -> bool:
        return not self.delays

    @property
    def max_attempts(self) -> int:
        return len(self.delays) + 1

    def consume(self) -> float:
        """Remove and return the next delay."""
        return self.delays.pop(0)


async def retry(
    delays: Iterable[float],
    operation: Callable[[], Awaitable[R]],
    *,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    sleep: Optional[SleepFunc] = None,
) -> R:
    """Run ``operation`` until it succeeds or the delays are used up.

    Each failure consumes the first remaining delay and waits for it before the
    next attempt. Once no delays remain, the most recent failure is re-raised
    unchanged. An empty ``delays`` means a single attempt.

    Args:
        delays: Seconds to wait between attempts, in order
        operation: Zero-argument coroutine function to attempt
        retry_on: Exception types that trigger another attempt
        sleep: Awaitable sleep function (defaults to ``asyncio.sleep``)

    Returns:
        The result of the first successful attempt

    Example:
        comment = await retry([1, 2, 3], fetch_comment)
    """
    policy = RetryPolicy(list(delays))
    sleep = sleep or asyncio.sleep
    last_exception: Optional[BaseException] = None

    for attempt in range(1, policy.max_attempts + 1):
        try:
            result = await operation()
        except retry_on as e:
            last_exception = e
            logger.debug(f"Attempt {attempt} failed: {e}")

            if policy.exhausted:
                logger.debug("All attempts failed. Not retrying.")
                raise

            delay = policy.consume()
            logger.debug(f"Retrying in {delay}s...")
            await sleep(delay)
            continue

        if attempt > 1:
            logger.debug(f"Successful after {attempt - 1} retry attempt(s)")
        return result

    raise RetryExhaustedError(policy.max_attempts, last_exception)


def retry_async(
    delays: Iterable[float],
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    sleep: Optional[SleepFunc] = None,
) -> Callable[[AsyncF], AsyncF]:
    """Decorator form of :func:`retry` for coroutine functions.

    A fresh policy is built from ``delays`` on every call.

    Example:
        @retry_async([1, 2, 5])
        async def fetch_build_status():
            ...
    """
    schedule = list(delays)

    def decorator(func: AsyncF) -> AsyncF:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            return await retry(
                schedule, lambda: func(*args, **kwargs), retry_on=retry_on, sleep=sleep
            )

        return wrapper  # type: ignore

    return decorator
