"""Step that polls an eventually-consistent system until it answers."""
from __future__ import annotations

from typing import Awaitable, Callable, Iterable, Optional, Tuple, Type, TypeVar

from ..orchestration import Step
from ..utils.retry import SleepFunc, retry

T = TypeVar("T")

# Delays (seconds) used when polling a remote API for a resource that was just created.
DEFAULT_POLL_DELAYS = (1, 2, 3, 5, 10, 15, 30, 60)


class PollUntil(Step[T]):
    """Retry ``operation`` on the given delays and return its first success."""

    def __init__(
        self,
        operation: Callable[[], Awaitable[T]],
        delays: Iterable[float] = DEFAULT_POLL_DELAYS,
        name: Optional[str] = None,
        retry_on: Tuple[Type[BaseException], ...] = (Exception,),
        sleep: Optional[SleepFunc] = None,
    ):
        self.operation = operation
        self.delays = tuple(delays)
        self.retry_on = retry_on
        self.sleep = sleep
        if name is not None:
            self.name = name

    async def run(self) -> T:
        return await retry(self.delays, self.operation, retry_on=self.retry_on, sleep=self.sleep)
