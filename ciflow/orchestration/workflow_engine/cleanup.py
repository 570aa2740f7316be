"""LIFO registry of steps awaiting teardown."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, List, Optional

if TYPE_CHECKING:
    from .results import StepResult
    from .steps import Step

logger = logging.getLogger(__name__)


@dataclass
class CleanupEntry:
    """A registered step and the diagnostics record of its run."""

    step: "Step"
    record: Optional["StepResult"] = None

    @property
    def name(self) -> str:
        if self.record is not None:
            return self.record.name
        return self.step.display_name


@dataclass
class CleanupFailure:
    """A cleanup that raised during unwind."""

    name: str
    error: BaseException


class CleanupStack:
    """Steps that have begun running, drained in reverse order at teardown.

    Entries are appended when a step is dispatched and popped from the end
    during :meth:`unwind`, so the most recently started (innermost) step is
    always cleaned up first.
    """

    def __init__(self) -> None:
        self._entries: List[CleanupEntry] = []

    def push(self, step: "Step", record: Optional["StepResult"] = None) -> None:
        self._entries.append(CleanupEntry(step=step, record=record))

    def pop(self) -> CleanupEntry:
        """Remove and return the most recently pushed entry.

        Raises:
            IndexError: If the stack is empty
        """
        return self._entries.pop()

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[CleanupEntry]:
        return iter(list(self._entries))

    async def unwind(
        self, error: Optional[BaseException] = None, log: Optional[logging.Logger] = None
    ) -> List[CleanupFailure]:
        """Invoke every registered cleanup, most recent first.

        Each entry is popped before its cleanup runs, so a cleanup runs at most
        once even if unwind is re-entered. A cleanup that raises is logged and
        the remaining entries are still unwound. The first exception that is not
        an ``Exception`` (e.g. ``CancelledError``) is re-raised once the stack is
        empty.

        Args:
            error: Terminal error of the run, ``None`` on success
            log: Logger for unwind messages (defaults to the module logger)

        Returns:
            Cleanup failures, in the order they occurred

        Raises:
            BaseException: The first non-``Exception`` raised by a cleanup
        """
        log = log or logger
        failures: List[CleanupFailure] = []
        interrupt: Optional[BaseException] = None

        while self._entries:
            entry = self._entries.pop()
            log.debug(f"Cleaning up: {entry.name}")
            try:
                await entry.step.cleanup(error)
            except BaseException as e:
                log.error(f"Cleanup failed for {entry.name}: {e}")
                failures.append(CleanupFailure(name=entry.name, error=e))
                if entry.record is not None:
                    entry.record.mark_cleaned_up(error=e)
                if not isinstance(e, Exception) and interrupt is None:
                    interrupt = e
            else:
                if entry.record is not None:
                    entry.record.mark_cleaned_up()

        if interrupt is not None:
            raise interrupt
        return failures
