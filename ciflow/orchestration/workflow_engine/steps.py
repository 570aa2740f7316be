"""The unit-of-work contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

from .runner import StepRunner

T = TypeVar("T")


class Step(StepRunner, ABC, Generic[T]):
    """A unit of work with a typed output and optional cleanup.

    Subclasses implement :meth:`run`. State needed by :meth:`cleanup` is kept
    on the instance; each dispatch should use a fresh instance.

    Example:
        class Build(Step[str]):
            name = "Swift Build"

            async def run(self) -> str:
                return await self.context.shell("swift build")
    """

    name: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or type(self).__name__

    @abstractmethod
    async def run(self) -> T:
        """Perform the work and return its output."""

    async def cleanup(self, error: Optional[BaseException]) -> None:
        """Undo side effects of :meth:`run`.

        Called once during unwind, after the whole run has finished.

        Args:
            error: Terminal error of the run, ``None`` if it succeeded
        """
