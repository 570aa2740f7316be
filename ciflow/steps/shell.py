"""Steps wrapping shell commands and environment changes."""
from __future__ import annotations

from typing import Dict, Optional

from ..orchestration import Step


class ShellCommand(Step[str]):
    """Run a command through the context's shell and return its output."""

    def __init__(self, command: str, *arguments: object, quiet: bool = False, name: Optional[str] = None):
        self.command = command
        self.arguments = arguments
        self.quiet = quiet
        if name is not None:
            self.name = name

    @property
    def display_name(self) -> str:
        return self.name or f"Shell: {self.command}"

    async def run(self) -> str:
        return await self.context.shell(self.command, *self.arguments, quiet=self.quiet)


class SetEnvironment(Step[None]):
    """Export environment variables for the rest of the run.

    Cleanup puts back the previous values and removes variables that did not
    exist before.
    """

    name = "Set Environment"

    def __init__(self, **values: str):
        self.values = values
        self._previous: Dict[str, Optional[str]] = {}

    async def run(self) -> None:
        environment = self.context.environment
        for key, value in self.values.items():
            if key not in self._previous:
                self._previous[key] = environment.get(key)
            environment.set(key, value)
            self.logger.debug(f"Set environment variable {key}")

    async def cleanup(self, error: Optional[BaseException]) -> None:
        environment = self.context.environment
        for key, value in self._previous.items():
            if value is None:
                environment.unset(key)
            else:
                environment.set(key, value)
        self._previous.clear()
