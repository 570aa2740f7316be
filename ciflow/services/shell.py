"""Async shell adapter used by steps to run external commands."""

from __future__ import annotations

import asyncio
import logging
import os
import shlex
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional, Union

from ..errors import CIFlowError

if TYPE_CHECKING:
    from ..ui.console import ConsoleManager

logger = logging.getLogger(__name__)


class ShellError(CIFlowError):
    """Raised when a command exits with a non-zero status.

    Attributes:
        command: The full command line that was run
        returncode: Exit status of the process
        stdout: Captured standard output
        stderr: Captured standard error
    """

    def __init__(self, command: str, returncode: int, stdout: str = "", stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        message = f"Command failed with exit code {returncode}: {command}"
        if stderr:
            message += f"\n{stderr}"
        super().__init__(message)


def build_command_line(command: str, arguments: tuple) -> str:
    """Append shell-escaped ``arguments`` to ``command``."""
    escaped = [shlex.quote(str(argument)) for argument in arguments]
    return " ".join([command, *escaped])


class Shell:
    """Runs commands in the current working directory.

    ``command`` is passed to the shell as written, so it may contain its own
    arguments; extra ``arguments`` are escaped before being appended.
    """

    def __init__(
        self,
        console: Optional["ConsoleManager"] = None,
        cwd: Optional[Callable[[], Union[str, Path]]] = None,
    ):
        self.console = console
        self._cwd = cwd or os.getcwd

    async def __call__(self, command: str, *arguments: object, quiet: bool = False) -> str:
        """Run a command and return its standard output.

        Args:
            command: Command (with any unescaped arguments) to run
            *arguments: Additional arguments, escaped with ``shlex.quote``
            quiet: Don't print the output

        Returns:
            Standard output with trailing newlines removed

        Raises:
            ShellError: If the process exits with a non-zero status
        """
        command_line = build_command_line(command, arguments)
        cwd = str(self._cwd())
        logger.debug(f"Shell (at: {cwd}): {command_line}")

        proc = await asyncio.create_subprocess_shell(
            command_line,
            cwd=cwd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout_bytes, stderr_bytes = await proc.communicate()
        stdout = stdout_bytes.decode("utf-8", errors="replace").rstrip("\n")
        stderr = stderr_bytes.decode("utf-8", errors="replace").rstrip("\n")

        if proc.returncode != 0:
            raise ShellError(command_line, proc.returncode, stdout, stderr)

        if not quiet:
            if self.console is not None:
                self.console.print_output(stdout)
            elif stdout:
                print(stdout)
        return stdout
