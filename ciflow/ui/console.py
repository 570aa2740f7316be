"""Console management with Rich integration.

Log records go to stderr through a ``RichHandler``; command output and CI
workflow commands (such as GitHub's ``::group::`` markers) go to stdout
verbatim so the CI runner can interpret them.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from rich.console import Console
from rich.logging import RichHandler


class ConsoleManager:
    """Manages console output with Rich integration."""

    def __init__(
        self,
        verbose: bool = False,
        no_color: bool = False,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ):
        self.verbose = verbose
        self.no_color = no_color
        self.console = Console(file=stderr or sys.stderr, no_color=no_color)
        self.output = Console(
            file=stdout or sys.stdout,
            no_color=no_color,
            highlight=False,
            markup=False,
            emoji=False,
            soft_wrap=True,
        )

    def create_log_handler(self) -> logging.Handler:
        """Build a Rich handler rendering log records on this console."""
        return RichHandler(
            console=self.console,
            show_time=True,
            show_path=self.verbose,
            rich_tracebacks=True,
            markup=False,
        )

    def disable_color(self) -> None:
        self.no_color = True
        self.console.no_color = True
        self.output.no_color = True

    def print_output(self, text: str) -> None:
        """Print captured command output."""
        if text:
            self.output.print(text)

    def print_markers(self, line: str) -> None:
        """Print a CI workflow command line without any styling."""
        self.output.print(line)
