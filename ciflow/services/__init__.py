"""Services consumed by steps through the execution context."""

from .shell import Shell, ShellError, build_command_line

__all__ = ["Shell", "ShellError", "build_command_line"]
