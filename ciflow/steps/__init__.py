"""Built-in steps."""

from .git import CommitOutput, FileStatus, GitCommit, GitFile
from .polling import DEFAULT_POLL_DELAYS, PollUntil
from .shell import SetEnvironment, ShellCommand

__all__ = [
    "CommitOutput",
    "DEFAULT_POLL_DELAYS",
    "FileStatus",
    "GitCommit",
    "GitFile",
    "PollUntil",
    "SetEnvironment",
    "ShellCommand",
]
