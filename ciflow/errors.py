"""Error types shared across the engine."""
from __future__ import annotations

import inspect
from typing import Optional


class CIFlowError(Exception):
    """Base class for errors raised by the engine itself."""


class InternalWorkflowError(CIFlowError):
    """Fatal condition detected by the engine (never retried).

    Attributes:
        message: Human readable description of the failure
        location: ``file:line in function`` of the code that raised it
    """

    def __init__(self, message: str, location: Optional[str] = None) -> None:
        self.message = message
        if location is None:
            frame = inspect.currentframe()
            caller = frame.f_back if frame else None
            if caller is not None:
                location = (
                    f"{caller.f_code.co_filename}:{caller.f_lineno} "
                    f"in {caller.f_code.co_name}"
                )
        self.location = location
        super().__init__(message)

    def __str__(self) -> str:
        text = f"Internal Workflow Error: {self.message}"
        if self.location:
            text += f"\n({self.location})"
        return text


class StepError(CIFlowError):
    """Generic failure raised by a step's ``run``."""


class MissingEnvironmentVariableError(CIFlowError, KeyError):
    """Raised when a required environment variable is not set."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"Missing required environment variable: {self.key}"


def describe_error(error: BaseException) -> str:
    """Build the user-visible description of a terminal failure.

    The friendly message comes first. The raw ``repr`` is appended when it adds
    information, and the exception type name is used when the message is empty.

    Args:
        error: The failure that ended the run

    Returns:
        Multi-line description suitable for logging
    """
    friendly = str(error) or type(error).__name__
    raw = repr(error)
    if raw != friendly:
        return f"{friendly}\n{raw}"
    return friendly
