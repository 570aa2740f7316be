"""Utility modules for the execution engine."""

from .logging_factory import LoggingFactory, get_logger, parse_level
from .retry import (
    RetryExhaustedError,
    RetryPolicy,
    calculate_delay,
    retry,
    retry_async,
)

__all__ = [
    "LoggingFactory",
    "RetryExhaustedError",
    "RetryPolicy",
    "calculate_delay",
    "get_logger",
    "parse_level",
    "retry",
    "retry_async",
]
