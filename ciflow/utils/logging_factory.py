"""Centralized logging factory for consistent logger creation across the engine.

All engine loggers live under the ``ciflow`` hierarchy, so configuring that one
logger sets the level for step/workflow messages, retry attempts and unwind
failures alike.

Usage:
    # Attach handlers and set the level (repeat calls adjust both)
    LoggingFactory.initialize(level=logging.DEBUG)

    logger = get_logger(__name__)
    logger.info("Pipeline started")
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from rich.logging import RichHandler

if TYPE_CHECKING:
    from ..ui.console import ConsoleManager

ROOT_LOGGER_NAME = "ciflow"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class LoggingFactory:
    """Factory for creating and configuring engine loggers consistently.

    The root workflow's declared level is applied at every ``main`` entry.
    Handlers are kept between calls and replaced only when a different
    console or log file is passed, so repeated runs in one process log to the
    console and file of the latest run.

    Class Attributes:
        _console: Console manager the console handler renders to
        _console_handler: Handler attached for ``_console``
        _log_file: Optional file receiving a plain-text copy of the log
        _file_handler: Handler attached for ``_log_file``
    """

    _console: Optional["ConsoleManager"] = None
    _console_handler: Optional[logging.Handler] = None
    _log_file: Optional[Path] = None
    _file_handler: Optional[logging.Handler] = None

    @classmethod
    def initialize(
        cls,
        level: int = logging.INFO,
        log_file: Optional[Path] = None,
        console: Optional["ConsoleManager"] = None,
        format_string: Optional[str] = None,
    ) -> logging.Logger:
        """Configure the ``ciflow`` logger.

        Args:
            level: Minimum level for engine messages
            log_file: Optional path for an additional file handler
            console: Console manager whose rich console renders the log
            format_string: Format for the file handler

        Returns:
            The configured ``ciflow`` logger
        """
        logger = logging.getLogger(ROOT_LOGGER_NAME)
        logger.setLevel(level)

        if cls._console_handler is None or (console is not None and console is not cls._console):
            if console is not None:
                handler = console.create_log_handler()
            else:
                handler = RichHandler(show_path=False, rich_tracebacks=True)
            cls._replace_handler(logger, cls._console_handler, handler)
            cls._console = console
            cls._console_handler = handler

        if log_file and Path(log_file) != cls._log_file:
            path = Path(log_file)
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(path)
            file_handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
            cls._replace_handler(logger, cls._file_handler, file_handler)
            cls._log_file = path
            cls._file_handler = file_handler

        return logger

    @staticmethod
    def _replace_handler(
        logger: logging.Logger, old: Optional[logging.Handler], new: logging.Handler
    ) -> None:
        if old is not None:
            old.close()
            logger.removeHandler(old)
        logger.addHandler(new)

    @classmethod
    def reset(cls) -> None:
        """Detach every handler added by :meth:`initialize`."""
        logger = logging.getLogger(ROOT_LOGGER_NAME)
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
        cls._console = None
        cls._console_handler = None
        cls._log_file = None
        cls._file_handler = None

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get a logger for the given module name.

        Args:
            name: Module name, typically ``__name__``

        Returns:
            Logger instance
        """
        return logging.getLogger(name)

    @classmethod
    def configure_verbose(cls, verbose: bool = False) -> None:
        """Switch the engine loggers between INFO and DEBUG."""
        level = logging.DEBUG if verbose else logging.INFO
        logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Convenience wrapper around :meth:`LoggingFactory.get_logger`."""
    return LoggingFactory.get_logger(name)


def parse_level(value: str) -> int:
    """Translate a level name such as ``"debug"`` into its numeric value.

    Raises:
        ValueError: If the name is not a standard logging level
    """
    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value}")
    return level
