"""Ambient execution context shared by every step and workflow.

The active context lives in a :class:`contextvars.ContextVar`, so any code in
the call tree can reach it through :meth:`ExecutionContext.current` without it
being passed through every signature. Tests bind their own instance with
:func:`use_context`.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterator, List, Optional, Union

from ...config.environment import Environment
from ...config.platforms import Platform, detect_platform
from ...config.secrets import Secret
from ...services.shell import Shell
from ...ui.console import ConsoleManager
from ...utils.logging_factory import ROOT_LOGGER_NAME
from .cleanup import CleanupStack

if TYPE_CHECKING:
    from .results import StepResult

_current_context: ContextVar[Optional["ExecutionContext"]] = ContextVar(
    "ciflow_execution_context", default=None
)


class ExecutionContext:
    """Process-wide state container for a pipeline run.

    Attributes:
        logger: Log sink for engine and step messages
        environment: Environment variable facade
        console: Console used for command output and log groups
        platform: The CI platform the process runs on
        shell: Adapter for running external commands
        cleanup_stack: Steps awaiting teardown
        current_step: Step presently executing (diagnostics only)
        current_workflow: Workflow presently executing (diagnostics only)
        step_results: One record per dispatched step, in dispatch order
        arguments: Command-line arguments not consumed by the engine
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        environment: Optional[Environment] = None,
        console: Optional[ConsoleManager] = None,
        platform: Optional[Platform] = None,
        shell: Optional[Shell] = None,
    ):
        self.logger = logger or logging.getLogger(ROOT_LOGGER_NAME)
        self.environment = environment or Environment()
        self.console = console or ConsoleManager()
        self.platform = platform or detect_platform(self.environment)
        self.shell = shell or Shell(console=self.console, cwd=lambda: self.working_directory)
        self.cleanup_stack = CleanupStack()
        self.current_step: Optional[Any] = None
        self.current_workflow: Optional[Any] = None
        self.step_results: List["StepResult"] = []
        self.arguments: List[str] = []

    @classmethod
    def current(cls) -> "ExecutionContext":
        """Return the bound context, binding a default one on first use."""
        context = _current_context.get()
        if context is None:
            context = cls()
            _current_context.set(context)
        return context

    @property
    def working_directory(self) -> Path:
        return Path(os.getcwd())

    @working_directory.setter
    def working_directory(self, path: Union[str, Path]) -> None:
        os.chdir(path)

    async def load_secret(self, secret: Secret) -> bytes:
        return await secret.get()

    async def load_secret_text(self, secret: Secret, encoding: str = "utf-8") -> str:
        return (await secret.get()).decode(encoding)

    @contextmanager
    def log_group(self, name: str) -> Iterator[None]:
        """Wrap output in a collapsible group on platforms that support one."""
        markers = self.platform.log_group_markers(name)
        if markers is None:
            yield
            return

        start, end = markers
        self.console.print_markers(start)
        try:
            yield
        finally:
            self.console.print_markers(end)


@contextmanager
def use_context(context: ExecutionContext) -> Iterator[ExecutionContext]:
    """Bind ``context`` as the current context for the duration of the block."""
    token = _current_context.set(context)
    try:
        yield context
    finally:
        _current_context.reset(token)
