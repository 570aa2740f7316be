"""Workflow contract and the top-level run.

A pipeline executable subclasses :class:`Workflow` and calls ``start()``::

    class Release(Workflow):
        log_level = logging.DEBUG

        async def run(self) -> None:
            await self.workflow(Build)
            await self.step(ShellCommand("swift test"))

    if __name__ == "__main__":
        Release.start()
"""

from __future__ import annotations

import asyncio
import logging
import sys
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence

from ...commands.cli_utils import parse_known
from ...config.settings import EngineSettings
from ...errors import InternalWorkflowError, describe_error
from ...utils.logging_factory import LoggingFactory
from .context import ExecutionContext, use_context
from .runner import StepRunner


class Workflow(StepRunner, ABC):
    """A named, leveled unit that sequences steps and nested workflows.

    Class Attributes:
        name: Display name (defaults to the class name)
        log_level: Logger level applied when this is the root workflow
    """

    name: Optional[str] = None
    log_level: int = logging.INFO

    @property
    def display_name(self) -> str:
        return self.name or type(self).__name__

    @abstractmethod
    async def run(self) -> None:
        """Sequence this workflow's steps and child workflows."""

    @classmethod
    def start(cls, argv: Optional[Sequence[str]] = None) -> None:
        """Run as the root workflow and exit the process with its status."""
        sys.exit(cls.main(argv))

    @classmethod
    def main(cls, argv: Optional[Sequence[str]] = None) -> int:
        """Run as the root workflow on a new event loop.

        Returns:
            Exit code (0 for success, 1 for failure)
        """
        return asyncio.run(cls.main_async(argv))

    @classmethod
    async def main_async(
        cls,
        argv: Optional[Sequence[str]] = None,
        context: Optional[ExecutionContext] = None,
        settings: Optional[EngineSettings] = None,
    ) -> int:
        """Set up, run this workflow as the root, unwind and report.

        The cleanup stack is drained on every exit path. Failures from setup or
        from the workflow are logged and turned into exit code 1; exceptions
        that are not ``Exception`` subclasses (e.g. ``KeyboardInterrupt``)
        propagate after unwinding.

        Args:
            argv: Command-line arguments (defaults to ``sys.argv[1:]``)
            context: Context to run in (defaults to a fresh one)
            settings: Engine settings (defaults to the ``CIFLOW_*`` environment)

        Returns:
            Exit code (0 for success, 1 for failure)
        """
        context = context or ExecutionContext()
        with use_context(context):
            return await cls._run_root(context, argv, settings)

    @classmethod
    async def _run_root(
        cls,
        context: ExecutionContext,
        argv: Optional[Sequence[str]],
        settings: Optional[EngineSettings],
    ) -> int:
        started = time.monotonic()
        error: Optional[BaseException] = None

        try:
            options, context.arguments = parse_known(argv)
            settings = settings or EngineSettings()
            cls._configure_logging(context, settings, options.verbose)

            workflow = cls()
            context.logger.info(f"Starting Workflow: {workflow.display_name}")

            cls._set_up_workspace(context, options.workspace)

            context.current_workflow = workflow
            await workflow.run()
        except BaseException as e:
            error = e
            if not isinstance(e, Exception):
                raise
        finally:
            await context.cleanup_stack.unwind(error, context.logger)

        if error is not None:
            context.logger.error(
                f"Exiting on error:\n{describe_error(error)}",
                exc_info=error if context.logger.isEnabledFor(logging.DEBUG) else None,
            )
            return 1

        context.logger.debug(
            f"Workflow {workflow.display_name} finished {len(context.step_results)} step(s) "
            f"in {time.monotonic() - started:.2f}s"
        )
        return 0

    @classmethod
    def _configure_logging(
        cls, context: ExecutionContext, settings: EngineSettings, verbose: bool
    ) -> None:
        declared = logging.DEBUG if verbose else cls.log_level
        level = settings.resolve_level(declared)
        if settings.no_color:
            context.console.disable_color()
        LoggingFactory.initialize(level=level, log_file=settings.log_file, console=context.console)
        context.logger.setLevel(level)

    @classmethod
    def _set_up_workspace(cls, context: ExecutionContext, workspace: Optional[Path]) -> None:
        if context.platform.is_ci:
            workspace = context.platform.workspace()
        elif workspace is None:
            raise InternalWorkflowError(
                "--workspace is required when not running in CI"
            )

        context.logger.debug(f"Setting current directory: {workspace}")
        try:
            context.working_directory = workspace
        except OSError as e:
            raise InternalWorkflowError(f"Failed to set current directory: {e}") from e
