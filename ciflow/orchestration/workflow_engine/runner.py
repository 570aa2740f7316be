"""Composition helpers for nesting steps and workflows."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Optional, Type, TypeVar, Union

from .context import ExecutionContext
from .results import StepResult, StepStatus

if TYPE_CHECKING:
    from .core import Workflow
    from .steps import Step

T = TypeVar("T")

StepLike = Union["Step[T]", Type["Step[T]"], Callable[[], "Step[T]"]]
WorkflowLike = Union["Workflow", Type["Workflow"], Callable[[], "Workflow"]]


class StepRunner:
    """Mixin giving workflows and steps the ``step`` / ``workflow`` calls."""

    @property
    def context(self) -> ExecutionContext:
        return ExecutionContext.current()

    @property
    def logger(self) -> logging.Logger:
        return self.context.logger

    async def step(self, step: StepLike, name: Optional[str] = None) -> Any:
        """Run a step and return its output.

        The step is registered for cleanup before it runs; its ``cleanup`` is
        deferred to the unwind at the end of the whole run.

        Args:
            step: A step, a step class, or a zero-argument factory returning one
            name: Display name overriding the step's own

        Returns:
            Whatever the step's ``run`` returns
        """
        context = ExecutionContext.current()
        if isinstance(step, type) or not hasattr(step, "run"):
            step = step()
        display_name = name or step.display_name

        record = StepResult(name=display_name, status=StepStatus.RUNNING)
        context.step_results.append(record)
        context.cleanup_stack.push(step, record)
        context.current_step = step
        try:
            context.logger.info(f"Step: {display_name}")
            output = await step.run()
        except BaseException as e:
            record.complete(error=e)
            raise
        finally:
            context.current_step = None

        record.complete()
        return output

    async def workflow(self, workflow: WorkflowLike) -> None:
        """Run a child workflow.

        The working directory is restored to its value before the call whether
        the child succeeds or fails.

        Args:
            workflow: A workflow instance, a workflow class, or a zero-argument
                factory returning a workflow
        """
        context = ExecutionContext.current()
        if isinstance(workflow, type) or not hasattr(workflow, "run"):
            workflow = workflow()

        directory = context.working_directory
        previous = context.current_workflow
        context.current_workflow = workflow
        try:
            context.logger.info(f"Workflow: {workflow.display_name}")
            await workflow.run()
        finally:
            context.current_workflow = previous
            try:
                context.working_directory = directory
            except OSError as e:
                context.logger.error(f"Failed to restore working directory {directory}: {e}")
