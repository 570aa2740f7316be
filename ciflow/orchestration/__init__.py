"""Workflow orchestration."""

from .workflow_engine import (
    CleanupStack,
    ExecutionContext,
    Step,
    StepResult,
    StepRunner,
    StepStatus,
    Workflow,
    use_context,
)

__all__ = [
    "CleanupStack",
    "ExecutionContext",
    "Step",
    "StepResult",
    "StepRunner",
    "StepStatus",
    "Workflow",
    "use_context",
]
