"""
Workflow execution engine.

This package contains the engine components:
- context: Ambient execution context
- cleanup: LIFO cleanup stack drained at unwind
- steps: Step contract
- runner: step/workflow dispatch
- core: Workflow contract and top-level run
"""

from __future__ import annotations

from .cleanup import CleanupEntry, CleanupFailure, CleanupStack
from .context import ExecutionContext, use_context
from .core import Workflow
from .results import StepResult, StepStatus
from .runner import StepRunner
from .steps import Step

__all__ = [
    "CleanupEntry",
    "CleanupFailure",
    "CleanupStack",
    "ExecutionContext",
    "Step",
    "StepResult",
    "StepRunner",
    "StepStatus",
    "Workflow",
    "use_context",
]
