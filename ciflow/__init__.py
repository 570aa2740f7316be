"""Programmable CI/CD execution engine.

Pipelines are trees of :class:`Workflow` and :class:`Step` objects run with an
ambient :class:`ExecutionContext`, deterministic LIFO cleanup and a
fixed-schedule :func:`retry` primitive.
"""

from .commands.cli_utils import __version__
from .config import (
    EngineSettings,
    Environment,
    EnvironmentSecret,
    FileSecret,
    GitHubPlatform,
    LocalPlatform,
    MissingEnvironmentSecretError,
    Platform,
    Secret,
    detect_platform,
)
from .errors import (
    CIFlowError,
    InternalWorkflowError,
    MissingEnvironmentVariableError,
    StepError,
    describe_error,
)
from .orchestration import (
    CleanupStack,
    ExecutionContext,
    Step,
    StepResult,
    StepStatus,
    Workflow,
    use_context,
)
from .services import Shell, ShellError
from .utils import RetryExhaustedError, RetryPolicy, retry, retry_async

__all__ = [
    "CIFlowError",
    "CleanupStack",
    "EngineSettings",
    "Environment",
    "EnvironmentSecret",
    "ExecutionContext",
    "FileSecret",
    "GitHubPlatform",
    "InternalWorkflowError",
    "LocalPlatform",
    "MissingEnvironmentSecretError",
    "MissingEnvironmentVariableError",
    "Platform",
    "RetryExhaustedError",
    "RetryPolicy",
    "Secret",
    "Shell",
    "ShellError",
    "Step",
    "StepError",
    "StepResult",
    "StepStatus",
    "Workflow",
    "__version__",
    "describe_error",
    "detect_platform",
    "retry",
    "retry_async",
    "use_context",
]
