"""Global pytest fixtures and configuration.

This module provides shared fixtures for all tests including:
- A clean process environment (no CI or CIFLOW_* variables)
- Restoration of the working directory and logging configuration
- An injectable execution context with captured console output
"""
from __future__ import annotations

import io
import os
from typing import Dict, Generator

import pytest

from ciflow.config import Environment, LocalPlatform
from ciflow.orchestration import ExecutionContext
from ciflow.ui import ConsoleManager
from ciflow.utils import LoggingFactory

CI_VARIABLES = (
    "GITHUB_ACTIONS",
    "GITHUB_WORKSPACE",
    "GITHUB_HEAD_REF",
    "GITHUB_ACTOR",
    "GITHUB_EVENT_NAME",
    "GITHUB_EVENT_PATH",
    "GITHUB_EVENT_CONTENTS",
    "CIFLOW_LOG_LEVEL",
    "CIFLOW_LOG_FILE",
    "CIFLOW_NO_COLOR",
)


@pytest.fixture(autouse=True)
def clean_ci_env(monkeypatch):
    """Run every test as if outside CI, whatever runs the test suite."""
    for key in CI_VARIABLES:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def restore_cwd() -> Generator[None, None, None]:
    """Workflows change directory for real; put it back after each test."""
    cwd = os.getcwd()
    yield
    os.chdir(cwd)


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Detach handlers bound to per-test capture streams."""
    yield
    LoggingFactory.reset()


@pytest.fixture
def env_vars() -> Dict[str, str]:
    """Backing mapping for the test context's environment."""
    return {}


@pytest.fixture
def console() -> ConsoleManager:
    """Console writing to in-memory buffers."""
    return ConsoleManager(no_color=True, stdout=io.StringIO(), stderr=io.StringIO())


@pytest.fixture
def context(env_vars: Dict[str, str], console: ConsoleManager) -> ExecutionContext:
    """Fresh execution context with an isolated environment.

    Not bound by default: tests bind it with ``use_context`` or pass it to
    ``Workflow.main_async``.
    """
    environment = Environment(env_vars)
    return ExecutionContext(
        environment=environment,
        console=console,
        platform=LocalPlatform(environment),
    )
