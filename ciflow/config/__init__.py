"""Configuration, platform detection and secret backends."""

from .environment import Environment
from .platforms import (
    GitHubPlatform,
    LocalPlatform,
    OtherEvent,
    Platform,
    PullRequestAction,
    PullRequestEvent,
    detect_platform,
)
from .secrets import (
    EnvironmentSecret,
    FileSecret,
    MissingEnvironmentSecretError,
    MissingFileSecretError,
    Secret,
    SecretDecodeError,
    SecretError,
)
from .settings import EngineSettings

__all__ = [
    "EngineSettings",
    "Environment",
    "EnvironmentSecret",
    "FileSecret",
    "GitHubPlatform",
    "LocalPlatform",
    "MissingEnvironmentSecretError",
    "MissingFileSecretError",
    "OtherEvent",
    "Platform",
    "PullRequestAction",
    "PullRequestEvent",
    "Secret",
    "SecretDecodeError",
    "SecretError",
    "detect_platform",
]
