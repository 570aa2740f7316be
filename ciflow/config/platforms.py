"""CI platform detection and platform-specific environment access."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import InternalWorkflowError
from .environment import Environment

logger = logging.getLogger(__name__)


class Platform:
    """A place the pipeline can run (a CI service or a developer machine)."""

    name = "Local"

    def __init__(self, environment: Optional[Environment] = None):
        self.environment = environment or Environment()

    @property
    def is_ci(self) -> bool:
        return False

    def workspace(self) -> Path:
        """Root directory of the checked-out repository."""
        raise InternalWorkflowError(f"{self.name} platform does not provide a workspace")

    def log_group_markers(self, name: str) -> Optional[Tuple[str, str]]:
        """Lines that open and close a collapsible log group, if supported."""
        return None


class LocalPlatform(Platform):
    """Running outside of any recognized CI service."""


class PullRequestAction(str, Enum):
    """Activity types of the GitHub ``pull_request`` event."""

    ASSIGNED = "assigned"
    UNASSIGNED = "unassigned"
    LABELED = "labeled"
    UNLABELED = "unlabeled"
    OPENED = "opened"
    EDITED = "edited"
    CLOSED = "closed"
    REOPENED = "reopened"
    SYNCHRONIZE = "synchronize"
    CONVERTED_TO_DRAFT = "converted_to_draft"
    READY_FOR_REVIEW = "ready_for_review"
    LOCKED = "locked"
    UNLOCKED = "unlocked"
    REVIEW_REQUESTED = "review_requested"
    REVIEW_REQUEST_REMOVED = "review_request_removed"
    AUTO_MERGE_ENABLED = "auto_merge_enabled"
    AUTO_MERGE_DISABLED = "auto_merge_disabled"


class GitRef(BaseModel):
    ref: str
    sha: str


class PullRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    number: int
    title: str
    body: Optional[str] = None
    is_draft: bool = Field(False, alias="draft")
    is_merged: bool = Field(False, alias="merged")
    base: GitRef
    head: GitRef


class PullRequestEvent(BaseModel):
    """Payload of a GitHub ``pull_request`` event (fields used by pipelines)."""

    model_config = ConfigDict(populate_by_name=True)

    action: PullRequestAction
    pull_request: PullRequest


@dataclass
class OtherEvent:
    """Any event this package does not decode."""

    name: str
    contents: bytes


GitHubEvent = Union[PullRequestEvent, OtherEvent]


class GitHubPlatform(Platform):
    """GitHub Actions.

    Reference: https://docs.github.com/en/actions/learn-github-actions/variables
    """

    name = "GitHub Actions"

    @classmethod
    def detect(cls, environment: Environment) -> bool:
        return bool(environment.flag("GITHUB_ACTIONS"))

    @property
    def is_ci(self) -> bool:
        return bool(self.environment.flag("GITHUB_ACTIONS"))

    def workspace(self) -> Path:
        return Path(self.environment.require("GITHUB_WORKSPACE"))

    @property
    def event_name(self) -> str:
        return self.environment.require("GITHUB_EVENT_NAME")

    def log_group_markers(self, name: str) -> Optional[Tuple[str, str]]:
        # https://docs.github.com/en/actions/using-workflows/workflow-commands-for-github-actions#grouping-log-lines
        if not self.is_ci:
            return None
        return f"::group::{name}", "::endgroup::"

    def _event_contents(self) -> bytes:
        if self.is_ci:
            return Path(self.environment.require("GITHUB_EVENT_PATH")).read_bytes()
        # Simulated events for local runs
        return self.environment.require("GITHUB_EVENT_CONTENTS").encode("utf-8")

    def event(self) -> Optional[GitHubEvent]:
        """Load the event that triggered the run.

        Returns:
            Decoded ``PullRequestEvent``, an ``OtherEvent`` for unhandled event
            names, or ``None`` when the event could not be read or decoded
        """
        try:
            name = self.event_name
            contents = self._event_contents()
        except (KeyError, OSError) as e:
            logger.error(f"Error while getting GitHub event details: {e}")
            return None

        if name != "pull_request":
            return OtherEvent(name=name, contents=contents)

        logger.debug(f"Decoding GitHub event payload {PullRequestEvent.__name__}")
        try:
            return PullRequestEvent.model_validate_json(contents)
        except ValidationError as e:
            logger.error(f"Failed to decode GitHub event {name}. Error:\n{e}")
            return None


def detect_platform(environment: Optional[Environment] = None) -> Platform:
    """Return the platform the process is running on."""
    environment = environment or Environment()
    if GitHubPlatform.detect(environment):
        return GitHubPlatform(environment)
    return LocalPlatform(environment)
