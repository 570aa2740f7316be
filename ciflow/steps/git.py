"""Git commit step for pipelines that push generated changes back to a branch.

Reference: https://github.com/stefanzweifel/git-auto-commit-action/blob/master/entrypoint.sh
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, FrozenSet, List, Optional, Sequence

from ..orchestration import Step

DEFAULT_USER_NAME = "github-actions[bot]"
# Email address of the GitHub Actions bot
DEFAULT_USER_EMAIL = "41898282+github-actions[bot]@users.noreply.github.com"


class FileStatus(Enum):
    """Change markers of ``git status --short``."""

    ADDED = "A"
    MODIFIED = "M"
    DELETED = "D"
    UNTRACKED = "??"


@dataclass(frozen=True)
class GitFile:
    """A path and its changes as reported by ``git status --short``."""

    path: str
    status: FrozenSet[FileStatus]

    @classmethod
    def parse(cls, line: str) -> Optional["GitFile"]:
        """Parse one porcelain line, returning ``None`` for anything unrecognized."""
        line = line.strip()
        prefix, separator, rest = line.partition(" ")
        if not separator:
            return None

        status = frozenset(s for s in FileStatus if s.value in prefix)
        if not status:
            return None

        return cls(path=rest.strip().strip('"'), status=status)


@dataclass
class CommitOutput:
    commit_sha: Optional[str] = None

    @property
    def had_changes(self) -> bool:
        return self.commit_sha is not None


class GitCommit(Step[CommitOutput]):
    """Commit (and optionally push) changes on the pull request's head branch.

    Outside CI the commit and push run with ``--dry-run``.

    Args:
        message: Commit message
        flags: Single-letter ``git commit`` flags, e.g. ``["a"]`` for tracked changes
        author: Commit author, defaults to the triggering actor
        user_name: Committer name
        user_email: Committer email
        push: Push the commit to the head branch
        predicate: Stage only changed files whose path matches
    """

    name = "Git Commit"

    def __init__(
        self,
        message: str,
        flags: Sequence[str] = (),
        author: Optional[str] = None,
        user_name: Optional[str] = None,
        user_email: Optional[str] = None,
        push: bool = True,
        predicate: Optional[Callable[[str], bool]] = None,
    ):
        self.message = message
        self.flags = [flag for flag in flags if flag != "m"]
        self.author = author
        self.user_name = user_name or DEFAULT_USER_NAME
        self.user_email = user_email or DEFAULT_USER_EMAIL
        self.push = push
        self.predicate = predicate

    @classmethod
    def localized_files(cls, message: str) -> "GitCommit":
        """Commit only localization resources."""
        suffixes = (".strings", ".xliff", ".xcloc", ".lproj")
        return cls(message, predicate=lambda path: path.endswith(suffixes))

    async def run(self) -> CommitOutput:
        shell = self.context.shell
        environment = self.context.environment
        is_ci = self.context.platform.is_ci

        if self.predicate is not None and not await self._stage_matching_files():
            return CommitOutput()

        if not await shell("git status -s", quiet=True):
            return CommitOutput()

        branch = environment.require("GITHUB_HEAD_REF")
        await shell("git fetch --depth=1")
        await shell("git checkout", branch)

        actor = environment.require("GITHUB_ACTOR")
        author = self.author or f"{actor} <{actor}@users.noreply.github.com>"

        commit: List[str] = [
            "-c", f"user.name={self.user_name}",
            "-c", f"user.email={self.user_email}",
            "commit",
            "-m", self.message,
            f"--author={author}",
        ]
        if self.flags:
            commit.append("-" + "".join(self.flags))
        if not is_ci:
            commit.append("--dry-run")
        await shell("git", *commit)

        sha = await shell("git rev-parse HEAD", quiet=True)

        if self.push:
            push = ["--set-upstream", "origin", f"HEAD:{branch}", "--atomic"]
            if not is_ci:
                push.append("--dry-run")
            await shell("git push", *push)

        return CommitOutput(commit_sha=sha)

    async def _stage_matching_files(self) -> bool:
        shell = self.context.shell
        with self.context.log_group("Step: Commit Files Matching Predicate"):
            self.logger.info("Committing files matching predicate.")

            status = await shell("git status --short", quiet=True)
            files = [f for f in map(GitFile.parse, status.splitlines()) if f is not None]
            to_commit = [f for f in files if self.predicate(f.path)]

            self.logger.debug(f"Files with changes: {[f.path for f in files]}")
            self.logger.debug(f"Files to commit: {[f.path for f in to_commit]}")

            if not to_commit:
                self.logger.info("No files to commit.")
                return False

            for file in to_commit:
                if FileStatus.DELETED in file.status:
                    await shell("git rm --cached", file.path)
                else:
                    await shell("git add", file.path)
        return True
