"""Repository synchronisation after a committed mutation.

RepoSync is the narrow interface the CLI talks to; GitRepoSync implements it
by running ``git`` in the repository root. Every call is best-effort: a
failure is logged and reported as ``False``, never raised.
"""

import os
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import structlog

from corpus_namer.core.constants import SYNC_ENV_VAR
from corpus_namer.utils.debug import debug


def sync_enabled(no_sync: bool = False) -> bool:
    """Whether post-commit sync should run.

    Args:
        no_sync: Explicit opt-out from the command line

    Returns:
        False if no_sync is set or CORPUS_NAMER_SYNC is 0/false/no
    """
    if no_sync:
        return False
    return os.getenv(SYNC_ENV_VAR, "1").strip().lower() not in ("0", "false", "no")


class RepoSync(ABC):
    """Version-control operations invoked strictly after a commit."""

    def __init__(self, root: Path) -> None:
        self.root = root

    @abstractmethod
    def has_repo(self) -> bool:
        """Return True if root is a repository."""

    @abstractmethod
    def has_upstream(self) -> bool:
        """Return True if the current branch tracks a remote branch."""

    @abstractmethod
    def pull(self) -> bool:
        """Rebase local work onto the upstream branch."""

    @abstractmethod
    def stage_commit_push(self, paths: Sequence[Path], message: str) -> bool:
        """Stage paths (including deletions), commit and push."""


class GitRepoSync(RepoSync):
    """RepoSync backed by the git command-line tool."""

    def __init__(self, root: Path, logger: Any = None, git: str = "git") -> None:
        super().__init__(root)
        self.git = git
        self._logger = (logger or structlog.get_logger()).bind(repo=str(root))

    def _run(self, *args: str) -> bool:
        """Run a git command in the repository root."""
        cmd = [self.git, *args]
        try:
            subprocess.run(
                cmd,
                cwd=self.root,
                capture_output=True,
                text=True,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            self._logger.warning(
                "repo_sync.command_failed",
                cmd=" ".join(cmd),
                returncode=e.returncode,
                stderr=(e.stderr or "").strip(),
            )
            return False
        except OSError as e:
            self._logger.warning("repo_sync.git_unavailable", cmd=" ".join(cmd), error=str(e))
            return False

        debug(f"git ok: {' '.join(cmd)}")
        return True

    def has_repo(self) -> bool:
        return (self.root / ".git").exists()

    def has_upstream(self) -> bool:
        return self._run("rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{u}")

    def pull(self) -> bool:
        return self._run("pull", "--rebase")

    def stage_commit_push(self, paths: Sequence[Path], message: str) -> bool:
        if not paths:
            return False
        staged = self._run("add", "-A", "--", *(str(p) for p in paths))
        committed = staged and self._run("commit", "-m", message)
        pushed = committed and self._run("push")
        self._logger.info(
            "repo_sync.stage_commit_push",
            message=message,
            staged=staged,
            committed=committed,
            pushed=pushed,
        )
        return pushed


def create_repo_sync(root: Path) -> RepoSync:
    return GitRepoSync(root)
