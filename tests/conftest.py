"""Pytest configuration and fixtures for corpus-namer tests."""

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
from rich.console import Console

from corpus_namer.core.schemas import FilenameRecord
from corpus_namer.sync.repo_sync import RepoSync


class FakeRepoSync(RepoSync):
    """In-process RepoSync that records calls instead of running git."""

    def __init__(
        self,
        root: Path,
        *,
        repo: bool = True,
        upstream: bool = True,
        succeed: bool = True,
    ) -> None:
        super().__init__(root)
        self.repo = repo
        self.upstream = upstream
        self.succeed = succeed
        self.pulls = 0
        self.commits: list[tuple[list[Path], str]] = []

    def has_repo(self) -> bool:
        return self.repo

    def has_upstream(self) -> bool:
        return self.upstream

    def pull(self) -> bool:
        self.pulls += 1
        return self.succeed

    def stage_commit_push(self, paths: Sequence[Path], message: str) -> bool:
        self.commits.append((list(paths), message))
        return self.succeed


@pytest.fixture
def make_sync() -> Callable[..., FakeRepoSync]:
    """Factory for FakeRepoSync with custom repo/upstream/succeed flags."""
    return FakeRepoSync


@pytest.fixture
def creator_folder(tmp_path: Path) -> Path:
    """Empty contributor directory for creator 07."""
    folder = tmp_path / "07_alice"
    folder.mkdir()
    return folder


@pytest.fixture
def quiet_console() -> Console:
    return Console(quiet=True)


@pytest.fixture
def ws_template() -> FilenameRecord:
    """WS / creator 07 / chapter 2 / L3 / MATH, sequence to be allocated."""
    return FilenameRecord(
        series="WS",
        creator_id=7,
        sequence=0,
        chapter=2,
        difficulty="L3",
        kind="MATH",
    )
