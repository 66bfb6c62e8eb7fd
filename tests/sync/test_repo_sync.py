"""Tests for the git-backed RepoSync implementation."""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from corpus_namer.sync.repo_sync import GitRepoSync, sync_enabled


def _completed(cmd: list[str]) -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")


class TestGitRepoSync:
    """Test git invocation without touching a real repository."""

    def test_has_repo_checks_git_dir(self, tmp_path: Path) -> None:
        sync = GitRepoSync(tmp_path)
        assert not sync.has_repo()

        (tmp_path / ".git").mkdir()
        assert sync.has_repo()

    def test_commands_run_in_root(self, tmp_path: Path) -> None:
        sync = GitRepoSync(tmp_path)

        with patch("subprocess.run", side_effect=lambda cmd, **kw: _completed(cmd)) as run:
            assert sync.has_upstream()
            assert sync.pull()

        cmds = [call.args[0] for call in run.call_args_list]
        assert cmds == [
            ["git", "rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{u}"],
            ["git", "pull", "--rebase"],
        ]
        assert all(call.kwargs["cwd"] == tmp_path for call in run.call_args_list)

    def test_stage_commit_push_sequence(self, tmp_path: Path) -> None:
        sync = GitRepoSync(tmp_path)
        target = tmp_path / "07_alice"

        with patch("subprocess.run", side_effect=lambda cmd, **kw: _completed(cmd)) as run:
            assert sync.stage_commit_push([target], "Removed file data: x")

        cmds = [call.args[0] for call in run.call_args_list]
        assert cmds == [
            ["git", "add", "-A", "--", str(target)],
            ["git", "commit", "-m", "Removed file data: x"],
            ["git", "push"],
        ]

    def test_failed_command_is_not_fatal(self, tmp_path: Path) -> None:
        sync = GitRepoSync(tmp_path)

        def fail_commit(cmd: list[str], **kw: object) -> subprocess.CompletedProcess[str]:
            if cmd[1] == "commit":
                raise subprocess.CalledProcessError(1, cmd, stderr="nothing to commit")
            return _completed(cmd)

        with patch("subprocess.run", side_effect=fail_commit) as run:
            assert not sync.stage_commit_push([tmp_path / "f"], "msg")

        # push is not attempted after a failed commit
        assert [call.args[0][1] for call in run.call_args_list] == ["add", "commit"]

    def test_missing_git_binary_is_not_fatal(self, tmp_path: Path) -> None:
        sync = GitRepoSync(tmp_path, git="definitely-not-git-xyz")

        with patch("subprocess.run", side_effect=FileNotFoundError("no git")):
            assert not sync.pull()

    def test_no_paths_means_no_commit(self, tmp_path: Path) -> None:
        sync = GitRepoSync(tmp_path)

        with patch("subprocess.run") as run:
            assert not sync.stage_commit_push([], "msg")
        run.assert_not_called()


class TestSyncEnabled:
    """Test the sync opt-out switches."""

    def test_enabled_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("CORPUS_NAMER_SYNC", raising=False)
        assert sync_enabled()

    def test_flag_disables(self) -> None:
        assert not sync_enabled(no_sync=True)

    @pytest.mark.parametrize("value", ["0", "false", "NO"])
    def test_env_disables(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.setenv("CORPUS_NAMER_SYNC", value)
        assert not sync_enabled()
