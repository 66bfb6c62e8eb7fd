"""Post-commit repository synchronisation."""

from corpus_namer.sync.repo_sync import (
    GitRepoSync,
    RepoSync,
    create_repo_sync,
    sync_enabled,
)

__all__ = ["GitRepoSync", "RepoSync", "create_repo_sync", "sync_enabled"]
