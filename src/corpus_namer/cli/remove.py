"""CLI entry point for removing a dataset file and renumbering its series."""

from __future__ import annotations

import importlib
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

if TYPE_CHECKING:  # pragma: no cover - typing only
    import typer
    from typer import Typer as TyperType
else:  # pragma: no cover - runtime fallback for typing
    typer = importlib.import_module("typer")
    TyperType = Any

from rich.console import Console

from corpus_namer.chains.mutator import TransactionalMutator
from corpus_namer.cli.prompts import (
    ask,
    creator_id_value,
    filename_value,
    sync_after_commit,
)
from corpus_namer.core.constants import REMOVE_COMMIT_MESSAGE
from corpus_namer.core.errors import CorpusNamerError
from corpus_namer.core.interrupt import interruption_guard
from corpus_namer.fs.paths import (
    creator_prefix,
    find_creator_folder,
    find_repo_root,
    resolve_dataset_root,
)
from corpus_namer.sync.repo_sync import create_repo_sync, sync_enabled

app: TyperType = typer.Typer(help="Remove a dataset file and renumber its series.")


RootOption = Annotated[
    Path | None,
    typer.Option("--root", help="Dataset root (defaults to CORPUS_NAMER_ROOT or cwd)."),
]
CreatorIdOption = Annotated[
    str | None, typer.Option("--creator-id", help="Creator numeric ID (0-99).")
]
FilenameOption = Annotated[
    str | None,
    typer.Option("--filename", help="Full filename to remove."),
]
NoSyncFlag = Annotated[
    bool, typer.Option("--no-sync", help="Skip git commit/push.")
]


def remove_file(
    root: RootOption = None,
    creator_id: CreatorIdOption = None,
    filename: FilenameOption = None,
    no_sync: NoSyncFlag = False,
) -> None:
    """Delete a file and shift every later file in its series down by one."""

    dataset_root = resolve_dataset_root(root)
    typer.echo("corpus-namer: remove a dataset file\n")
    typer.echo(f"Dataset root: {dataset_root}")

    cid = ask("Creator numeric ID", creator_id_value, creator_id)
    folder = find_creator_folder(dataset_root, cid)
    if folder is None:
        typer.secho(
            f"Error: cannot find folder starting with {creator_prefix(cid)}",
            err=True,
            fg=typer.colors.RED,
        )
        raise typer.Exit(code=1)
    typer.echo(f"Detected creator folder: {folder}")

    name = ask(
        "Enter full filename to remove (e.g. WS010001_C02_L3_MATH.tex)",
        filename_value,
        filename,
    )

    mutator = TransactionalMutator(folder, ui=Console())
    try:
        with interruption_guard(mutator):
            result = mutator.remove(name)
    except CorpusNamerError as exc:
        typer.secho(f"Remove failed: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc

    series = result.record.series
    typer.echo(f"Counter updated. {series.value} now ends at {result.counter[series]}")

    repo_root = find_repo_root(dataset_root, folder)
    if repo_root is not None and sync_enabled(no_sync):
        sync_after_commit(
            create_repo_sync(repo_root),
            [folder],
            REMOVE_COMMIT_MESSAGE.format(name=name),
        )


def run_cli(args: Sequence[str] | None = None) -> None:
    app(args=args)


app.command("remove")(remove_file)
