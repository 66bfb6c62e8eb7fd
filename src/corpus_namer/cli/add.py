"""CLI entry point for adding a dataset file."""

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
    chapter_value,
    creator_id_value,
    difficulty_value,
    kind_value,
    read_content,
    series_value,
    sync_after_commit,
)
from corpus_namer.core.constants import ADD_COMMIT_MESSAGE
from corpus_namer.core.errors import CorpusNamerError
from corpus_namer.core.interrupt import interruption_guard
from corpus_namer.core.schemas import FilenameRecord
from corpus_namer.fs.paths import ensure_creator_folder, resolve_dataset_root
from corpus_namer.sync.repo_sync import RepoSync, create_repo_sync, sync_enabled

app: TyperType = typer.Typer(help="Add a new sequentially-numbered dataset file.")


RootOption = Annotated[
    Path | None,
    typer.Option("--root", help="Dataset root (defaults to CORPUS_NAMER_ROOT or cwd)."),
]
CreatorIdOption = Annotated[
    str | None, typer.Option("--creator-id", help="Creator numeric ID (0-99).")
]
CreatorNameOption = Annotated[
    str | None,
    typer.Option("--creator-name", help="Creator name, used on first run only."),
]
SeriesOption = Annotated[str | None, typer.Option("--series", help="WS or NS.")]
ChapterOption = Annotated[
    str | None, typer.Option("--chapter", help="Chapter, as C02 or 2.")
]
DifficultyOption = Annotated[
    str | None, typer.Option("--difficulty", help="Difficulty L1..L5.")
]
KindOption = Annotated[str | None, typer.Option("--kind", help="MATH or LEAN.")]
ContentFileOption = Annotated[
    Path | None,
    typer.Option(
        "--content-file",
        exists=True,
        dir_okay=False,
        help="Read the file body from this path instead of stdin.",
    ),
]
NoSyncFlag = Annotated[
    bool, typer.Option("--no-sync", help="Skip git pull/commit/push.")
]


def _pre_sync(sync: RepoSync | None) -> None:
    if sync is None or not sync.has_repo():
        return

    typer.echo("\nGit detected.")
    if not sync.has_upstream():
        typer.echo("No upstream branch, skipping git pull")
        return

    typer.echo("Upstream found, running: git pull --rebase")
    if not sync.pull():
        typer.secho("git pull failed; continuing.", err=True, fg=typer.colors.YELLOW)


def add_file(
    root: RootOption = None,
    creator_id: CreatorIdOption = None,
    creator_name: CreatorNameOption = None,
    series: SeriesOption = None,
    chapter: ChapterOption = None,
    difficulty: DifficultyOption = None,
    kind: KindOption = None,
    content_file: ContentFileOption = None,
    no_sync: NoSyncFlag = False,
) -> None:
    """Mint the next filename for a creator and save the content under it."""

    dataset_root = resolve_dataset_root(root)
    typer.echo("corpus-namer: add a dataset file\n")
    typer.echo(f"Dataset root: {dataset_root}")

    sync = create_repo_sync(dataset_root) if sync_enabled(no_sync) else None
    _pre_sync(sync)

    cid = ask("\nCreator numeric ID", creator_id_value, creator_id)

    def _ask_name() -> str:
        if creator_name:
            return creator_name
        return typer.prompt("Enter creator name (will be saved for future runs)")

    try:
        folder, name = ensure_creator_folder(dataset_root, cid, _ask_name)
    except (OSError, ValueError) as exc:
        typer.secho(f"Cannot prepare creator folder: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc
    typer.echo(f"Creator folder: {folder.name} ({name})")

    template = FilenameRecord(
        series=ask("WS or NS", series_value, series),
        creator_id=cid,
        sequence=0,
        chapter=ask("Chapter (C02 or 2)", chapter_value, chapter),
        difficulty=ask("Difficulty L1..L5", difficulty_value, difficulty),
        kind=ask("MATH or LEAN", kind_value, kind),
    )

    content: str | bytes
    if content_file is not None:
        content = content_file.read_bytes()
    else:
        typer.echo("Enter file content (end with . on a line):")
        content = read_content()

    mutator = TransactionalMutator(folder, ui=Console())
    try:
        with interruption_guard(mutator):
            result = mutator.add(template, content)
    except CorpusNamerError as exc:
        typer.secho(f"Add failed: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc

    typer.echo(f"\nFinal filename: {result.path.name}")
    typer.secho(f"Saved: {result.path}", fg=typer.colors.GREEN)

    sync_after_commit(
        sync, [result.path], ADD_COMMIT_MESSAGE.format(name=result.path.name)
    )


def run_cli(args: Sequence[str] | None = None) -> None:
    app(args=args)


app.command("add")(add_file)
