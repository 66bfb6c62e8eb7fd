"""Interactive input helpers shared by the add and remove commands.

Value processors raise ``typer.BadParameter`` so that click's prompt loop
shows the error and asks again.
"""

from __future__ import annotations

import importlib
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:  # pragma: no cover - typing only
    import typer
else:  # pragma: no cover - runtime fallback for typing
    typer = importlib.import_module("typer")

from corpus_namer.core.codec import decode, parse_chapter, parse_creator_id
from corpus_namer.core.errors import NotAPattern
from corpus_namer.core.schemas import Difficulty, Kind, Series
from corpus_namer.sync.repo_sync import RepoSync

T = TypeVar("T")

#: Line that terminates interactive content entry
CONTENT_TERMINATOR = "."


def _choice(enum_cls: Any, label: str) -> Callable[[str], Any]:
    def _proc(text: str) -> Any:
        try:
            return enum_cls(text.strip().upper())
        except ValueError as exc:
            options = " or ".join(member.value for member in enum_cls)
            raise typer.BadParameter(f"{label} must be {options}") from exc

    return _proc


def creator_id_value(text: str) -> int:
    try:
        return parse_creator_id(text)
    except NotAPattern as exc:
        raise typer.BadParameter(str(exc)) from exc


def chapter_value(text: str) -> int:
    try:
        return parse_chapter(text)
    except NotAPattern as exc:
        raise typer.BadParameter(str(exc)) from exc


def filename_value(text: str) -> str:
    """Accept only names matching the dataset grammar."""
    name = text.strip()
    try:
        decode(name)
    except NotAPattern as exc:
        raise typer.BadParameter(str(exc)) from exc
    return name


series_value = _choice(Series, "Series")
difficulty_value = _choice(Difficulty, "Difficulty")
kind_value = _choice(Kind, "Kind")


def ask(label: str, processor: Callable[[str], T], given: str | None = None) -> T:
    """Use a value passed on the command line, otherwise prompt for it."""
    if given is not None:
        return processor(given)
    return typer.prompt(label, value_proc=processor)


def read_content(stream: IO[str] | None = None) -> str:
    """Read lines until one containing only ``.`` or end of input."""
    source = stream if stream is not None else sys.stdin
    lines: list[str] = []
    for raw_line in source:
        line = raw_line.rstrip("\r\n")
        if line.strip() == CONTENT_TERMINATOR:
            break
        lines.append(line + "\n")
    return "".join(lines)


def sync_after_commit(
    sync: RepoSync | None, paths: Sequence[Path], message: str
) -> None:
    """Stage, commit and push; failures only warn."""
    if sync is None or not sync.has_repo():
        return

    typer.echo("\n--- Git add/commit/push ---")
    typer.echo(f"Auto commit message: {message}")
    if sync.stage_commit_push(paths, message):
        typer.secho("Git push completed.", fg=typer.colors.GREEN)
    else:
        typer.secho(
            "Git sync did not complete; the dataset change itself is saved.",
            err=True,
            fg=typer.colors.YELLOW,
        )
