"""Top-level ``corpus-namer`` command grouping add and remove."""

from __future__ import annotations

import importlib
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - typing only
    import typer
    from typer import Typer as TyperType
else:  # pragma: no cover - runtime fallback for typing
    typer = importlib.import_module("typer")
    TyperType = Any

from corpus_namer.cli.add import add_file
from corpus_namer.cli.remove import remove_file

app: TyperType = typer.Typer(
    help="Mint and retire sequentially-numbered dataset filenames.",
    no_args_is_help=True,
)


def run_cli(args: Sequence[str] | None = None) -> None:
    app(args=args)


app.command("add")(add_file)
app.command("remove")(remove_file)
