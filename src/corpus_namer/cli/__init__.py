"""CLI entrypoints for corpus-namer."""

from corpus_namer.cli.add import app as add_app
from corpus_namer.cli.main import app
from corpus_namer.cli.remove import app as remove_app

__all__ = ["add_app", "app", "remove_app"]
