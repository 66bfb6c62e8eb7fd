"""Filesystem layer: counters, series directories and the undo log.

This module provides the single-step filesystem operations the mutator
composes, the durable counter store, and the in-memory undo log used to
revert a partially-applied operation.
"""

from corpus_namer.fs.counter_store import load_counter, save_counter
from corpus_namer.fs.paths import ensure_creator_folder, resolve_dataset_root
from corpus_namer.fs.series_dir import SeriesDirectory
from corpus_namer.fs.undo_log import RollbackReport, UndoAction, UndoLog

__all__ = [
    "RollbackReport",
    "SeriesDirectory",
    "UndoAction",
    "UndoLog",
    "ensure_creator_folder",
    "load_counter",
    "resolve_dataset_root",
    "save_counter",
]
