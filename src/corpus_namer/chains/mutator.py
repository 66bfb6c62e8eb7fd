"""Transactional add/remove of dataset files with undo-log rollback.

A TransactionalMutator runs exactly one operation against one contributor
directory. Every physical step (temp write, rename, delete, counter save)
records its compensating action in an in-memory UndoLog before it happens.
Success clears the log; any failure or interruption replays it newest-first
and reports what was restored, removed or lost.

    Idle -> Staged -> Committed
                   -> RolledBack
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, NoReturn

import structlog
from rich.console import Console

from corpus_namer.core.codec import decode, encode, next_candidate
from corpus_namer.core.constants import COUNTER_FILENAME
from corpus_namer.core.errors import (
    CounterPersistFailure,
    IOFailure,
    NotFound,
    PartialRenumberFailure,
    TransactionError,
)
from corpus_namer.core.schemas import CounterState, FilenameRecord
from corpus_namer.fs.counter_store import load_counter, save_counter
from corpus_namer.fs.fs_ops import delete_file, rename_no_clobber, write_file
from corpus_namer.fs.paths import get_temp_path
from corpus_namer.fs.series_dir import SeriesDirectory
from corpus_namer.fs.undo_log import RollbackReport, UndoAction, UndoLog


class MutatorState(str, Enum):
    """Lifecycle of a TransactionalMutator."""

    IDLE = "idle"
    STAGED = "staged"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


@dataclass
class AddResult:
    """Outcome of a committed add."""

    path: Path
    record: FilenameRecord
    counter: CounterState


@dataclass
class RemoveResult:
    """Outcome of a committed remove.

    Attributes:
        removed: Path of the deleted file
        record: Decoded name of the deleted file
        renamed: (old, new) pairs in the order they were applied
        counter: Counter as persisted at commit
    """

    removed: Path
    record: FilenameRecord
    renamed: list[tuple[Path, Path]] = field(default_factory=list)
    counter: CounterState = field(default_factory=dict)


class TransactionalMutator:
    """Runs one add or remove on a contributor directory as a transaction."""

    def __init__(
        self,
        folder: Path,
        logger: Any = None,
        ui: Console | None = None,
    ) -> None:
        """Initialize the mutator.

        Args:
            folder: Contributor directory to operate on
            logger: Optional structlog logger instance
            ui: Optional Rich console for operator output
        """
        self.folder = folder
        self.directory = SeriesDirectory(folder)
        self.counter_path = folder / COUNTER_FILENAME
        self.last_rollback: RollbackReport | None = None
        self._undo = UndoLog()
        self._state = MutatorState.IDLE
        self._replaying = False
        self._logger = (logger or structlog.get_logger()).bind(folder=str(folder))
        self._ui = ui or Console()

    @property
    def state(self) -> MutatorState:
        return self._state

    @property
    def undo_log(self) -> UndoLog:
        return self._undo

    @property
    def rollback_in_progress(self) -> bool:
        return self._replaying

    def add(self, template: FilenameRecord, content: str | bytes) -> AddResult:
        """Materialize a new file under the next free sequence.

        Args:
            template: Every field of the new name except the sequence
            content: File body; str is encoded as UTF-8

        Returns:
            AddResult with the final path and the persisted counter

        Raises:
            NotFound: If the contributor directory does not exist
            SeriesExhausted: If no sequence below 10000 is free
            IOFailure: If the write or rename fails (after rollback)
            CounterPersistFailure: If the counter cannot be saved (after rollback)
        """
        if not self.folder.is_dir():
            raise NotFound(self.folder, "contributor directory")

        data = content.encode("utf-8") if isinstance(content, str) else content
        series = template.series
        log = self._logger.bind(operation="add", series=series.value)

        self._begin()
        try:
            counter_existed = self.counter_path.exists()
            snapshot = load_counter(self.counter_path)
            counter = dict(snapshot)

            occupied = set(self.directory.sequences(series))
            if occupied and max(occupied) > counter[series]:
                log.warning(
                    "mutator.add.counter_behind",
                    counter=counter[series],
                    on_disk=max(occupied),
                )

            def taken(name: str) -> bool:
                return self.directory.exists(name) or decode(name).sequence in occupied

            sequence = next_candidate(template, counter[series] + 1, taken)
            final = self.folder / encode(template.with_sequence(sequence))

            temp = get_temp_path(final)
            temp_action = UndoAction.delete_created(temp)
            self._undo.record(temp_action)
            try:
                write_file(temp, data)
            except OSError as exc:
                self._fail(IOFailure, "add", temp, exc)

            while True:
                final_action = UndoAction.delete_created(final)
                self._undo.record(final_action)
                try:
                    rename_no_clobber(temp, final)
                    break
                except FileExistsError:
                    # Occupied since the probe; move on to the next free slot.
                    self._undo.discard(final_action)
                    occupied.add(sequence)
                    sequence = next_candidate(template, sequence + 1, taken)
                    final = self.folder / encode(template.with_sequence(sequence))
                except OSError as exc:
                    self._fail(IOFailure, "add", final, exc)
            self._undo.discard(temp_action)

            counter[series] = sequence
            self._persist_counter(counter, snapshot, counter_existed, "add")
            self._commit(log, path=str(final), sequence=sequence)
        except BaseException as exc:
            self.abort(reason=repr(exc))
            raise

        return AddResult(
            path=final, record=template.with_sequence(sequence), counter=counter
        )

    def remove(self, filename: str) -> RemoveResult:
        """Delete a file and close the gap it leaves in its series.

        Args:
            filename: Bare dataset filename inside the contributor directory

        Returns:
            RemoveResult listing the renames that were applied

        Raises:
            NotAPattern: If the name does not match the grammar (no mutation)
            NotFound: If the file does not exist (no mutation)
            IOFailure: If the delete fails (after rollback)
            PartialRenumberFailure: If a rename fails (after rollback; the
                deleted content is lost)
            CounterPersistFailure: If the counter cannot be saved (after rollback)
        """
        name = filename.strip()
        record = decode(name)
        target = self.folder / name
        if not target.is_file():
            raise NotFound(target)

        series = record.series
        log = self._logger.bind(operation="remove", series=series.value)

        self._begin()
        try:
            counter_existed = self.counter_path.exists()
            snapshot = load_counter(self.counter_path)
            counter = dict(snapshot)

            self._undo.record(UndoAction.irreversible_delete(target))
            try:
                stats = delete_file(target)
            except OSError as exc:
                self._fail(IOFailure, "remove", target, exc)
            log.info("mutator.remove.deleted", path=str(target), **stats)
            self._ui.print(f"Deleted: {target.name}")

            renamed: list[tuple[Path, Path]] = []
            for path, entry in self.directory.entries_after(series, record.sequence):
                new_path = self.folder / encode(entry.with_sequence(entry.sequence - 1))
                action = UndoAction.rename_back(path, new_path)
                self._undo.record(action)
                try:
                    rename_no_clobber(path, new_path)
                except OSError as exc:
                    self._undo.discard(action)
                    self._fail(PartialRenumberFailure, "remove", path, exc)
                renamed.append((path, new_path))
                self._ui.print(f"Renamed: {path.name} -> {new_path.name}")

            # Decrement-by-one holds only because the pass above keeps the
            # series dense.
            if counter[series] > 0:
                counter[series] -= 1
            else:
                log.warning("mutator.remove.counter_at_zero")
            self._persist_counter(counter, snapshot, counter_existed, "remove")
            self._commit(log, path=str(target), renamed=len(renamed))
        except BaseException as exc:
            self.abort(reason=repr(exc))
            raise

        return RemoveResult(
            removed=target, record=record, renamed=renamed, counter=counter
        )

    def abort(self, reason: str = "interrupted") -> RollbackReport | None:
        """Replay the undo log if a transaction is staged.

        Safe to call more than once and from a signal handler; only the first
        call on a staged transaction does any work.

        Returns:
            The RollbackReport of the replay, or None if nothing was staged
        """
        if self._state is not MutatorState.STAGED:
            return self.last_rollback

        # The flag goes up before the state changes so a nested signal never
        # sees ROLLED_BACK without a replay in progress.
        self._replaying = True
        self._state = MutatorState.ROLLED_BACK
        try:
            report = self._undo.replay()
        finally:
            self._replaying = False
        self.last_rollback = report

        self._logger.warning(
            "mutator.rollback",
            reason=reason,
            removed=[str(p) for p in report.removed],
            restored=[f"{a} -> {b}" for a, b in report.restored],
            lost=[str(p) for p in report.lost],
            counter_restored=report.counter_restored,
            failures=report.failures,
        )
        self._show_rollback(report)
        return report

    def _begin(self) -> None:
        if self._state is not MutatorState.IDLE:
            raise RuntimeError(
                f"mutator already used (state: {self._state.value}); "
                "create a new TransactionalMutator per operation"
            )
        self._state = MutatorState.STAGED

    def _commit(self, log: Any, **fields: Any) -> None:
        self._undo.clear()
        self._state = MutatorState.COMMITTED
        log.info("mutator.commit", **fields)

    def _persist_counter(
        self,
        counter: CounterState,
        snapshot: CounterState,
        existed: bool,
        operation: str,
    ) -> None:
        self._undo.record(
            UndoAction.restore_counter(self.counter_path, snapshot, existed=existed)
        )
        try:
            save_counter(self.counter_path, counter)
        except OSError as exc:
            self._fail(CounterPersistFailure, operation, self.counter_path, exc)

    def _fail(
        self,
        error_cls: type[TransactionError],
        operation: str,
        path: Path,
        exc: OSError,
    ) -> NoReturn:
        report = self.abort(reason=str(exc))
        raise error_cls(operation, path, str(exc), rollback=report) from exc

    def _show_rollback(self, report: RollbackReport) -> None:
        """Show Rich output for a replayed undo log."""
        self._ui.print("[bold yellow]Operation aborted, reverting changes...[/bold yellow]")
        for path in report.removed:
            self._ui.print(f"Removed: {path.name}")
        for new, old in report.restored:
            self._ui.print(f"Restored: {new.name} -> {old.name}")
        for path in report.lost:
            self._ui.print(
                f"[red]Deleted file: {path.name} (cannot restore automatically)[/red]"
            )
        if report.counter_restored:
            self._ui.print("Counter restored.")
        for failure in report.failures:
            self._ui.print(f"[red]Could not revert: {failure}[/red]")
        if not (report.removed or report.restored or report.lost):
            self._ui.print("No files were changed.")
