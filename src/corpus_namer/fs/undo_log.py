"""In-memory undo log for a single filesystem transaction.

Each step of an add or remove records the action that compensates for it.
On abort the log is replayed newest-first; on commit it is cleared. The log
is never written to disk.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

from corpus_namer.core.schemas import CounterState
from corpus_namer.fs.counter_store import save_counter
from corpus_namer.utils.debug import debug

UndoOp = Literal["delete_created", "rename_back", "irreversible_delete", "restore_counter"]


@dataclass(frozen=True)
class UndoAction:
    """A compensating action.

    Attributes:
        op: What replay does
            - delete_created: remove ``path`` if it exists
            - rename_back: rename ``path`` back to ``original``
            - irreversible_delete: report ``path`` as lost if it is gone
            - restore_counter: rewrite ``path`` with ``counter``, or remove
              it when ``counter`` is None (no counter file existed)
        path: File the action targets
        original: Name to restore for rename_back
        counter: Snapshot to restore for restore_counter
    """

    op: UndoOp
    path: Path
    original: Path | None = None
    counter: CounterState | None = None

    @classmethod
    def delete_created(cls, path: Path) -> "UndoAction":
        return cls(op="delete_created", path=path)

    @classmethod
    def rename_back(cls, old: Path, new: Path) -> "UndoAction":
        return cls(op="rename_back", path=new, original=old)

    @classmethod
    def irreversible_delete(cls, path: Path) -> "UndoAction":
        return cls(op="irreversible_delete", path=path)

    @classmethod
    def restore_counter(
        cls, path: Path, snapshot: CounterState, *, existed: bool = True
    ) -> "UndoAction":
        return cls(
            op="restore_counter",
            path=path,
            counter=dict(snapshot) if existed else None,
        )


@dataclass
class RollbackReport:
    """What an undo-log replay did."""

    removed: list[Path] = field(default_factory=list)
    restored: list[tuple[Path, Path]] = field(default_factory=list)
    lost: list[Path] = field(default_factory=list)
    counter_restored: bool = False
    failures: list[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        """True when nothing was lost and every compensation succeeded."""
        return not self.lost and not self.failures

    def to_dict(self) -> dict[str, Any]:
        return {
            "removed": [str(p) for p in self.removed],
            "restored": [{"from": str(a), "to": str(b)} for a, b in self.restored],
            "lost": [str(p) for p in self.lost],
            "counter_restored": self.counter_restored,
            "failures": list(self.failures),
        }


class UndoLog:
    """Ordered list of compensating actions owned by one transaction."""

    def __init__(self) -> None:
        self._actions: list[UndoAction] = []

    def __len__(self) -> int:
        return len(self._actions)

    def __iter__(self) -> Iterator[UndoAction]:
        return iter(list(self._actions))

    def record(self, action: UndoAction) -> None:
        self._actions.append(action)
        debug(f"Undo log +{action.op}: {action.path.name}")

    def discard(self, action: UndoAction) -> None:
        """Drop an action whose effect no longer needs compensating."""
        if action in self._actions:
            self._actions.remove(action)

    def clear(self) -> None:
        self._actions.clear()

    def replay(self) -> RollbackReport:
        """Undo every recorded action, newest first.

        Actions are popped before they run, so a second replay (for example
        from a signal arriving during the first) does nothing. A failing
        compensation is recorded and replay continues with the next one.

        Returns:
            RollbackReport describing what was restored, removed or lost
        """
        report = RollbackReport()
        while self._actions:
            action = self._actions.pop()
            try:
                self._undo(action, report)
            except OSError as e:
                report.failures.append(f"{action.op} {action.path}: {e}")
                debug(f"Undo step failed: {action.op} {action.path}: {e}")
        return report

    @staticmethod
    def _undo(action: UndoAction, report: RollbackReport) -> None:
        if action.op == "delete_created":
            if action.path.exists():
                action.path.unlink()
                report.removed.append(action.path)
        elif action.op == "rename_back":
            assert action.original is not None
            if action.path.exists():
                action.path.rename(action.original)
                report.restored.append((action.path, action.original))
        elif action.op == "irreversible_delete":
            if not action.path.exists():
                report.lost.append(action.path)
        elif action.op == "restore_counter":
            if action.counter is None:
                action.path.unlink(missing_ok=True)
            else:
                save_counter(action.path, action.counter)
            report.counter_restored = True
