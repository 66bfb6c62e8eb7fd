"""Custom exceptions for corpus-namer.

This module defines typed exceptions used throughout the application for
filename validation, transactional failures and rollback reporting.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - typing only
    from corpus_namer.fs.undo_log import RollbackReport


class CorpusNamerError(Exception):
    """Base exception for all corpus-namer errors.

    All custom exceptions should inherit from this base class to allow
    for broad exception handling at the CLI boundary.
    """

    pass


class NotAPattern(CorpusNamerError):
    """Raised when a filename or field does not match the dataset grammar.

    Attributes:
        value: The offending input
        reason: Which part of the grammar was violated
    """

    def __init__(self, value: str, reason: str = "does not match pattern") -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"{value!r} {reason}")

    def to_dict(self) -> dict[str, Any]:
        return {"error": "not_a_pattern", "value": self.value, "reason": self.reason}

    def __repr__(self) -> str:
        return f"NotAPattern(value={self.value!r}, reason={self.reason!r})"


class NotFound(CorpusNamerError):
    """Raised when a file or contributor folder to operate on is absent."""

    def __init__(self, path: Path | str, what: str = "file") -> None:
        self.path = Path(path)
        self.what = what
        super().__init__(f"{what} does not exist: {self.path}")

    def to_dict(self) -> dict[str, Any]:
        return {"error": "not_found", "what": self.what, "path": str(self.path)}

    def __repr__(self) -> str:
        return f"NotFound(path={str(self.path)!r}, what={self.what!r})"


class SeriesExhausted(CorpusNamerError):
    """Raised when no free 4-digit sequence is left in a series."""

    def __init__(self, series: str, start: int) -> None:
        self.series = series
        self.start = start
        super().__init__(f"No free sequence in series {series} from {start}")


class TransactionError(CorpusNamerError):
    """Base for failures raised after the undo log has been replayed.

    Attributes:
        operation: 'add' or 'remove'
        path: The file the failing step acted on
        reason: Underlying error text
        rollback: Report of what the replay restored, removed or lost
    """

    code = "transaction_failed"

    def __init__(
        self,
        operation: str,
        path: Path | None,
        reason: str,
        rollback: RollbackReport | None = None,
    ) -> None:
        self.operation = operation
        self.path = path
        self.reason = reason
        self.rollback = rollback

        message = f"{operation} failed"
        if path is not None:
            message += f" at {path.name}"
        message += f": {reason}"
        if rollback is not None and rollback.lost:
            lost = ", ".join(p.name for p in rollback.lost)
            message += f" (content permanently lost: {lost})"

        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for reporting.

        Returns:
            Dictionary representation suitable for JSON output
        """
        result: dict[str, Any] = {
            "error": self.code,
            "operation": self.operation,
            "reason": self.reason,
        }

        if self.path is not None:
            result["path"] = str(self.path)

        if self.rollback is not None:
            result["rollback"] = self.rollback.to_dict()

        return result

    def __repr__(self) -> str:
        path = str(self.path) if self.path is not None else None
        return (
            f"{type(self).__name__}(operation={self.operation!r}, "
            f"path={path!r}, "
            f"reason={self.reason!r})"
        )


class IOFailure(TransactionError):
    """Raised when a write, rename or delete step fails mid-transaction."""

    code = "io_failure"


class PartialRenumberFailure(TransactionError):
    """Raised when renumbering after a delete fails part-way.

    The renames already applied are reverted, but the deleted file's content
    cannot be restored.
    """

    code = "partial_renumber_failure"


class CounterPersistFailure(TransactionError):
    """Raised when the counter file cannot be written after files changed."""

    code = "counter_persist_failure"
