"""Tests for core custom exceptions."""

from pathlib import Path

from corpus_namer.fs.undo_log import RollbackReport


def test_errors_import() -> None:
    """Test that errors module can be imported."""
    from corpus_namer.core import errors

    assert errors is not None


def test_all_errors_share_base() -> None:
    from corpus_namer.core.errors import (
        CorpusNamerError,
        CounterPersistFailure,
        IOFailure,
        NotAPattern,
        NotFound,
        PartialRenumberFailure,
        SeriesExhausted,
        TransactionError,
    )

    for cls in (NotAPattern, NotFound, SeriesExhausted, TransactionError):
        assert issubclass(cls, CorpusNamerError)
    for cls in (IOFailure, PartialRenumberFailure, CounterPersistFailure):
        assert issubclass(cls, TransactionError)


def test_not_a_pattern_message_and_dict() -> None:
    from corpus_namer.core.errors import NotAPattern

    exc = NotAPattern("bogus.tex")

    assert "bogus.tex" in str(exc)
    assert exc.to_dict() == {
        "error": "not_a_pattern",
        "value": "bogus.tex",
        "reason": "does not match pattern",
    }
    assert repr(exc).startswith("NotAPattern(")


def test_not_found_dict(tmp_path: Path) -> None:
    from corpus_namer.core.errors import NotFound

    exc = NotFound(tmp_path / "missing.tex")

    assert exc.to_dict()["error"] == "not_found"
    assert "missing.tex" in str(exc)


def test_transaction_error_reports_lost_content(tmp_path: Path) -> None:
    """Lost content must appear in the message, not only in the report."""
    from corpus_namer.core.errors import PartialRenumberFailure

    lost = tmp_path / "WS070001_C02_L3_MATH.tex"
    report = RollbackReport(lost=[lost])
    exc = PartialRenumberFailure(
        "remove", tmp_path / "WS070003_C02_L3_MATH.tex", "boom", rollback=report
    )

    assert "content permanently lost" in str(exc)
    assert "WS070001_C02_L3_MATH.tex" in str(exc)

    payload = exc.to_dict()
    assert payload["error"] == "partial_renumber_failure"
    assert payload["operation"] == "remove"
    assert payload["rollback"]["lost"] == [str(lost)]


def test_transaction_error_without_rollback() -> None:
    from corpus_namer.core.errors import IOFailure

    exc = IOFailure("add", None, "disk full")

    assert str(exc) == "add failed: disk full"
    assert "rollback" not in exc.to_dict()
    assert "IOFailure(operation='add'" in repr(exc)
