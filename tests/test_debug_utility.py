"""Tests for the debug utility module.

The debug utility provides a single entrypoint for debug logging that can be
toggled via the CORPUS_NAMER_DEBUG environment variable.
"""

import importlib
from collections.abc import Callable, Iterator
from io import StringIO
from typing import Any
from unittest.mock import patch

import pytest

from corpus_namer.utils import debug as debug_module


@pytest.fixture
def load_debug(monkeypatch: pytest.MonkeyPatch) -> Iterator[Callable[[str | None], Any]]:
    """Reload the debug module under a given CORPUS_NAMER_DEBUG value."""

    def _load(value: str | None) -> Any:
        if value is None:
            monkeypatch.delenv("CORPUS_NAMER_DEBUG", raising=False)
        else:
            monkeypatch.setenv("CORPUS_NAMER_DEBUG", value)
        importlib.reload(debug_module)
        return debug_module.debug

    yield _load

    monkeypatch.delenv("CORPUS_NAMER_DEBUG", raising=False)
    importlib.reload(debug_module)


def test_debug_import() -> None:
    """Test that debug utility can be imported."""
    from corpus_namer.utils.debug import debug

    assert callable(debug)


def test_debug_disabled_by_default(load_debug: Callable[[str | None], Any]) -> None:
    debug = load_debug(None)

    with patch("sys.stdout", new=StringIO()) as fake_stdout:
        debug("This should not print")
        output = fake_stdout.getvalue()

    assert output == "", f"Expected no output, got: {output}"


@pytest.mark.parametrize("value", ["1", "true", "True", "TRUE", "yes", "YES"])
def test_debug_enabled_for_truthy_values(
    load_debug: Callable[[str | None], Any], value: str
) -> None:
    debug = load_debug(value)

    with patch("sys.stdout", new=StringIO()) as fake_stdout:
        debug(f"Renamed a -> b ({value})")
        output = fake_stdout.getvalue()

    assert f"Renamed a -> b ({value})" in output
    assert output.startswith("[DEBUG]")


@pytest.mark.parametrize("value", ["0", "false", "no", "NO", ""])
def test_debug_disabled_for_falsy_values(
    load_debug: Callable[[str | None], Any], value: str
) -> None:
    debug = load_debug(value)

    with patch("sys.stdout", new=StringIO()) as fake_stdout:
        debug(f"Testing {value}")
        output = fake_stdout.getvalue()

    assert output == "", (
        f"Expected no output for CORPUS_NAMER_DEBUG={value}, got: {output}"
    )


def test_debug_multiple_messages(load_debug: Callable[[str | None], Any]) -> None:
    debug = load_debug("1")

    with patch("sys.stdout", new=StringIO()) as fake_stdout:
        debug("Wrote 3 bytes")
        debug("Direct rename")
        debug("")
        output = fake_stdout.getvalue()

    assert "Wrote 3 bytes" in output
    assert "Direct rename" in output
    assert output.count("[DEBUG]") == 3
