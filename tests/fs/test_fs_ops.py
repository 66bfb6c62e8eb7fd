"""Tests for single-step filesystem operations."""

from pathlib import Path

import pytest

from corpus_namer.fs.fs_ops import (
    delete_file,
    get_file_stats,
    rename_no_clobber,
    write_file,
)


class TestWriteFile:
    """Test durable file writes."""

    def test_writes_bytes(self, tmp_path: Path) -> None:
        target = tmp_path / "WS070001_C02_L3_MATH.tex.tmp"

        write_file(target, b"\\frac{1}{2}\n")

        assert target.read_bytes() == b"\\frac{1}{2}\n"

    def test_missing_parent_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            write_file(tmp_path / "missing" / "f.tex", b"x")


class TestRenameNoClobber:
    """Test renames that never overwrite an existing target."""

    def test_renames(self, tmp_path: Path) -> None:
        src = tmp_path / "a.tmp"
        dst = tmp_path / "a.tex"
        src.write_text("body")

        rename_no_clobber(src, dst)

        assert not src.exists()
        assert dst.read_text() == "body"

    def test_existing_destination_is_kept(self, tmp_path: Path) -> None:
        src = tmp_path / "a.tmp"
        dst = tmp_path / "a.tex"
        src.write_text("new")
        dst.write_text("old")

        with pytest.raises(FileExistsError):
            rename_no_clobber(src, dst)

        assert src.read_text() == "new"
        assert dst.read_text() == "old"

    def test_missing_source_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            rename_no_clobber(tmp_path / "gone", tmp_path / "dst")


class TestDeleteFile:
    """Test deletes and the stats they report."""

    def test_returns_stats_before_delete(self, tmp_path: Path) -> None:
        target = tmp_path / "NS070004_C01_L1_LEAN.lean"
        target.write_bytes(b"12345")

        stats = delete_file(target)

        assert not target.exists()
        assert stats["size"] == 5
        assert "mtime" in stats

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            delete_file(tmp_path / "absent.tex")


def test_stats_for_missing_file_are_empty(tmp_path: Path) -> None:
    assert get_file_stats(tmp_path / "absent") == {}
