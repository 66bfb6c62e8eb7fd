"""Single-step filesystem operations used by the transactional mutator.

Each function performs exactly one physical change and raises ``OSError``
on failure, so the caller can record the matching undo action around it.
"""

import errno
import os
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from corpus_namer.utils.debug import debug


def get_file_stats(path: Path) -> dict[str, Any]:
    """Get file statistics for log records.

    Args:
        path: File path to get stats for

    Returns:
        Dictionary with file statistics, empty if the file cannot be stat'ed
    """
    try:
        stat = path.stat()
        return {
            "size": stat.st_size,
            "mtime": datetime.fromtimestamp(stat.st_mtime, tz=UTC).isoformat(),
            "inode": stat.st_ino,
        }
    except OSError:
        return {}


def write_file(path: Path, content: bytes) -> None:
    """Write content and flush it to disk before returning.

    Raises:
        OSError: If the file cannot be written
    """
    with open(path, "wb") as handle:
        handle.write(content)
        handle.flush()
        os.fsync(handle.fileno())
    debug(f"Wrote {len(content)} bytes: {path}")


def rename_no_clobber(src: Path, dst: Path) -> None:
    """Rename src to dst, refusing to replace an existing dst.

    Raises:
        FileExistsError: If dst already exists
        OSError: If the rename itself fails
    """
    if dst.exists():
        raise FileExistsError(errno.EEXIST, "destination exists", str(dst))
    src.rename(dst)
    debug(f"Direct rename: {src} -> {dst}")


def delete_file(path: Path) -> dict[str, Any]:
    """Delete a file and return its stats as they were just before.

    Raises:
        OSError: If the file cannot be removed
    """
    stats = get_file_stats(path)
    path.unlink()
    debug(f"Deleted: {path}")
    return stats
