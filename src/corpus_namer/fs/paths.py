"""Path utilities for the dataset root and contributor directories.

This module resolves where the dataset lives, locates or creates the
``<id>_<name>`` directory of a contributor and reads/writes its one-line
creator-name cache.
"""

import os
import unicodedata
from collections.abc import Callable
from pathlib import Path

from corpus_namer.core.constants import (
    CREATOR_ID_WIDTH,
    CREATOR_NAME_FILENAME,
    ROOT_ENV_VAR,
    TEMP_SUFFIX,
)
from corpus_namer.utils.debug import debug


def normalize_path(path: Path | str, root: Path | None = None) -> Path:
    """Normalize a path for consistent handling.

    Args:
        path: Path to normalize
        root: Optional root directory for relative paths

    Returns:
        Normalized absolute path
    """
    path = Path(path)

    if not path.is_absolute() and root is not None:
        path = root / path
    path = path.expanduser().resolve()

    # Normalize Unicode (NFC on macOS, NFD handling)
    if os.name == "posix":
        path = Path(unicodedata.normalize("NFC", str(path)))

    return path


def resolve_dataset_root(root: Path | str | None = None) -> Path:
    """Resolve the dataset root directory.

    Args:
        root: Explicit root; falls back to CORPUS_NAMER_ROOT, then the
            current working directory

    Returns:
        Absolute path of the dataset root
    """
    chosen: Path | str | None = root
    env_root = os.getenv(ROOT_ENV_VAR)
    if chosen is None and env_root:
        chosen = env_root
    if chosen is None:
        chosen = Path.cwd()
    return normalize_path(chosen)


def creator_prefix(creator_id: int) -> str:
    return f"{creator_id:0{CREATOR_ID_WIDTH}d}_"


def creator_folder_name(creator_id: int, creator_name: str) -> str:
    """Name of a contributor directory, e.g. ``07_alice``."""
    return creator_prefix(creator_id) + creator_name.strip()


def find_creator_folder(root: Path, creator_id: int) -> Path | None:
    """Find the first directory under root named ``<id>_...``.

    Entries are visited in sorted order so the choice is stable when more
    than one directory carries the prefix.
    """
    if not root.is_dir():
        return None

    prefix = creator_prefix(creator_id)
    for entry in sorted(root.iterdir()):
        if entry.is_dir() and entry.name.startswith(prefix):
            debug(f"Found creator folder: {entry}")
            return entry
    return None


def read_creator_name(folder: Path) -> str | None:
    """Read the cached creator name, or None when missing or blank."""
    cache = folder / CREATOR_NAME_FILENAME
    if not cache.exists():
        return None

    lines = cache.read_text(encoding="utf-8").splitlines()
    name = lines[0].strip() if lines else ""
    return name or None


def write_creator_name(folder: Path, name: str) -> Path:
    cache = folder / CREATOR_NAME_FILENAME
    cache.write_text(name.strip(), encoding="utf-8")
    return cache


def ensure_creator_folder(
    root: Path,
    creator_id: int,
    ask_name: Callable[[], str],
) -> tuple[Path, str]:
    """Locate a contributor directory, creating it on first use.

    Args:
        root: Dataset root
        creator_id: Contributor id
        ask_name: Called only when no directory exists yet, to obtain the
            creator name

    Returns:
        Tuple of (directory, creator name)

    Raises:
        ValueError: If ask_name returns a blank name
        OSError: If the directory cannot be created
    """
    folder = find_creator_folder(root, creator_id)
    if folder is not None:
        name = read_creator_name(folder)
        if name is None:
            name = folder.name[len(creator_prefix(creator_id)) :]
            write_creator_name(folder, name)
        return folder, name

    name = ask_name().strip()
    if not name:
        raise ValueError("Creator name must not be empty")

    folder = root / creator_folder_name(creator_id, name)
    folder.mkdir(parents=True, exist_ok=True)
    write_creator_name(folder, name)
    debug(f"Created creator folder: {folder}")
    return folder, name


def get_temp_path(final: Path) -> Path:
    """Temporary sibling written before the atomic rename into ``final``."""
    return final.with_name(final.name + TEMP_SUFFIX)


def find_repo_root(*candidates: Path) -> Path | None:
    """Return the first candidate directory that holds a ``.git`` entry."""
    for candidate in candidates:
        if (candidate / ".git").exists():
            return candidate
    return None
