"""Durable per-contributor sequence counters.

The counter file holds one ``KEY=value`` line per series::

    WS=12
    NS=3

Unknown keys and malformed lines are ignored on read. Writes truncate and
rewrite the whole file.
"""

import re
from pathlib import Path

from corpus_namer.core.schemas import CounterState, Series, empty_counter
from corpus_namer.utils.debug import debug

_COUNT_RE = re.compile(r"[0-9]+")


def load_counter(path: Path) -> CounterState:
    """Load a counter file.

    Args:
        path: Counter file path

    Returns:
        Fresh counter mapping; every series defaults to 0 when the file is
        missing, empty or the line for it is malformed
    """
    state = empty_counter()
    if not path.exists():
        return state

    # Undecodable bytes become U+FFFD and the line fails to parse below.
    text = path.read_bytes().decode("utf-8", errors="replace")
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        value = value.strip()
        try:
            series = Series(key.strip().upper())
        except ValueError:
            debug(f"Skipping unknown counter key in {path}: {raw_line!r}")
            continue

        if not _COUNT_RE.fullmatch(value):
            debug(f"Skipping malformed counter line in {path}: {raw_line!r}")
            continue

        state[series] = int(value)

    return state


def save_counter(path: Path, state: CounterState) -> None:
    """Overwrite the counter file with one line per series.

    Raises:
        OSError: If the file cannot be written
    """
    lines = [f"{series.value}={state.get(series, 0)}" for series in Series]
    with open(path, "w", encoding="utf-8") as handle:
        handle.write("\n".join(lines) + "\n")
    debug(f"Saved counter {path}: {', '.join(lines)}")
