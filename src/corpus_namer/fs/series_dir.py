"""Series-aware view of a contributor directory.

Only entries whose names decode as dataset filenames are considered; the
counter file, the creator-name cache and temp files are ignored.
"""

from collections.abc import Iterator
from pathlib import Path

from corpus_namer.core.codec import decode
from corpus_namer.core.errors import NotAPattern
from corpus_namer.core.schemas import FilenameRecord, Series

Entry = tuple[Path, FilenameRecord]


class SeriesDirectory:
    """Answers occupancy questions about one contributor directory."""

    def __init__(self, folder: Path) -> None:
        self.folder = folder

    def list_matching(self) -> Iterator[Entry]:
        """Yield ``(path, record)`` for every entry matching the grammar.

        Order is filesystem enumeration order. Each call starts a new scan.
        """
        if not self.folder.is_dir():
            return

        for path in self.folder.iterdir():
            if not path.is_file():
                continue
            try:
                record = decode(path.name)
            except NotAPattern:
                continue
            yield path, record

    def exists(self, name: str) -> bool:
        return (self.folder / name).exists()

    def sequence_taken(self, series: Series, sequence: int) -> bool:
        """Check whether any file in the series already uses the sequence."""
        return any(
            record.series == series and record.sequence == sequence
            for _, record in self.list_matching()
        )

    def highest_sequence(self, series: Series) -> int:
        """Highest occupied sequence in the series, 0 when empty."""
        return max(
            (r.sequence for _, r in self.list_matching() if r.series == series),
            default=0,
        )

    def sequences(self, series: Series) -> list[int]:
        return sorted(r.sequence for _, r in self.list_matching() if r.series == series)

    def entries_after(self, series: Series, sequence: int) -> list[Entry]:
        """Entries of the series numbered above ``sequence``, ascending.

        Renaming in this order always targets a name that has already been
        vacated by the previous step.
        """
        entries = [
            (path, record)
            for path, record in self.list_matching()
            if record.series == series and record.sequence > sequence
        ]
        entries.sort(key=lambda entry: (entry[1].sequence, entry[0].name))
        return entries
