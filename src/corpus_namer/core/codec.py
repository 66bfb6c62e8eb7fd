"""Deterministic encoder and parser for dataset filenames.

Filenames follow the grammar::

    <WS|NS><creator:2><sequence:4>_C<chapter:2>_<L1..L5>_<MATH|LEAN><.tex|.lean>

Enum tokens are matched case-insensitively and always encoded in upper case.
The extension must agree with the kind (MATH -> .tex, LEAN -> .lean).
"""

import re
from collections.abc import Callable

from corpus_namer.core.constants import (
    CHAPTER_WIDTH,
    CREATOR_ID_WIDTH,
    FILENAME_REGEX,
    MAX_CHAPTER,
    MAX_CREATOR_ID,
    MAX_SEQUENCE,
    SEQUENCE_WIDTH,
)
from corpus_namer.core.errors import NotAPattern, SeriesExhausted
from corpus_namer.core.schemas import FilenameRecord, Kind

_FILENAME_RE = re.compile(FILENAME_REGEX, re.IGNORECASE | re.ASCII)
_CHAPTER_RE = re.compile(r"^[Cc]?(\d{1,2})$")
_CREATOR_RE = re.compile(r"^\d{1,2}$")


def encode(record: FilenameRecord) -> str:
    """Render a record as its filename."""
    return (
        f"{record.series.value}"
        f"{record.creator_id:0{CREATOR_ID_WIDTH}d}"
        f"{record.sequence:0{SEQUENCE_WIDTH}d}"
        f"_C{record.chapter:0{CHAPTER_WIDTH}d}"
        f"_{record.difficulty.value}"
        f"_{record.kind.value}{record.extension}"
    )


def decode(name: str) -> FilenameRecord:
    """Parse a filename into a record.

    Args:
        name: Bare filename (no directory part)

    Returns:
        FilenameRecord with upper-cased enum tokens

    Raises:
        NotAPattern: If the name does not match the grammar or the
            extension disagrees with the kind
    """
    match = _FILENAME_RE.fullmatch(name)
    if match is None:
        raise NotAPattern(name)

    kind = Kind(match.group("kind").upper())
    if "." + match.group("ext").lower() != kind.extension:
        raise NotAPattern(name, f"extension does not match kind {kind.value}")

    return FilenameRecord(
        series=match.group("series"),
        creator_id=int(match.group("creator")),
        sequence=int(match.group("sequence")),
        chapter=int(match.group("chapter")),
        difficulty=match.group("difficulty"),
        kind=kind,
    )


def next_candidate(
    template: FilenameRecord,
    start_seq: int,
    exists: Callable[[str], bool],
) -> int:
    """Probe upward for the first free sequence.

    Args:
        template: Record supplying every field except the sequence
        start_seq: First sequence to try
        exists: Predicate called with each candidate filename

    Returns:
        The first sequence >= start_seq whose filename is not taken

    Raises:
        SeriesExhausted: If every sequence up to 9999 is taken
    """
    sequence = max(start_seq, 0)
    while sequence <= MAX_SEQUENCE:
        if not exists(encode(template.with_sequence(sequence))):
            return sequence
        sequence += 1
    raise SeriesExhausted(template.series.value, start_seq)


def parse_chapter(text: str) -> int:
    """Parse a chapter given as ``C02``, ``c2`` or ``2``."""
    match = _CHAPTER_RE.fullmatch(text.strip())
    if match is None:
        raise NotAPattern(text, "is not a chapter (expected C02 or 2)")
    chapter = int(match.group(1))
    if chapter > MAX_CHAPTER:
        raise NotAPattern(text, "is not a chapter (expected C02 or 2)")
    return chapter


def parse_creator_id(text: str) -> int:
    """Parse a creator id given with or without its leading zero."""
    cleaned = text.strip()
    if not _CREATOR_RE.fullmatch(cleaned) or int(cleaned) > MAX_CREATOR_ID:
        raise NotAPattern(text, "is not a creator id (expected 0-99)")
    return int(cleaned)
