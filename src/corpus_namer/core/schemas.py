"""Pydantic schemas for dataset filenames.

These schemas define the typed form of a dataset filename:
- Series: the two independent numbering namespaces
- Difficulty: L1 through L5
- Kind: content kind, which fixes the file extension
- FilenameRecord: one fully-specified filename

All schemas use Pydantic v2 for validation.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from corpus_namer.core.constants import MAX_CHAPTER, MAX_CREATOR_ID, MAX_SEQUENCE


class Series(str, Enum):
    """Numbering namespace of a contributor's files."""

    WS = "WS"
    NS = "NS"


class Difficulty(str, Enum):
    """Difficulty tier."""

    L1 = "L1"
    L2 = "L2"
    L3 = "L3"
    L4 = "L4"
    L5 = "L5"


class Kind(str, Enum):
    """Content kind of a dataset file.

    Attributes:
        MATH: LaTeX source, stored as ``.tex``
        LEAN: Lean source, stored as ``.lean``
    """

    MATH = "MATH"
    LEAN = "LEAN"

    @property
    def extension(self) -> str:
        return ".tex" if self is Kind.MATH else ".lean"


#: Highest allocated sequence per series
CounterState = dict[Series, int]


def empty_counter() -> CounterState:
    """Return a fresh counter with every series at zero."""
    return {series: 0 for series in Series}


class FilenameRecord(BaseModel):
    """Typed form of ``<series><creator><sequence>_C<chapter>_<diff>_<kind><ext>``.

    Attributes:
        series: WS or NS
        creator_id: Contributor id, rendered with 2 digits
        sequence: 1-based position in the series, rendered with 4 digits
        chapter: Chapter number, rendered as ``C`` + 2 digits
        difficulty: L1..L5
        kind: MATH or LEAN
    """

    series: Series
    creator_id: int = Field(ge=0, le=MAX_CREATOR_ID)
    sequence: int = Field(ge=0, le=MAX_SEQUENCE)
    chapter: int = Field(ge=0, le=MAX_CHAPTER)
    difficulty: Difficulty
    kind: Kind

    model_config = {"frozen": True}

    @field_validator("series", "difficulty", "kind", mode="before")
    @classmethod
    def normalize_token(cls, v: Any) -> Any:
        """Accept enum tokens in any case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @property
    def extension(self) -> str:
        return self.kind.extension

    def with_sequence(self, sequence: int) -> "FilenameRecord":
        """Return a copy of this record carrying another sequence number."""
        return FilenameRecord(
            series=self.series,
            creator_id=self.creator_id,
            sequence=sequence,
            chapter=self.chapter,
            difficulty=self.difficulty,
            kind=self.kind,
        )
