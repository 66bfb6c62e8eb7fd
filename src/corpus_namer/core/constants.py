"""Core constants for corpus-namer.

This module defines constants used throughout the application:
- Field widths of the dataset filename grammar
- Names of the per-contributor bookkeeping files
- Environment variables read for configuration
"""

# ============================================================================
# Filename Grammar
# ============================================================================

#: Digits used for the creator id inside a filename
CREATOR_ID_WIDTH: int = 2

#: Digits used for the sequence number inside a filename
SEQUENCE_WIDTH: int = 4

#: Digits used for the chapter number (after the literal ``C`` tag)
CHAPTER_WIDTH: int = 2

#: Largest sequence representable in a filename
MAX_SEQUENCE: int = 10**SEQUENCE_WIDTH - 1

#: Largest creator id representable in a filename
MAX_CREATOR_ID: int = 10**CREATOR_ID_WIDTH - 1

#: Largest chapter representable in a filename
MAX_CHAPTER: int = 10**CHAPTER_WIDTH - 1

#: Full filename grammar, matched case-insensitively
FILENAME_REGEX: str = (
    r"^(?P<series>WS|NS)(?P<creator>\d{2})(?P<sequence>\d{4})"
    r"_C(?P<chapter>\d{2})_(?P<difficulty>L[1-5])_(?P<kind>MATH|LEAN)"
    r"\.(?P<ext>tex|lean)$"
)

# ============================================================================
# Contributor Directory Files
# ============================================================================

#: Counter file holding the highest allocated sequence per series
COUNTER_FILENAME: str = ".cache"

#: One-line creator-name cache
CREATOR_NAME_FILENAME: str = ".creator.cfg"

#: Suffix of the temporary file written before the atomic rename
TEMP_SUFFIX: str = ".tmp"

# ============================================================================
# Configuration
# ============================================================================

#: Overrides the dataset root (defaults to the current directory)
ROOT_ENV_VAR: str = "CORPUS_NAMER_ROOT"

#: Set to 0/false/no to skip the post-commit repository sync
SYNC_ENV_VAR: str = "CORPUS_NAMER_SYNC"

#: Commit message templates used after a successful mutation
ADD_COMMIT_MESSAGE: str = "New file data: {name}"
REMOVE_COMMIT_MESSAGE: str = "Removed file data: {name}"
