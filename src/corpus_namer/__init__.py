"""corpus-namer: sequential dataset filenames with transactional renumbering."""

__version__ = "0.1.0"
