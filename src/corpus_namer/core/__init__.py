"""Filename grammar, typed records and errors."""
