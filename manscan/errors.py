"""Exceptions raised by manscan."""
from __future__ import annotations


class ManscanError(Exception):
    """Base class for manscan errors."""


class LoadError(ManscanError):
    """A man page file could not be opened or decompressed."""

    def __init__(self, path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Error loading man page {self.path}: {reason}")


class SectionNotFound(ManscanError, LookupError):
    """No `.SH` heading matched the requested section name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Error locating section {name!r}")
