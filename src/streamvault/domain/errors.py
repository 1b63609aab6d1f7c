"""Failures raised while importing listening history.

Each error is scoped to a single uploaded unit so that batch orchestration can
record it against that unit and carry on with the siblings.
"""

from __future__ import annotations


class HistoryImportError(RuntimeError):
    """Base class for per-file import failures."""

    def __init__(self, message: str, *, file_name: str | None = None) -> None:
        super().__init__(message)
        self.file_name = file_name


class CorruptArchiveError(HistoryImportError):
    """Raised when an uploaded archive cannot be decompressed."""


class SchemaError(HistoryImportError):
    """Raised when a data file does not match the export format."""


class StorageError(HistoryImportError):
    """Raised when reading or writing play records fails.

    Nothing is committed for the affected file, so retrying it in full is safe.
    """
