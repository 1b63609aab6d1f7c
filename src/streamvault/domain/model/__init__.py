"""Public domain model surface."""

from __future__ import annotations

from streamvault.domain.model.entries import (
    ClassifiedEntry,
    Countable,
    Excluded,
    IdentityKey,
    RawEntry,
    UploadedFile,
)
from streamvault.domain.model.enums import FileState, ImportSource, SkipReason
from streamvault.domain.model.records import PlayRecord
from streamvault.domain.model.results import (
    AggregateImportResult,
    DateRange,
    FileOutcome,
    ImportResult,
    ImportStatus,
    SkipReasons,
)

__all__ = [  # noqa: RUF022
    # ingest values
    "UploadedFile",
    "RawEntry",
    "IdentityKey",
    "Countable",
    "Excluded",
    "ClassifiedEntry",
    # records
    "PlayRecord",
    # results
    "SkipReasons",
    "ImportResult",
    "FileOutcome",
    "AggregateImportResult",
    "DateRange",
    "ImportStatus",
    # enums
    "FileState",
    "ImportSource",
    "SkipReason",
]
