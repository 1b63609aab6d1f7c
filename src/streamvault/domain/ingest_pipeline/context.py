"""Shared per-file state for the ingest pipeline."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from streamvault.domain.model import (
    Countable,
    FileState,
    ImportResult,
    RawEntry,
    SkipReason,
)

if TYPE_CHECKING:
    from uuid import UUID

    from streamvault.domain.model import UploadedFile
    from streamvault.domain.ports import HistoryParser, HistoryUnitOfWork

log = logging.getLogger(__name__)

MIN_MS_PLAYED = 30_000
DEFAULT_INSERT_CHUNK_SIZE = 500


@dataclass(slots=True)
class PipelineContext:
    """Mutable context shared across the phases of one file import."""

    user_id: UUID
    upload: UploadedFile
    parser: HistoryParser
    uow: HistoryUnitOfWork | None = None
    min_ms_played: int = MIN_MS_PLAYED
    insert_chunk_size: int = DEFAULT_INSERT_CHUNK_SIZE

    state: FileState = FileState.PENDING
    entries: list[RawEntry] = field(default_factory=list[RawEntry])
    countable: list[Countable] = field(default_factory=list[Countable])
    new_entries: list[Countable] = field(default_factory=list[Countable])
    skip_counts: Counter[SkipReason] = field(default_factory=Counter[SkipReason])
    duplicates: int = 0
    imported: int = 0

    @property
    def file_name(self) -> str:
        return self.upload.name

    def transition(self, state: FileState) -> None:
        log.debug("%s: %s -> %s", self.file_name, self.state, state)
        self.state = state

    def require_uow(self) -> HistoryUnitOfWork:
        if self.uow is None:
            raise RuntimeError("Pipeline phase requires an active unit of work")
        return self.uow

    def result(self) -> ImportResult:
        return ImportResult.from_counts(
            total=len(self.entries),
            imported=self.imported,
            duplicates=self.duplicates,
            skip_counts=self.skip_counts,
        )
