"""Persistence phase: one transaction per file."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from streamvault.domain.ingest_pipeline.orchestrator import PipelinePhase
from streamvault.domain.model import FileState, PlayRecord

if TYPE_CHECKING:
    from streamvault.domain.ingest_pipeline.context import PipelineContext

log = logging.getLogger(__name__)


class PersistencePhase(PipelinePhase):
    """Insert the file's new records and commit them together.

    Rows a concurrent import stored between the lookup and the insert are
    ignored by the repository and counted as duplicates here.
    """

    name: str = "persistence"
    state: FileState = FileState.PERSISTING

    def run(self, context: PipelineContext) -> None:
        uow = context.require_uow()
        records = [PlayRecord.from_countable(entry) for entry in context.new_entries]
        inserted = 0
        if records:
            inserted = uow.repositories.play_records.add_many(
                records, chunk_size=context.insert_chunk_size
            )
        uow.commit()

        lost = len(records) - inserted
        if lost:
            log.info(
                "%s: %s rows were stored concurrently, counted as duplicates",
                context.file_name,
                lost,
            )
        context.imported = inserted
        context.duplicates += lost
