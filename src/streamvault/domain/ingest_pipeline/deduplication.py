"""Deduplication against storage and within the current file."""

from __future__ import annotations

from typing import TYPE_CHECKING

from streamvault.domain.ingest_pipeline.orchestrator import PipelinePhase
from streamvault.domain.model import FileState

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from streamvault.domain.ingest_pipeline.context import PipelineContext
    from streamvault.domain.model import Countable, IdentityKey
    from streamvault.domain.ports import PlayRecordRepository


def partition_new(
    entries: Sequence[Countable],
    *,
    user_id: UUID,
    repository: PlayRecordRepository,
) -> tuple[list[Countable], list[Countable]]:
    """Split ``entries`` into ``(new, duplicate)`` with one batched storage lookup.

    Within ``entries`` the first occurrence of a key stays new unless it is
    already stored; later occurrences are duplicates.
    """

    if not entries:
        return [], []

    stored = repository.existing_keys(user_id, {entry.key for entry in entries})
    seen: set[IdentityKey] = set()
    fresh: list[Countable] = []
    duplicates: list[Countable] = []
    for entry in entries:
        if entry.key in stored or entry.key in seen:
            duplicates.append(entry)
            continue
        seen.add(entry.key)
        fresh.append(entry)
    return fresh, duplicates


class DeduplicationPhase(PipelinePhase):
    name: str = "deduplication"
    state: FileState = FileState.DEDUPLICATING

    def run(self, context: PipelineContext) -> None:
        repository = context.require_uow().repositories.play_records
        fresh, duplicates = partition_new(
            context.countable,
            user_id=context.user_id,
            repository=repository,
        )
        context.new_entries = fresh
        context.duplicates += len(duplicates)
