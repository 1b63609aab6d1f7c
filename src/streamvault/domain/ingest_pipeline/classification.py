"""Entry classification: countable listening event or excluded with one reason."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from streamvault.domain.ingest_pipeline.context import MIN_MS_PLAYED
from streamvault.domain.ingest_pipeline.orchestrator import PipelinePhase
from streamvault.domain.model import (
    Countable,
    Excluded,
    FileState,
    IdentityKey,
    SkipReason,
)

if TYPE_CHECKING:
    from uuid import UUID

    from streamvault.domain.ingest_pipeline.context import PipelineContext
    from streamvault.domain.model import ClassifiedEntry, RawEntry

TRACK_URI_PATTERN: Final = re.compile(r"^spotify:track:([a-zA-Z0-9]+)$")


def extract_track_id(uri: str) -> str | None:
    """Return the id part of a ``spotify:track:<id>`` URI, or None for other content."""

    match = TRACK_URI_PATTERN.match(uri)
    return match.group(1) if match else None


def classify_entry(
    entry: RawEntry,
    *,
    user_id: UUID,
    min_ms_played: int = MIN_MS_PLAYED,
) -> ClassifiedEntry:
    """Classify ``entry``; the first failing rule decides the skip reason."""

    if entry.ms_played < min_ms_played:
        return Excluded(SkipReason.TOO_SHORT, entry)
    if not entry.track_name:
        return Excluded(SkipReason.NO_TRACK_NAME, entry)
    track_id = extract_track_id(entry.track_uri) if entry.track_uri else None
    if track_id is None:
        return Excluded(SkipReason.NO_SPOTIFY_URI, entry)
    if not entry.artist_name:
        return Excluded(SkipReason.NO_ARTIST_NAME, entry)

    return Countable(
        key=IdentityKey(user_id=user_id, track_id=track_id, played_at=entry.timestamp),
        track_name=entry.track_name,
        artist_name=entry.artist_name,
        entry=entry,
    )


class ClassificationPhase(PipelinePhase):
    name: str = "classification"
    state: FileState = FileState.CLASSIFYING

    def run(self, context: PipelineContext) -> None:
        for entry in context.entries:
            classified = classify_entry(
                entry,
                user_id=context.user_id,
                min_ms_played=context.min_ms_played,
            )
            if isinstance(classified, Excluded):
                context.skip_counts[classified.reason] += 1
            else:
                context.countable.append(classified)
