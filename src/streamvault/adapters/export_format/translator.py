"""Translate export payloads into domain entries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from streamvault.domain.model import RawEntry

if TYPE_CHECKING:
    from .schema import StreamingHistoryEntry


def translate_entry(entry: StreamingHistoryEntry) -> RawEntry:
    return RawEntry(
        timestamp=entry.ts,
        ms_played=entry.ms_played,
        track_name=entry.track_name,
        artist_name=entry.artist_name,
        album_name=entry.album_name,
        track_uri=entry.track_uri,
        reason_start=entry.reason_start,
        reason_end=entry.reason_end,
        skipped=entry.skipped,
        platform=entry.platform,
        shuffle=entry.shuffle,
        offline=entry.offline,
        conn_country=entry.conn_country,
    )
