"""Durable listening events."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from streamvault.domain.model.entries import IdentityKey
from streamvault.domain.model.enums import ImportSource

if TYPE_CHECKING:
    from datetime import datetime

    from streamvault.domain.model.entries import Countable


def new_id() -> UUID:
    return uuid4()


@dataclass(eq=False, kw_only=True)
class PlayRecord:
    """One confirmed listening event, unique per ``(user_id, track_id, played_at)``.

    Records are created by the import pipeline and never mutated afterwards;
    erasure is the only way they leave storage.
    """

    id: UUID = field(default_factory=new_id)

    user_id: UUID
    track_id: str
    played_at: datetime

    track_name: str
    artist_name: str
    album_name: str | None = None
    ms_played: int
    source: ImportSource = ImportSource.IMPORT

    reason_start: str | None = None
    reason_end: str | None = None
    skipped: bool | None = None
    platform: str | None = None
    shuffle: bool | None = None
    offline: bool | None = None
    conn_country: str | None = None

    @property
    def identity_key(self) -> IdentityKey:
        return IdentityKey(user_id=self.user_id, track_id=self.track_id, played_at=self.played_at)

    @classmethod
    def from_countable(cls, countable: Countable) -> PlayRecord:
        entry = countable.entry
        return cls(
            user_id=countable.key.user_id,
            track_id=countable.key.track_id,
            played_at=countable.key.played_at,
            track_name=countable.track_name,
            artist_name=countable.artist_name,
            album_name=entry.album_name,
            ms_played=entry.ms_played,
            reason_start=entry.reason_start,
            reason_end=entry.reason_end,
            skipped=entry.skipped,
            platform=entry.platform,
            shuffle=entry.shuffle,
            offline=entry.offline,
            conn_country=entry.conn_country,
        )
