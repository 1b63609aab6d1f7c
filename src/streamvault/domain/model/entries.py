"""Ephemeral values that flow through a single file import.

``RawEntry`` mirrors one row of the export format after schema validation and
``Countable``/``Excluded`` are the two outcomes of classifying it. None of
these are persisted as-is.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

    from streamvault.domain.model.enums import SkipReason


@dataclass(frozen=True, slots=True)
class UploadedFile:
    """One unit of an upload: a data file or an archive of data files."""

    name: str
    content: bytes = b""


@dataclass(frozen=True, slots=True, kw_only=True)
class RawEntry:
    """A schema-valid export row.

    ``timestamp`` and ``ms_played`` are always present. Every metadata field
    is independently optional because non-music content (podcasts, local
    files) carries no catalog metadata.
    """

    timestamp: datetime
    ms_played: int

    track_name: str | None = None
    artist_name: str | None = None
    album_name: str | None = None
    track_uri: str | None = None

    # Descriptive only, never used for classification.
    reason_start: str | None = None
    reason_end: str | None = None
    skipped: bool | None = None
    platform: str | None = None
    shuffle: bool | None = None
    offline: bool | None = None
    conn_country: str | None = None


@dataclass(frozen=True, slots=True)
class IdentityKey:
    """Uniqueness basis for play records."""

    user_id: UUID
    track_id: str
    played_at: datetime


@dataclass(frozen=True, slots=True)
class Countable:
    key: IdentityKey
    track_name: str
    artist_name: str
    entry: RawEntry

    @property
    def album_name(self) -> str | None:
        return self.entry.album_name

    @property
    def ms_played(self) -> int:
        return self.entry.ms_played


@dataclass(frozen=True, slots=True)
class Excluded:
    reason: SkipReason
    entry: RawEntry


type ClassifiedEntry = Countable | Excluded
