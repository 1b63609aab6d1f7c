"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ImportSource(StrEnum):
    IMPORT = "import"


class SkipReason(StrEnum):
    """Why an entry was excluded; checked in declaration order."""

    TOO_SHORT = "too_short"
    NO_TRACK_NAME = "no_track_name"
    NO_SPOTIFY_URI = "no_spotify_uri"
    NO_ARTIST_NAME = "no_artist_name"


class FileState(StrEnum):
    PENDING = "pending"
    VALIDATING = "validating"
    CLASSIFYING = "classifying"
    DEDUPLICATING = "deduplicating"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"
