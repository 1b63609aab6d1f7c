"""Pydantic models for the extended streaming history export format."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime (naive means UTC)."""

    normalized = value.strip()
    if normalized.endswith("Z"):
        normalized = normalized[:-1] + "+00:00"
    dt = datetime.fromisoformat(normalized)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


class ExportBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", strict=True, populate_by_name=True, frozen=True)


class StreamingHistoryEntry(ExportBaseModel):
    """One row of a ``Streaming_History_Audio_*.json`` file.

    ``ts`` and ``ms_played`` are required and strictly typed. Metadata fields
    may be null or missing but must have the right type when present.
    """

    ts: datetime
    ms_played: int = Field(ge=0)

    track_name: str | None = Field(default=None, alias="master_metadata_track_name")
    artist_name: str | None = Field(default=None, alias="master_metadata_album_artist_name")
    album_name: str | None = Field(default=None, alias="master_metadata_album_album_name")
    track_uri: str | None = Field(default=None, alias="spotify_track_uri")

    reason_start: str | None = None
    reason_end: str | None = None
    skipped: bool | None = None
    platform: str | None = None
    shuffle: bool | None = None
    offline: bool | None = None
    conn_country: str | None = None

    @field_validator("ts", mode="before")
    @classmethod
    def _parse_ts(cls, value: object) -> datetime:
        if not isinstance(value, str):
            raise ValueError("ts must be an ISO-8601 string")  # noqa: TRY004
        return parse_timestamp(value)


StreamingHistory = TypeAdapter(list[StreamingHistoryEntry])
