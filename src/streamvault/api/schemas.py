"""Response models for the import endpoints.

Field names are snake_case in Python and camelCase on the wire. Successful
responses are wrapped in ``{"data": ...}``.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from streamvault.domain.model import (
    AggregateImportResult,
    FileOutcome,
    FileState,
    ImportResult,
    ImportStatus,
    SkipReasons,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class SkipReasonsBody(CamelModel):
    too_short: int
    no_track_name: int
    no_spotify_uri: int
    no_artist_name: int

    @classmethod
    def from_domain(cls, reasons: SkipReasons) -> SkipReasonsBody:
        return cls(
            too_short=reasons.too_short,
            no_track_name=reasons.no_track_name,
            no_spotify_uri=reasons.no_spotify_uri,
            no_artist_name=reasons.no_artist_name,
        )


class ImportResultBody(CamelModel):
    total: int
    imported: int
    skipped: int
    skip_reasons: SkipReasonsBody
    duplicates: int

    @classmethod
    def from_domain(cls, result: ImportResult) -> ImportResultBody:
        return cls(
            total=result.total,
            imported=result.imported,
            skipped=result.skipped,
            skip_reasons=SkipReasonsBody.from_domain(result.skip_reasons),
            duplicates=result.duplicates,
        )


class FileOutcomeBody(CamelModel):
    file_name: str
    state: FileState
    result: ImportResultBody | None = None
    error: str | None = None

    @classmethod
    def from_domain(cls, outcome: FileOutcome) -> FileOutcomeBody:
        return cls(
            file_name=outcome.file_name,
            state=outcome.state,
            result=ImportResultBody.from_domain(outcome.result) if outcome.result else None,
            error=str(outcome.error) if outcome.error else None,
        )


class BatchImportBody(CamelModel):
    files: list[FileOutcomeBody]
    totals: ImportResultBody
    cancelled: bool = False

    @classmethod
    def from_domain(cls, aggregate: AggregateImportResult) -> BatchImportBody:
        return cls(
            files=[FileOutcomeBody.from_domain(outcome) for outcome in aggregate.outcomes],
            totals=ImportResultBody.from_domain(aggregate.totals),
            cancelled=aggregate.cancelled,
        )


class DateRangeBody(CamelModel):
    from_: datetime = Field(alias="from")
    to: datetime


class ImportStatusBody(CamelModel):
    has_data: bool
    total_tracks: int
    date_range: DateRangeBody | None = None

    @classmethod
    def from_domain(cls, status: ImportStatus) -> ImportStatusBody:
        date_range = None
        if status.date_range is not None:
            date_range = DateRangeBody(
                from_=status.date_range.earliest, to=status.date_range.latest
            )
        return cls(
            has_data=status.has_data,
            total_tracks=status.total_tracks,
            date_range=date_range,
        )


class DeletedBody(CamelModel):
    deleted: int


class ImportResultResponse(BaseModel):
    data: ImportResultBody


class BatchImportResponse(BaseModel):
    data: BatchImportBody


class ImportStatusResponse(BaseModel):
    data: ImportStatusBody


class DeletedResponse(BaseModel):
    data: DeletedBody


class ErrorResponse(BaseModel):
    error: str
