"""Value objects reported back to callers of the import services."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from streamvault.domain.model.enums import FileState, SkipReason

if TYPE_CHECKING:
    from collections import Counter
    from collections.abc import Iterable, Mapping
    from datetime import datetime

    from streamvault.domain.errors import HistoryImportError


@dataclass(frozen=True, slots=True)
class SkipReasons:
    too_short: int = 0
    no_track_name: int = 0
    no_spotify_uri: int = 0
    no_artist_name: int = 0

    @classmethod
    def from_counts(cls, counts: Mapping[SkipReason, int]) -> SkipReasons:
        return cls(
            too_short=counts.get(SkipReason.TOO_SHORT, 0),
            no_track_name=counts.get(SkipReason.NO_TRACK_NAME, 0),
            no_spotify_uri=counts.get(SkipReason.NO_SPOTIFY_URI, 0),
            no_artist_name=counts.get(SkipReason.NO_ARTIST_NAME, 0),
        )

    @property
    def total(self) -> int:
        return self.too_short + self.no_track_name + self.no_spotify_uri + self.no_artist_name

    def __add__(self, other: SkipReasons) -> SkipReasons:
        return SkipReasons(
            too_short=self.too_short + other.too_short,
            no_track_name=self.no_track_name + other.no_track_name,
            no_spotify_uri=self.no_spotify_uri + other.no_spotify_uri,
            no_artist_name=self.no_artist_name + other.no_artist_name,
        )


@dataclass(frozen=True, slots=True)
class ImportResult:
    """Counts for one file, or the sum over a batch.

    Always satisfies ``total == imported + skipped + duplicates``.
    """

    total: int = 0
    imported: int = 0
    skip_reasons: SkipReasons = field(default_factory=SkipReasons)
    duplicates: int = 0

    def __post_init__(self) -> None:
        if min(self.total, self.imported, self.duplicates) < 0:
            raise ValueError(f"Import counts must be non-negative: {self}")
        if self.total != self.imported + self.skipped + self.duplicates:
            raise ValueError(
                f"Inconsistent import result: total={self.total} != imported={self.imported}"
                f" + skipped={self.skipped} + duplicates={self.duplicates}"
            )

    @property
    def skipped(self) -> int:
        return self.skip_reasons.total

    @classmethod
    def from_counts(
        cls,
        *,
        total: int,
        imported: int,
        duplicates: int,
        skip_counts: Counter[SkipReason],
    ) -> ImportResult:
        return cls(
            total=total,
            imported=imported,
            skip_reasons=SkipReasons.from_counts(skip_counts),
            duplicates=duplicates,
        )

    def __add__(self, other: ImportResult) -> ImportResult:
        return ImportResult(
            total=self.total + other.total,
            imported=self.imported + other.imported,
            skip_reasons=self.skip_reasons + other.skip_reasons,
            duplicates=self.duplicates + other.duplicates,
        )


@dataclass(frozen=True, slots=True)
class FileOutcome:
    """Terminal state of one file in a batch: either a result or an error."""

    file_name: str
    state: FileState
    result: ImportResult | None = None
    error: HistoryImportError | None = None

    @property
    def succeeded(self) -> bool:
        return self.state is FileState.DONE

    @classmethod
    def done(cls, file_name: str, result: ImportResult) -> FileOutcome:
        return cls(file_name=file_name, state=FileState.DONE, result=result)

    @classmethod
    def failed(cls, file_name: str, error: HistoryImportError) -> FileOutcome:
        return cls(file_name=file_name, state=FileState.FAILED, error=error)


@dataclass(frozen=True, slots=True)
class AggregateImportResult:
    """Batch summary folded from per-file outcomes.

    ``totals`` only reflects files that succeeded; failures are listed
    separately through ``errors``.
    """

    outcomes: tuple[FileOutcome, ...] = ()
    cancelled: bool = False

    @classmethod
    def from_outcomes(
        cls, outcomes: Iterable[FileOutcome], *, cancelled: bool = False
    ) -> AggregateImportResult:
        return cls(outcomes=tuple(outcomes), cancelled=cancelled)

    @property
    def totals(self) -> ImportResult:
        totals = ImportResult()
        for outcome in self.outcomes:
            if outcome.result is not None:
                totals += outcome.result
        return totals

    @property
    def errors(self) -> tuple[FileOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if not outcome.succeeded)

    @property
    def succeeded(self) -> tuple[FileOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if outcome.succeeded)


@dataclass(frozen=True, slots=True)
class DateRange:
    earliest: datetime
    latest: datetime


@dataclass(frozen=True, slots=True)
class ImportStatus:
    has_data: bool = False
    total_tracks: int = 0
    date_range: DateRange | None = None
