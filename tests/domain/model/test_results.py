from __future__ import annotations

from collections import Counter

import pytest

from streamvault.domain.errors import SchemaError
from streamvault.domain.model import (
    AggregateImportResult,
    FileOutcome,
    FileState,
    ImportResult,
    SkipReason,
    SkipReasons,
)


def test_import_result_rejects_inconsistent_counts() -> None:
    with pytest.raises(ValueError, match="Inconsistent"):
        ImportResult(total=3, imported=1, duplicates=1)


def test_import_result_rejects_negative_counts() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        ImportResult(total=0, imported=-1, duplicates=1)


def test_import_result_from_counts() -> None:
    result = ImportResult.from_counts(
        total=6,
        imported=2,
        duplicates=1,
        skip_counts=Counter({SkipReason.TOO_SHORT: 2, SkipReason.NO_ARTIST_NAME: 1}),
    )

    assert result.skipped == 3
    assert result.skip_reasons == SkipReasons(too_short=2, no_artist_name=1)
    assert result.skip_reasons.no_track_name == 0


def test_aggregate_totals_only_include_successful_files() -> None:
    first = ImportResult(total=3, imported=2, skip_reasons=SkipReasons(too_short=1))
    second = ImportResult(total=2, imported=0, duplicates=2)
    aggregate = AggregateImportResult.from_outcomes(
        [
            FileOutcome.done("a.json", first),
            FileOutcome.failed("b.json", SchemaError("bad", file_name="b.json")),
            FileOutcome.done("c.json", second),
        ]
    )

    totals = aggregate.totals
    assert totals == ImportResult(
        total=5, imported=2, skip_reasons=SkipReasons(too_short=1), duplicates=2
    )
    assert [outcome.file_name for outcome in aggregate.errors] == ["b.json"]
    assert [outcome.state for outcome in aggregate.succeeded] == [FileState.DONE, FileState.DONE]


def test_empty_aggregate() -> None:
    aggregate = AggregateImportResult()

    assert aggregate.totals == ImportResult()
    assert aggregate.errors == ()
    assert aggregate.cancelled is False
